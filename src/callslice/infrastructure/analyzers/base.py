"""Base utilities for AST analyzers."""

from __future__ import annotations

import ast
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

# Method names treated as constructors (always kept when slicing)
CONSTRUCTOR_NAMES = frozenset({"__init__", "__new__", "__post_init__"})

FunctionNode = ast.FunctionDef | ast.AsyncFunctionDef


def compute_module_name(file_path: Path, root_path: Path) -> str | None:
    """Compute fully qualified module name from file path.

    Args:
        file_path: Path to .py file
        root_path: Source root the module name is relative to

    Returns:
        Fully qualified module name, None if file is not under root
        or a path part is not a valid identifier
    """
    try:
        relative = file_path.relative_to(root_path)
    except ValueError:
        return None

    parts = list(relative.with_suffix("").parts)

    if parts and parts[-1] == "__init__":
        parts = parts[:-1]

    if not parts or not all(part.isidentifier() for part in parts):
        return None

    return ".".join(parts)


def is_package_init(file_path: Path) -> bool:
    """Whether file is a package __init__ module."""
    return file_path.name == "__init__.py"


def resolve_relative_import(
    node_module: str | None,
    node_level: int,
    current_module: str,
    *,
    is_package: bool = False,
) -> str:
    """Resolve relative import to absolute module path.

    Args:
        node_module: Module part of import (after dots)
        node_level: Number of dots (0=absolute, 1=., 2=..)
        current_module: Current module's fully qualified name
        is_package: Current module is a package __init__ (its own package
            is the anchor for level 1)

    Returns:
        Absolute module path

    Raises:
        ValueError: If relative import escapes package (FAIL-FIRST)
    """
    if node_level == 0:
        if node_module is None:
            raise ValueError("absolute import must have module")
        return node_module

    parts = current_module.split(".")
    if is_package:
        parts.append("__init__")

    if node_level >= len(parts):
        raise ValueError(
            f"relative import level {node_level} exceeds package depth of module '{current_module}'"
        )

    base_parts = parts[:-node_level]

    if node_module:
        return ".".join([*base_parts, node_module])

    if not base_parts:
        raise ValueError(f"relative import results in empty module from '{current_module}'")

    return ".".join(base_parts)


# =============================================================================
# SHALLOW WALK - Functional approach to single-scope AST traversal
# =============================================================================


def shallow_walk(body: Iterable[ast.AST]) -> Iterator[ast.AST]:
    """Walk AST nodes in body without entering nested scopes.

    Yields all nodes in the body, but stops at scope boundaries:
    - FunctionDef, AsyncFunctionDef (yields node, not children)
    - ClassDef (yields node, not children)
    - Lambda (yields node, not children)

    Args:
        body: List of statements to traverse

    Yields:
        AST nodes in depth-first source order, excluding nested scope internals
    """
    stack: list[ast.AST] = list(reversed(list(body)))

    while stack:
        node = stack.pop()
        yield node

        match node:
            # Scope boundaries - yield node but don't traverse children
            case ast.FunctionDef() | ast.AsyncFunctionDef() | ast.ClassDef() | ast.Lambda():
                pass
            case _:
                # Add children in reverse order to maintain depth-first order
                stack.extend(reversed(list(ast.iter_child_nodes(node))))


# =============================================================================
# ALGORITHMS - Pure functions using pattern matching
# =============================================================================


def iter_methods(class_node: ast.ClassDef) -> Iterator[FunctionNode]:
    """Yield methods defined directly in class body."""
    for stmt in class_node.body:
        if isinstance(stmt, ast.FunctionDef | ast.AsyncFunctionDef):
            yield stmt


def find_method(class_node: ast.ClassDef, name: str) -> FunctionNode | None:
    """Find method by name in class body (last definition wins, like Python)."""
    found: FunctionNode | None = None
    for method in iter_methods(class_node):
        if method.name == name:
            found = method
    return found


def iter_classes(tree: ast.Module) -> Iterator[ast.ClassDef]:
    """Yield every class definition in module, nested ones included."""
    for node in ast.walk(tree):
        if isinstance(node, ast.ClassDef):
            yield node


def decorator_name(decorator: ast.expr) -> str:
    """Dotted name of decorator without call arguments.

    "@dataclass(frozen=True)" → "dataclass", "@x.setter" → "x.setter"
    """
    if isinstance(decorator, ast.Call):
        decorator = decorator.func
    return ast.unparse(decorator)


def has_decorator(
    decorators: list[ast.expr],
    name: str,
) -> bool:
    """Check if decorator list contains decorator with given name.

    Matches both bare and qualified forms ("final", "typing.final").

    Args:
        decorators: List of decorator expressions
        name: Decorator name to find

    Returns:
        True if decorator found
    """
    for dec in decorators:
        if isinstance(dec, ast.Call):
            dec = dec.func
        if isinstance(dec, ast.Name) and dec.id == name:
            return True
        if isinstance(dec, ast.Attribute) and dec.attr == name:
            return True
    return False


def strip_docstring(body: list[ast.stmt]) -> list[ast.stmt]:
    """Return body without leading docstring expression."""
    match body:
        case [ast.Expr(value=ast.Constant(value=str())), *rest]:
            return rest
    return body

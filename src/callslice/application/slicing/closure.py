"""Helper closure: members reachable through self/cls and local function calls."""

from __future__ import annotations

import ast
from collections.abc import Iterable

from callslice.infrastructure.analyzers.base import FunctionNode, iter_classes, iter_methods


def expand_members(root: ast.Module, members: Iterable[str]) -> frozenset[str]:
    """Close member set over intra-file helper references.

    Repeats until no new name appears: for every member in the set,
    scan each method of that name (in any class of the file) and the
    module-level function of that name for
    - self.x / cls.x where x is a method defined in the file
    - bare calls f() where f is a module-level function of the file

    Args:
        root: Module to scan (not modified)
        members: Initial member names

    Returns:
        Closed set (superset of members)
    """
    bodies: dict[str, list[FunctionNode]] = {}
    method_names: set[str] = set()
    for class_node in iter_classes(root):
        for method in iter_methods(class_node):
            bodies.setdefault(method.name, []).append(method)
            method_names.add(method.name)

    function_names: set[str] = set()
    for stmt in root.body:
        if isinstance(stmt, ast.FunctionDef | ast.AsyncFunctionDef):
            bodies.setdefault(stmt.name, []).append(stmt)
            function_names.add(stmt.name)

    closed = set(members)
    pending = list(closed)
    while pending:
        name = pending.pop()
        for body in bodies.get(name, ()):
            for found in _helper_references(body, method_names, function_names):
                if found not in closed:
                    closed.add(found)
                    pending.append(found)
    return frozenset(closed)


def _helper_references(
    function: FunctionNode,
    method_names: set[str],
    function_names: set[str],
) -> set[str]:
    found: set[str] = set()
    for node in ast.walk(function):
        match node:
            case ast.Attribute(value=ast.Name(id="self" | "cls"), attr=attr) if attr in method_names:
                found.add(attr)
            case ast.Call(func=ast.Name(id=name)) if name in function_names:
                found.add(name)
    return found

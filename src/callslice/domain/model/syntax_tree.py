"""Parsed, name-resolved source file."""

from __future__ import annotations

import ast
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

# Attribute stamped on ast nodes by the name resolver
FQN_ATTR = "fqn"


def fqn_of(node: ast.AST) -> str | None:
    """Fully-qualified name stamped on node by the name resolver, if any."""
    return getattr(node, FQN_ATTR, None)


@dataclass(frozen=True, slots=True)
class SyntaxTree:
    """Immutable parsed + name-resolved representation of one file.

    Owned by the parse cache, keyed by canonical path. Consumers that
    rewrite trees work on deep copies (copy.deepcopy keeps stamped FQNs).

    Attributes:
        path: Canonical absolute path
        module_name: Dotted module name computed from source roots
        root: Parsed module; Name/Attribute/ClassDef/FunctionDef nodes carry FQNs
        symbols: Local name → fully-qualified name (imports + own definitions)
    """

    path: Path
    module_name: str
    root: ast.Module
    symbols: Mapping[str, str]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.path is None:
            raise TypeError("path must not be None")
        if not self.module_name:
            raise ValueError("module_name must not be empty")
        if not isinstance(self.root, ast.Module):
            raise TypeError(f"root must be ast.Module, got {type(self.root).__name__}")
        if not isinstance(self.symbols, MappingProxyType):
            object.__setattr__(self, "symbols", MappingProxyType(dict(self.symbols)))

    def resolve(self, name: str) -> str | None:
        """Resolve a dotted name written in this module to its FQN.

        Used for names that live outside the tree (type comments,
        string annotations).

        Args:
            name: Name as written (may include dots: "models.User")

        Returns:
            FQN, or None when the first segment is not bound in this module
        """
        if not name:
            raise ValueError("name must not be empty")
        if name in self.symbols:
            return self.symbols[name]
        first, sep, rest = name.partition(".")
        if sep and first in self.symbols:
            return f"{self.symbols[first]}.{rest}"
        return None

    def find_class(self, fqn: str) -> ast.ClassDef | None:
        """Find class definition (possibly nested) by FQN."""
        for node in ast.walk(self.root):
            if isinstance(node, ast.ClassDef) and fqn_of(node) == fqn:
                return node
        return None

    def find_function(self, fqn: str) -> ast.FunctionDef | ast.AsyncFunctionDef | None:
        """Find module-level function definition by FQN."""
        for node in self.root.body:
            if isinstance(node, ast.FunctionDef | ast.AsyncFunctionDef) and fqn_of(node) == fqn:
                return node
        return None

    def defines(self, fqn: str) -> bool:
        """Whether this module defines a class or module-level function with FQN."""
        return self.find_class(fqn) is not None or self.find_function(fqn) is not None

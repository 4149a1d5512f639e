"""Per-file slice produced by the code slicer."""

from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class Slice:
    """Filtered copy of one file's tree.

    Attributes:
        path: Canonical path of the source file
        module_name: Dotted module name
        tree: Filtered, cleaned deep copy of the module
        members: Closed set of member names that were kept
    """

    path: Path
    module_name: str
    tree: ast.Module
    members: frozenset[str]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.path is None:
            raise TypeError("path must not be None")
        if not self.module_name:
            raise ValueError("module_name must not be empty")
        if not isinstance(self.tree, ast.Module):
            raise TypeError("tree must be ast.Module")

    @property
    def class_names(self) -> tuple[str, ...]:
        """Names of top-level classes kept in the slice."""
        return tuple(node.name for node in self.tree.body if isinstance(node, ast.ClassDef))

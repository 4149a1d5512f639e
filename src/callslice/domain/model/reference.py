"""Reference: one node of the materialized call tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from callslice.domain.model.call_kind import CallKind

if TYPE_CHECKING:
    from pathlib import Path


def member_key(class_name: str | None, member_name: str | None) -> str:
    """Build the identity key used for visited sets and parent links.

    - class member: "pkg.mod.Class::method"
    - free function: "pkg.mod.function" (member carries the FQN)
    - parameter type: "pkg.mod.Class"
    """
    if class_name is None:
        if not member_name:
            raise ValueError("member_name required when class_name is None")
        return member_name
    if member_name is None:
        return class_name
    return f"{class_name}::{member_name}"


@dataclass(slots=True)
class Reference:
    """Materialized graph node for one resolved call edge.

    Append-only: children grow, nothing else changes after creation.
    The parent link is a non-owning key, never an object reference.

    Attributes:
        fully_qualified_name: Dotted name ("pkg.mod.Class.method",
            "pkg.mod.function" or "pkg.mod.Class" for parameter types)
        kind: Kind of edge that produced this node (METHOD_CALL for the root)
        file_path: Canonical path of the file defining the target
        depth: Root = 0, child = parent + 1
        class_name: Class FQN (None for free functions)
        member_name: Method name, bare function name, or None for parameter types
        parent: Key of the parent reference (None for roots)
        children: Child references in discovery order
    """

    fully_qualified_name: str
    kind: CallKind
    file_path: Path
    depth: int = 0
    class_name: str | None = None
    member_name: str | None = None
    parent: str | None = None
    children: list[Reference] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.fully_qualified_name:
            raise ValueError("fully_qualified_name must not be empty")
        if not isinstance(self.kind, CallKind):
            raise TypeError("kind must be CallKind")
        if self.file_path is None:
            raise TypeError("file_path must not be None")
        if self.depth < 0:
            raise ValueError(f"depth must be >= 0, got {self.depth}")
        if self.depth == 0 and self.parent is not None:
            raise ValueError("root reference (depth 0) must not have a parent")
        if self.depth > 0 and self.parent is None:
            raise ValueError("non-root reference requires a parent key")

    @property
    def key(self) -> str:
        """Identity key (see member_key)."""
        if self.class_name is None:
            return self.fully_qualified_name
        if self.kind is CallKind.PARAMETER_TYPE:
            return self.class_name
        return member_key(self.class_name, self.member_name)

    @property
    def is_leaf_kind(self) -> bool:
        """Parameter-type references are never expanded."""
        return not self.kind.is_recursable

    def add_child(self, child: Reference) -> None:
        """Append child. Enforces depth and parent-key invariants.

        Raises:
            ValueError: If child depth or parent key do not match this node,
                or if this node is a parameter-type leaf
        """
        if self.is_leaf_kind:
            raise ValueError(f"parameter type reference {self.key} cannot have children")
        if child.depth != self.depth + 1:
            raise ValueError(f"child depth must be {self.depth + 1}, got {child.depth}")
        if child.parent != self.key:
            raise ValueError(f"child parent must be '{self.key}', got '{child.parent}'")
        self.children.append(child)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict (recursive)."""
        return {
            "fully_qualified_name": self.fully_qualified_name,
            "kind": self.kind.value,
            "file_path": str(self.file_path),
            "depth": self.depth,
            "class_name": self.class_name,
            "member_name": self.member_name,
            "children": [child.to_dict() for child in self.children],
        }

    def __str__(self) -> str:
        return f"{self.fully_qualified_name} ({self.kind.value}, depth {self.depth})"

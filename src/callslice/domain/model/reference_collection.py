"""Reference collection: roots plus derived views."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from callslice.domain.model.reference import Reference


@dataclass(slots=True)
class ReferenceCollection:
    """Traversal output: zero or more root references.

    Derived views are computed on demand by an explicit-stack walk
    (pre-order, children in discovery order). No recursion.

    Attributes:
        _roots: Root references
    """

    _roots: list[Reference] = field(default_factory=list)

    def add(self, reference: Reference) -> None:
        """Add root reference.

        Raises:
            ValueError: If reference is not a root (depth != 0)
        """
        if reference.depth != 0:
            raise ValueError(f"root reference must have depth 0, got {reference.depth}")
        self._roots.append(reference)

    @property
    def roots(self) -> tuple[Reference, ...]:
        """Root references in insertion order."""
        return tuple(self._roots)

    def __iter__(self) -> Iterator[Reference]:
        return iter(self._roots)

    def __len__(self) -> int:
        return len(self._roots)

    @property
    def is_empty(self) -> bool:
        return len(self._roots) == 0

    def iter_references(self) -> Iterator[Reference]:
        """Yield every reference, pre-order, depth-first."""
        stack: list[Reference] = list(reversed(self._roots))
        while stack:
            reference = stack.pop()
            yield reference
            stack.extend(reversed(reference.children))

    @property
    def size(self) -> int:
        """Total number of references in all trees."""
        return sum(1 for _ in self.iter_references())

    @property
    def max_depth(self) -> int:
        """Deepest reference depth (0 for empty collection)."""
        return max((ref.depth for ref in self.iter_references()), default=0)

    def unique_file_paths(self) -> tuple[Path, ...]:
        """Distinct file paths in first-seen (pre-order) order."""
        seen: dict[Path, None] = {}
        for reference in self.iter_references():
            seen.setdefault(reference.file_path, None)
        return tuple(seen)

    def members_per_file(self) -> dict[Path, frozenset[str]]:
        """Map file path → member names referenced in that file.

        Files reached only through parameter types map to an empty set,
        so their declarations are still sliced.
        """
        members: dict[Path, set[str]] = {}
        for reference in self.iter_references():
            names = members.setdefault(reference.file_path, set())
            if reference.member_name is not None:
                names.add(reference.member_name)
        return {path: frozenset(names) for path, names in members.items()}

    def find(self, key: str) -> tuple[Reference, ...]:
        """All references with the given key, pre-order."""
        return tuple(ref for ref in self.iter_references() if ref.key == key)

    def ancestry(self, target: Reference) -> tuple[Reference, ...]:
        """Path from root to target (inclusive), reconstructed by walk.

        Returns:
            Tuple root..target, empty if target is not in this collection
        """
        stack: list[tuple[Reference, tuple[Reference, ...]]] = [
            (root, (root,)) for root in reversed(self._roots)
        ]
        while stack:
            reference, path = stack.pop()
            if reference is target:
                return path
            for child in reversed(reference.children):
                stack.append((child, (*path, child)))
        return ()

    def to_dict(self) -> list[dict[str, Any]]:
        """Convert to JSON-serializable list of root dicts."""
        return [root.to_dict() for root in self._roots]

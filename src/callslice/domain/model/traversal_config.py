"""Traversal configuration DTO."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from callslice.domain.model.entry_point import EntryPoint


class RevisitPolicy(Enum):
    """What an edge to an already-visited key produces.

    LEAF: one unexpanded child reference (complete "who calls what" view).
    DROP: nothing.
    """

    LEAF = "leaf"
    DROP = "drop"


@dataclass(frozen=True, slots=True)
class TraversalConfig:
    """Immutable traversal configuration with FAIL-FIRST validation.

    Attributes:
        entry_point: Starting (class, method)
        excluded_paths: Path prefixes relative to project_root
            (e.g. "tests/", "migrations")
        excluded_patterns: Regexes matched against canonical absolute paths
        project_root: Project root directory
        max_depth: Maximum traversal depth. 0 = unlimited.
        revisit_policy: Edge handling for already-visited keys
    """

    entry_point: EntryPoint
    excluded_paths: tuple[str, ...] = ()
    excluded_patterns: tuple[str, ...] = ()
    project_root: Path = field(default_factory=Path.cwd)
    max_depth: int = 0
    revisit_policy: RevisitPolicy = RevisitPolicy.LEAF

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.entry_point is None:
            raise TypeError("entry_point must not be None")
        if isinstance(self.excluded_paths, str):
            raise TypeError("excluded_paths must be a tuple of strings, not a string")
        if isinstance(self.excluded_patterns, str):
            raise TypeError("excluded_patterns must be a tuple of strings, not a string")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        if not isinstance(self.revisit_policy, RevisitPolicy):
            raise TypeError("revisit_policy must be RevisitPolicy")

        # Accept lists/str roots from callers, store canonical forms
        object.__setattr__(self, "excluded_paths", tuple(self.excluded_paths))
        object.__setattr__(self, "excluded_patterns", tuple(self.excluded_patterns))
        object.__setattr__(self, "project_root", Path(self.project_root))

    @property
    def is_depth_limited(self) -> bool:
        """Whether max_depth bounds the traversal."""
        return self.max_depth > 0

"""Result of one slicing run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from callslice.domain.model.artifact import Artifact
    from callslice.domain.model.entry_point import EntryPoint
    from callslice.domain.model.reference_collection import ReferenceCollection


@dataclass(frozen=True, slots=True)
class SliceResult:
    """Reference tree and artifact produced from one entry point.

    Attributes:
        entry_point: Where traversal started
        references: Traversal output (empty when entry is unresolved)
        artifact: Assembled source, None when nothing was reached
        elapsed_s: Wall time of the run in seconds
    """

    entry_point: EntryPoint
    references: ReferenceCollection
    artifact: Artifact | None
    elapsed_s: float = 0.0

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.entry_point is None:
            raise TypeError("entry_point must not be None")
        if self.elapsed_s < 0:
            raise ValueError(f"elapsed_s must be >= 0, got {self.elapsed_s}")
        if self.references.is_empty and self.artifact is not None:
            raise ValueError("artifact requires at least one reference")

    @property
    def resolved(self) -> bool:
        """Whether the entry point was found and traversed."""
        return not self.references.is_empty

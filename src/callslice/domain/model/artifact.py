"""Produced artifact: minimized source plus statistics."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ArtifactStats:
    """Statistics of the produced artifact.

    Attributes:
        file_count: Distinct source files contributing to the artifact
        byte_count: Size of artifact text in UTF-8 bytes
        line_count: Number of lines in artifact text
        cached_tree_count: Files parsed during the run
    """

    file_count: int
    byte_count: int
    line_count: int
    cached_tree_count: int = 0

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        for name in ("file_count", "byte_count", "line_count", "cached_tree_count"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")


@dataclass(frozen=True, slots=True)
class Artifact:
    """One self-contained minimized source text.

    Attributes:
        source: Minimized source (always parseable, starts with the opening line)
        stats: Artifact statistics
    """

    source: str
    stats: ArtifactStats

    @classmethod
    def from_source(cls, source: str, file_count: int, cached_tree_count: int = 0) -> Artifact:
        """Build artifact computing byte/line counts from text."""
        return cls(
            source=source,
            stats=ArtifactStats(
                file_count=file_count,
                byte_count=len(source.encode("utf-8")),
                line_count=len(source.splitlines()),
                cached_tree_count=cached_tree_count,
            ),
        )

"""JSON reporter: SliceResult → JSON string."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from callslice.domain.model.artifact import Artifact
    from callslice.domain.model.slice_result import SliceResult


class JsonReporter:
    """JSON reporter: outputs machine-readable JSON.

    Schema: entry point, reference tree (ReferenceCollection.to_dict),
    distinct files, artifact statistics and optionally its source.
    """

    def __init__(self, *, indent: int | None = 2, include_source: bool = True) -> None:
        """Initialize reporter.

        Args:
            indent: JSON indentation. None for compact output.
            include_source: Embed the artifact source text.
        """
        self._indent = indent
        self._include_source = include_source

    def report(self, result: SliceResult) -> str:
        """Format slice result as JSON string.

        Args:
            result: Slice result to format.

        Returns:
            JSON string.
        """
        data = {
            "entry_point": {
                "class_name": result.entry_point.class_name,
                "method_name": result.entry_point.method_name,
            },
            "resolved": result.resolved,
            "references": result.references.to_dict(),
            "files": [str(path) for path in result.references.unique_file_paths()],
            "artifact": self._artifact_to_dict(result.artifact),
            "elapsed_s": result.elapsed_s,
        }
        return json.dumps(data, indent=self._indent)

    def _artifact_to_dict(self, artifact: Artifact | None) -> dict[str, object] | None:
        if artifact is None:
            return None
        data: dict[str, object] = {
            "file_count": artifact.stats.file_count,
            "byte_count": artifact.stats.byte_count,
            "line_count": artifact.stats.line_count,
            "cached_tree_count": artifact.stats.cached_tree_count,
        }
        if self._include_source:
            data["source"] = artifact.source
        return data

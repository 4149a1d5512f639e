"""Reporter protocol: contract for all reporters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from callslice.domain.model.slice_result import SliceResult


class ReporterProtocol(Protocol):
    """Protocol for slice result reporters.

    Output is str, not print(). Caller decides destination.
    """

    def report(self, result: SliceResult) -> str:
        """Format slice result as string.

        Args:
            result: Slice result to format.

        Returns:
            Formatted string representation.
        """
        ...

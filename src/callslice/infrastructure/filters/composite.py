"""Composite filters: OR composition."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from callslice.infrastructure.filters.types import PathFilter


def any_of(*filters: PathFilter) -> PathFilter:
    """Create filter matching when ANY filter matches (OR).

    Filters are evaluated in order, short-circuiting on first match.

    Args:
        *filters: Filters to compose.

    Returns:
        Filter that returns True if any filter returns True.
        Empty filters = always False.
    """

    def _filter(path: Path) -> bool:
        return any(f(path) for f in filters)

    return _filter

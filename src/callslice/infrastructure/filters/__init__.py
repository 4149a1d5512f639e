"""Infrastructure layer: stateless path filter functions.

Filters are pure functions: PathFilter = Callable[[Path], bool]
True = path matches (excluded from traversal).

Usage:
    from callslice.infrastructure.filters import exclusion_filter

    excluded = exclusion_filter(root, prefixes=["tests/"], patterns=[r"_pb2\\.py$"])
    if excluded(path):
        ...
"""

from callslice.infrastructure.filters.composite import any_of
from callslice.infrastructure.filters.path import (
    VENDOR_DIRECTORIES,
    exclusion_filter,
    in_vendor_directory,
    matching_patterns,
    under_prefixes,
)
from callslice.infrastructure.filters.types import PathFilter

__all__ = [
    "VENDOR_DIRECTORIES",
    "PathFilter",
    "any_of",
    "exclusion_filter",
    "in_vendor_directory",
    "matching_patterns",
    "under_prefixes",
]

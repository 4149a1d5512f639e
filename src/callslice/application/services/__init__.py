"""Application services.

SliceService is the main facade; GraphTraverser builds the reference tree.
"""

from callslice.application.services.slice_service import SliceService
from callslice.application.services.traverser import GraphTraverser

__all__ = [
    "GraphTraverser",
    "SliceService",
]

"""Application layer for call slicing.

Components:
- services: Graph traversal and the slicing pipeline facade (SliceService)
- slicing: Per-file member closure and tree filtering
- assembly: Multi-pass rewrite of slices into one minimized source unit
- reporters: Output formatting (Console, JSON)
"""

from callslice.application.assembly import SourceAssembler
from callslice.application.reporters import ConsoleReporter, JsonReporter
from callslice.application.services import GraphTraverser, SliceService
from callslice.application.slicing import CodeSlicer

__all__ = [
    # Services
    "GraphTraverser",
    "SliceService",
    # Pipeline
    "CodeSlicer",
    "SourceAssembler",
    # Reporters
    "ConsoleReporter",
    "JsonReporter",
]

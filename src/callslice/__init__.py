"""callslice - call-graph slicing of Python codebases into one minimized source file."""

__version__ = "0.1.0"

from callslice.application.services import GraphTraverser, SliceService
from callslice.domain.model import EntryPoint, RevisitPolicy, TraversalConfig
from callslice.infrastructure.resolvers import load_project_config

__all__ = [
    "EntryPoint",
    "GraphTraverser",
    "RevisitPolicy",
    "SliceService",
    "TraversalConfig",
    "__version__",
    "load_project_config",
]

"""callslice domain layer.

Pure domain logic with no external dependencies.
Only imports: typing, abc, ast, dataclasses, enum, pathlib, collections.abc
"""

from callslice.domain.exceptions import (
    CallSliceError,
    ConfigurationError,
    InvalidEntryPointError,
    ParsingError,
)
from callslice.domain.model import (
    Artifact,
    CallEdge,
    CallKind,
    EntryPoint,
    Reference,
    ReferenceCollection,
    RevisitPolicy,
    SliceResult,
    TraversalConfig,
)

__all__ = [
    "Artifact",
    "CallEdge",
    "CallKind",
    "CallSliceError",
    "ConfigurationError",
    "EntryPoint",
    "InvalidEntryPointError",
    "ParsingError",
    "Reference",
    "ReferenceCollection",
    "RevisitPolicy",
    "SliceResult",
    "TraversalConfig",
]

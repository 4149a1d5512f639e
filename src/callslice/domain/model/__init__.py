"""Domain model entities."""

# Output
from callslice.domain.model.artifact import Artifact, ArtifactStats

# Call extraction
from callslice.domain.model.call_edge import CallEdge
from callslice.domain.model.call_kind import CallKind
from callslice.domain.model.code_slice import Slice

# Configuration
from callslice.domain.model.entry_point import EntryPoint
from callslice.domain.model.import_ import Import

# Traversal output
from callslice.domain.model.reference import Reference, member_key
from callslice.domain.model.reference_collection import ReferenceCollection
from callslice.domain.model.slice_result import SliceResult

# Name resolution
from callslice.domain.model.symbol_table import SymbolTable
from callslice.domain.model.syntax_tree import FQN_ATTR, SyntaxTree, fqn_of
from callslice.domain.model.traversal_config import RevisitPolicy, TraversalConfig
from callslice.domain.model.type_environment import ClassTypes, TypeEnvironment

__all__ = [
    "FQN_ATTR",
    "Artifact",
    "ArtifactStats",
    "CallEdge",
    "CallKind",
    "ClassTypes",
    "EntryPoint",
    "Import",
    "Reference",
    "ReferenceCollection",
    "RevisitPolicy",
    "SliceResult",
    "Slice",
    "SymbolTable",
    "SyntaxTree",
    "TraversalConfig",
    "TypeEnvironment",
    "fqn_of",
    "member_key",
]

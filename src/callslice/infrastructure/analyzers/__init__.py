"""AST analyzers: name resolution, type hints and call extraction."""

from callslice.infrastructure.analyzers.base import (
    compute_module_name,
    iter_classes,
    iter_methods,
    resolve_relative_import,
    shallow_walk,
)
from callslice.infrastructure.analyzers.call_extractor import CallExtractor
from callslice.infrastructure.analyzers.import_analyzer import ImportAnalyzer
from callslice.infrastructure.analyzers.name_resolver import NameResolver
from callslice.infrastructure.analyzers.return_types import ReturnTypeResolver
from callslice.infrastructure.analyzers.type_hints import TypeHintResolver, collect_class_types

__all__ = [
    # Base utilities
    "compute_module_name",
    "iter_classes",
    "iter_methods",
    "resolve_relative_import",
    "shallow_walk",
    # Analyzers
    "CallExtractor",
    "ImportAnalyzer",
    "NameResolver",
    "ReturnTypeResolver",
    "TypeHintResolver",
    "collect_class_types",
]

"""Domain ports: interfaces implemented by infrastructure."""

from callslice.domain.ports.class_resolver import ClassResolverPort
from callslice.domain.ports.source_parser import SourceParserPort
from callslice.domain.ports.syntax_tree_provider import SyntaxTreeProviderPort

__all__ = [
    "ClassResolverPort",
    "SourceParserPort",
    "SyntaxTreeProviderPort",
]

"""Infrastructure adapters for external interfaces."""

from callslice.infrastructure.adapters.ast_parser import ASTSourceParser
from callslice.infrastructure.adapters.cached_parser import CachedSyntaxTreeProvider

__all__ = [
    "ASTSourceParser",
    "CachedSyntaxTreeProvider",
]

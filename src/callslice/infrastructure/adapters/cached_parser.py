"""Caching syntax tree provider.

Decorator pattern: wraps SourceParserPort with an in-memory,
canonical-path keyed cache.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from callslice.domain.exceptions.parsing import ParsingError
from callslice.domain.model.syntax_tree import SyntaxTree
from callslice.domain.ports.source_parser import SourceParserPort
from callslice.domain.ports.syntax_tree_provider import SyntaxTreeProviderPort

logger = logging.getLogger(__name__)


@dataclass
class CachedSyntaxTreeProvider(SyntaxTreeProviderPort):
    """Provider with parse-once caching.

    Decorator pattern: wraps a SourceParserPort.
    Paths are canonicalized (symlinks and '..' resolved) before lookup,
    so every spelling of a file shares one tree.

    Cache is in-memory only, unbounded for the run. Failures are not
    cached: a file that failed once is re-read on the next request.
    Not thread-safe.

    Attributes:
        _inner: Wrapped parser implementation
        _cache: Canonical path → SyntaxTree mapping
    """

    _inner: SourceParserPort
    _cache: dict[Path, SyntaxTree] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self._inner is None:
            raise TypeError("_inner parser must not be None")

    def get(self, path: Path) -> SyntaxTree | None:
        """Parsed tree with cache lookup; never raises.

        Args:
            path: Path to .py file

        Returns:
            Cached or fresh SyntaxTree, None if unreadable or unparseable
        """
        try:
            canonical = path.resolve()
        except (OSError, RuntimeError) as e:
            logger.debug("cannot canonicalize %s: %s", path, e)
            return None

        cached = self._cache.get(canonical)
        if cached is not None:
            return cached

        try:
            tree = self._inner.parse_file(canonical)
        except ParsingError as e:
            logger.debug("%s", e)
            return None
        except (OSError, UnicodeDecodeError, SyntaxError, ValueError) as e:
            logger.debug("failed to parse %s: %s", canonical, e)
            return None

        self._cache[canonical] = tree
        return tree

    def invalidate(self, path: Path) -> None:
        """Explicitly invalidate cache entry.

        Use when you know a file has changed externally.

        Args:
            path: Path to invalidate
        """
        self._cache.pop(path.resolve(), None)

    def clear(self) -> None:
        """Clear entire cache."""
        self._cache.clear()

    @property
    def cache_size(self) -> int:
        """Number of cached trees."""
        return len(self._cache)

    @property
    def cached_paths(self) -> frozenset[Path]:
        """Paths currently in cache."""
        return frozenset(self._cache.keys())

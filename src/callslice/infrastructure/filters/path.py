"""Path filters.

Exclusion of canonical file paths from traversal:
dependency directories, project-relative prefixes, regexes.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from callslice.infrastructure.filters.composite import any_of

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from callslice.infrastructure.filters.types import PathFilter

logger = logging.getLogger(__name__)

# Directory names holding third-party code, never followed
VENDOR_DIRECTORIES = frozenset(
    {
        "site-packages",
        "dist-packages",
        ".venv",
        "venv",
        "__pypackages__",
        "vendor",
        "node_modules",
    }
)


def in_vendor_directory() -> PathFilter:
    """Create filter matching paths with a dependency directory component."""

    def _filter(path: Path) -> bool:
        return any(part in VENDOR_DIRECTORIES for part in path.parts)

    return _filter


def under_prefixes(project_root: Path, *prefixes: str) -> PathFilter:
    """Create filter matching paths under project-relative prefixes.

    Plain string prefix test on "<project_root>/<prefix>", so "tests"
    also matches "tests_data/". Leading slashes of prefixes are ignored.

    Args:
        project_root: Canonical project root
        *prefixes: Prefixes relative to project_root (e.g. "tests/")

    Returns:
        Filter that returns True for paths starting with any prefix.
    """
    root = str(project_root).rstrip("/")
    absolute = tuple(f"{root}/{prefix.lstrip('/')}" for prefix in prefixes if prefix.strip("/"))

    def _filter(path: Path) -> bool:
        text = str(path)
        return any(text.startswith(prefix) for prefix in absolute)

    return _filter


def matching_patterns(*patterns: str) -> PathFilter:
    """Create filter matching paths where any regex is found (re.search).

    Malformed patterns are logged once and never match.

    Args:
        *patterns: Regular expressions

    Returns:
        Filter that returns True for paths matching any valid pattern.
    """
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            logger.warning("ignoring malformed exclude pattern %r: %s", pattern, e)

    def _filter(path: Path) -> bool:
        text = str(path)
        return any(regex.search(text) for regex in compiled)

    return _filter


def exclusion_filter(
    project_root: Path,
    prefixes: Iterable[str] = (),
    patterns: Iterable[str] = (),
) -> PathFilter:
    """Create the traversal exclusion filter.

    Order, each short-circuiting:
    1. dependency directory component
    2. project-relative prefix
    3. regex

    Returns:
        Filter that returns True for excluded paths.
    """
    return any_of(
        in_vendor_directory(),
        under_prefixes(project_root, *prefixes),
        matching_patterns(*patterns),
    )

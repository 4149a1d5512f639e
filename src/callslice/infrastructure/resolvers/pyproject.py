"""Project configuration from pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from callslice.domain.exceptions.configuration import ConfigurationError

logger = logging.getLogger(__name__)

PYPROJECT = "pyproject.toml"

DEFAULT_PATH_PREFIXES = ("src/",)


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    """Settings of one analyzed project.

    Attributes:
        project_root: Canonical project directory
        source_roots: Directories module names are relative to
        exclude_paths: Path prefixes (relative to project_root) never followed
        exclude_patterns: Regexes (re.search on absolute path) never followed
        max_depth: Traversal depth bound (0 = unlimited)
        path_prefixes: Prefixes stripped from provenance paths
        abbreviations: Identifier substring → shorter replacement
    """

    project_root: Path
    source_roots: tuple[Path, ...]
    exclude_paths: tuple[str, ...] = ()
    exclude_patterns: tuple[str, ...] = ()
    max_depth: int = 0
    path_prefixes: tuple[str, ...] = DEFAULT_PATH_PREFIXES
    abbreviations: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.source_roots:
            raise ValueError("source_roots must not be empty")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        object.__setattr__(self, "abbreviations", MappingProxyType(dict(self.abbreviations)))


def load_project_config(project_root: Path) -> ProjectConfig:
    """Read pyproject.toml of project.

    Source roots, first found wins:
    1. [tool.callslice] source-roots
    2. [tool.setuptools.packages.find] where
    3. [tool.setuptools] package-dir values
    4. [tool.hatch.build.targets.wheel] packages parents
    5. src/ when it exists
    6. project root

    Args:
        project_root: Project directory

    Returns:
        ProjectConfig (defaults when pyproject.toml is missing)

    Raises:
        ConfigurationError: If the file is unreadable, not valid TOML or
            holds wrongly-typed values
    """
    root = project_root.resolve()
    path = root / PYPROJECT

    if not path.is_file():
        logger.info("no %s in %s, using defaults", PYPROJECT, root)
        return ProjectConfig(project_root=root, source_roots=_default_roots(root))

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigurationError(path, f"cannot read: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(path, f"invalid TOML: {e}") from e

    tool = _table(data, "tool", path)
    settings = _table(tool, "callslice", path)

    roots = _string_list(settings, "source-roots", path) or _declared_roots(tool, path)
    source_roots = tuple(root / entry for entry in roots) if roots else _default_roots(root)

    max_depth = settings.get("max-depth", 0)
    if not isinstance(max_depth, int) or isinstance(max_depth, bool) or max_depth < 0:
        raise ConfigurationError(path, f"max-depth must be a non-negative integer, got {max_depth!r}")

    prefixes = _string_list(settings, "path-prefixes", path)
    return ProjectConfig(
        project_root=root,
        source_roots=tuple(p.resolve() for p in source_roots),
        exclude_paths=_string_list(settings, "exclude-paths", path),
        exclude_patterns=_string_list(settings, "exclude-patterns", path),
        max_depth=max_depth,
        path_prefixes=prefixes if "path-prefixes" in settings else DEFAULT_PATH_PREFIXES,
        abbreviations=_string_table(settings, "abbreviations", path),
    )


def _default_roots(root: Path) -> tuple[Path, ...]:
    src = root / "src"
    return (src,) if src.is_dir() else (root,)


def _declared_roots(tool: Mapping[str, Any], path: Path) -> tuple[str, ...]:
    setuptools = _table(tool, "setuptools", path)

    packages = setuptools.get("packages")
    if isinstance(packages, dict):
        where = _string_list(_table(packages, "find", path), "where", path)
        if where:
            return where

    package_dir = _string_table(setuptools, "package-dir", path)
    if package_dir:
        return tuple(dict.fromkeys(package_dir.values()))

    wheel = _table(_table(_table(_table(tool, "hatch", path), "build", path), "targets", path), "wheel", path)
    hatch_packages = _string_list(wheel, "packages", path)
    if hatch_packages:
        return tuple(dict.fromkeys(str(Path(p).parent) for p in hatch_packages))

    return ()


def _table(data: Mapping[str, Any], key: str, path: Path) -> Mapping[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ConfigurationError(path, f"'{key}' must be a table")
    return value


def _string_list(data: Mapping[str, Any], key: str, path: Path) -> tuple[str, ...]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigurationError(path, f"'{key}' must be a list of strings")
    return tuple(value)


def _string_table(data: Mapping[str, Any], key: str, path: Path) -> dict[str, str]:
    value = data.get(key, {})
    if not isinstance(value, dict) or not all(isinstance(item, str) for item in value.values()):
        raise ConfigurationError(path, f"'{key}' must be a table of strings")
    return dict(value)

"""Class resolvers: fully-qualified name → source file."""

from callslice.infrastructure.resolvers.chain import ChainResolver
from callslice.infrastructure.resolvers.definition import Definition, DefinitionLocator
from callslice.infrastructure.resolvers.importlib_resolver import ImportlibResolver
from callslice.infrastructure.resolvers.pyproject import ProjectConfig, load_project_config
from callslice.infrastructure.resolvers.source_root import SourceRootResolver

__all__ = [
    "ChainResolver",
    "Definition",
    "DefinitionLocator",
    "ImportlibResolver",
    "ProjectConfig",
    "SourceRootResolver",
    "load_project_config",
]

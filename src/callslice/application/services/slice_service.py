"""Main facade: traverse, slice, assemble.

SliceService is the primary entry point for producing an artifact
from one entry point.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Self

from callslice.application.assembly.assembler import SourceAssembler
from callslice.application.assembly.minimizer import MinimizerConfig
from callslice.application.services.traverser import GraphTraverser
from callslice.application.slicing.slicer import CodeSlicer
from callslice.domain.model.slice_result import SliceResult
from callslice.infrastructure.adapters.ast_parser import ASTSourceParser
from callslice.infrastructure.adapters.cached_parser import CachedSyntaxTreeProvider
from callslice.infrastructure.resolvers.chain import ChainResolver
from callslice.infrastructure.resolvers.importlib_resolver import ImportlibResolver
from callslice.infrastructure.resolvers.source_root import SourceRootResolver

if TYPE_CHECKING:
    from pathlib import Path

    from callslice.domain.model.traversal_config import TraversalConfig
    from callslice.domain.ports.class_resolver import ClassResolverPort
    from callslice.infrastructure.resolvers.pyproject import ProjectConfig

logger = logging.getLogger(__name__)


class SliceService:
    """Runs traversal, slicing and assembly over one shared parse cache.

    Composition-based: accepts traverser, slicer and assembler.

    Example:
        config = load_project_config(Path("."))
        service = SliceService.for_project(config)
        result = service.run(TraversalConfig(EntryPoint("app.api.Api", "create")))
        if result.artifact is not None:
            print(result.artifact.source)
    """

    def __init__(
        self,
        traverser: GraphTraverser,
        slicer: CodeSlicer,
        assembler: SourceAssembler,
        provider: CachedSyntaxTreeProvider,
        *,
        project_root: Path,
    ) -> None:
        """Initialize service with dependencies.

        Args:
            traverser: Reference tree builder
            slicer: Per-file slicer
            assembler: Artifact builder
            provider: Parse cache shared by traverser and slicer
            project_root: Root provenance paths are relative to
        """
        self._traverser = traverser
        self._slicer = slicer
        self._assembler = assembler
        self._provider = provider
        self._project_root = project_root

    @classmethod
    def for_project(cls, config: ProjectConfig, *, use_importlib: bool = True) -> Self:
        """Create service wired for a project.

        Args:
            config: Project configuration (source roots, shortenings)
            use_importlib: Also resolve names through the host interpreter
                (installed packages); source roots are tried first

        Returns:
            SliceService sharing one parse cache
        """
        provider = CachedSyntaxTreeProvider(ASTSourceParser(config.source_roots))
        resolver: ClassResolverPort = SourceRootResolver(config.source_roots)
        if use_importlib:
            resolver = ChainResolver(resolver, ImportlibResolver())

        minimizer_config = MinimizerConfig(
            path_prefixes=config.path_prefixes,
            abbreviations=config.abbreviations,
        )
        return cls(
            GraphTraverser(resolver, provider),
            CodeSlicer(provider),
            SourceAssembler(minimizer_config),
            provider,
            project_root=config.project_root,
        )

    @property
    def provider(self) -> CachedSyntaxTreeProvider:
        return self._provider

    def run(self, traversal: TraversalConfig) -> SliceResult:
        """Traverse from entry point, slice reached files, assemble artifact.

        Args:
            traversal: Traversal configuration

        Returns:
            SliceResult; artifact is None when the entry point is unresolved
        """
        start_time = time.perf_counter()

        references = self._traverser.traverse(traversal)
        artifact = None
        if not references.is_empty:
            slices = self._slicer.slice_collection(references)
            artifact = self._assembler.assemble(
                slices,
                self._project_root,
                cached_tree_count=self._provider.cache_size,
            )

        elapsed = time.perf_counter() - start_time
        logger.info("sliced %s in %.3fs", traversal.entry_point, elapsed)
        return SliceResult(
            entry_point=traversal.entry_point,
            references=references,
            artifact=artifact,
            elapsed_s=elapsed,
        )

"""Source assembler: slices → one minimized source unit."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from callslice.application.assembly.blocks import ModuleBlock, block_from_slice
from callslice.application.assembly.imports import dedup_and_sort, prune_unused, remove_pragmas
from callslice.application.assembly.minimizer import DEFAULT_CONFIG, MinimizerConfig, minimize
from callslice.application.assembly.printer import print_blocks
from callslice.application.assembly.shortener import shorten_names
from callslice.application.assembly.splitter import split_block
from callslice.domain.model.artifact import Artifact

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from callslice.domain.model.code_slice import Slice

logger = logging.getLogger(__name__)


class SourceAssembler:
    """Multi-pass rewrite of slices into a deterministic artifact.

    Passes, in order:
    1. pragma removal
    2. module splitting (one block per class)
    3. name shortening
    4. unused-import pruning
    5. import dedup + sort
    6. provenance lines
    7. pretty-print + minimize

    Slices are not modified: blocks hold copies of their statements.
    """

    def __init__(self, minimizer_config: MinimizerConfig = DEFAULT_CONFIG) -> None:
        self._minimizer_config = minimizer_config

    def build_blocks(self, slices: Sequence[Slice], project_root: Path) -> list[ModuleBlock]:
        """Passes 1-5: blocks ready for printing."""
        blocks: list[ModuleBlock] = []
        for code_slice in slices:
            block = block_from_slice(code_slice, project_root)
            block.imports = remove_pragmas(block.imports)
            blocks.extend(split_block(block))

        for block in blocks:
            shorten_names(block)
            block.imports = dedup_and_sort(prune_unused(block.imports, block.body))
        return blocks

    def assemble(
        self,
        slices: Sequence[Slice],
        project_root: Path,
        *,
        cached_tree_count: int = 0,
    ) -> Artifact:
        """Assemble slices into one artifact.

        Args:
            slices: Per-file slices in traversal order
            project_root: Root provenance paths are relative to
            cached_tree_count: Parse cache size, reported in statistics

        Returns:
            Artifact with minimized source and statistics
        """
        blocks = self.build_blocks(slices, project_root)
        source = minimize(print_blocks(blocks), self._minimizer_config)
        file_count = len({code_slice.path for code_slice in slices})
        logger.info("assembled %d blocks from %d files", len(blocks), file_count)
        return Artifact.from_source(source, file_count, cached_tree_count=cached_tree_count)

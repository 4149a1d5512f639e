"""Source assembly: module blocks, import passes, minimizer."""

from callslice.application.assembly.assembler import SourceAssembler
from callslice.application.assembly.blocks import ModuleBlock
from callslice.application.assembly.minimizer import MinimizerConfig, minimize

__all__ = [
    "MinimizerConfig",
    "ModuleBlock",
    "SourceAssembler",
    "minimize",
]

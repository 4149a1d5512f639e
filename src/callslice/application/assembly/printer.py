"""Pretty-printing of module blocks with provenance lines."""

from __future__ import annotations

import ast
from collections.abc import Iterable

from callslice.application.assembly.blocks import ModuleBlock, import_statement
from callslice.application.assembly.minimizer import OPENING, PROVENANCE_MARKER


def provenance_line(block: ModuleBlock) -> str:
    return f"{PROVENANCE_MARKER}{block.path}"


def print_block(block: ModuleBlock) -> str:
    """Provenance line, imports (one per line), then the body."""
    module = ast.Module(
        body=[*(import_statement(imp) for imp in block.imports), *block.body],
        type_ignores=[],
    )
    ast.fix_missing_locations(module)
    code = ast.unparse(module)
    return f"{provenance_line(block)}\n{code}" if code else provenance_line(block)


def print_blocks(blocks: Iterable[ModuleBlock]) -> str:
    """Opening line followed by every printed block."""
    return "\n".join([OPENING, *(print_block(block) for block in blocks)]) + "\n"

"""Module splitting: one block per class."""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from callslice.application.assembly.blocks import ModuleBlock


def split_block(block: ModuleBlock) -> list[ModuleBlock]:
    """Split block with more than one class into one block per class.

    Every resulting block gets a copy of the import list. Non-class
    top-level statements stay with the first class's block, in
    source order.

    Returns:
        [block] unchanged when it has at most one class
    """
    classes = block.classes
    if len(classes) <= 1:
        return [block]

    first, *rest = classes
    leading = [stmt for stmt in block.body if not isinstance(stmt, ast.ClassDef) or stmt is first]
    return [block.copy_with_body(leading), *(block.copy_with_body([cls]) for cls in rest)]

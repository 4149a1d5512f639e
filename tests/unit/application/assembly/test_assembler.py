"""Tests for application/assembly/assembler.py.

Tests:
- build_blocks: splitting and per-block import pruning
- assemble: minimized source, statistics, slices left untouched
"""

import ast
from pathlib import Path

from callslice.application.assembly.assembler import SourceAssembler
from callslice.application.assembly.minimizer import MinimizerConfig
from callslice.domain.model.code_slice import Slice
from tests.factories import parse_module

SHAPES = """
from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.base import Base


class Circle:
    def area(self, r: float) -> float:
        return math.pi * r * r


class Square(Base):
    def area(self, side: float) -> float:
        return side * side
"""


def make_slice(root: Path) -> Slice:
    tree = parse_module(root, "app.shapes", SHAPES)
    return Slice(path=tree.path, module_name=tree.module_name, tree=tree.root, members=frozenset({"area"}))


class TestBuildBlocks:
    """Tests for SourceAssembler.build_blocks."""

    def test_one_block_per_class(self, tmp_path: Path) -> None:
        blocks = SourceAssembler().build_blocks([make_slice(tmp_path)], tmp_path)

        assert [[cls.name for cls in block.classes] for block in blocks] == [["Circle"], ["Square"]]
        assert {block.path for block in blocks} == {"src/app/shapes.py"}

    def test_imports_pruned_per_block(self, tmp_path: Path) -> None:
        blocks = SourceAssembler().build_blocks([make_slice(tmp_path)], tmp_path)

        assert [[(imp.module, imp.name) for imp in block.imports] for block in blocks] == [
            [("math", None)],
            [("app.base", "Base")],
        ]


class TestAssemble:
    """Tests for SourceAssembler.assemble."""

    EXPECTED = (
        "from __future__ import annotations\n"
        "# app/shapes.py\n"
        "import math\n"
        "class Circle:\n"
        " def area(self,r:float) -> float:\n"
        "  return math.pi * r * r\n"
        "# app/shapes.py\n"
        "from app.base import Base\n"
        "class Square(Base):\n"
        " def area(self,side:float) -> float:\n"
        "  return side * side\n"
    )

    def test_source(self, tmp_path: Path) -> None:
        artifact = SourceAssembler().assemble([make_slice(tmp_path)], tmp_path)

        assert artifact.source == self.EXPECTED

    def test_statistics(self, tmp_path: Path) -> None:
        artifact = SourceAssembler().assemble([make_slice(tmp_path)], tmp_path, cached_tree_count=4)

        assert artifact.stats.file_count == 1
        assert artifact.stats.line_count == 11
        assert artifact.stats.byte_count == len(self.EXPECTED.encode("utf-8"))
        assert artifact.stats.cached_tree_count == 4

    def test_slices_not_modified(self, tmp_path: Path) -> None:
        code_slice = make_slice(tmp_path)
        before = ast.dump(code_slice.tree)

        SourceAssembler().assemble([code_slice], tmp_path)

        assert ast.dump(code_slice.tree) == before

    def test_minimizer_config_applied(self, tmp_path: Path) -> None:
        assembler = SourceAssembler(MinimizerConfig(abbreviations={"Square": "Sq"}))

        source = assembler.assemble([make_slice(tmp_path)], tmp_path).source

        assert "class Sq(Base):" in source
        assert "Square" not in source

    def test_no_slices(self, tmp_path: Path) -> None:
        artifact = SourceAssembler().assemble([], tmp_path)

        assert artifact.source == "from __future__ import annotations\n"
        assert artifact.stats.file_count == 0

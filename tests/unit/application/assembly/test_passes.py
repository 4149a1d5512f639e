"""Tests for assembly passes: blocks, splitting, shortening, imports, printing."""

import ast
import textwrap
from pathlib import Path

from callslice.application.assembly.blocks import ModuleBlock, block_from_slice, display_path
from callslice.application.assembly.imports import (
    dedup_and_sort,
    prune_module,
    prune_unused,
    remove_pragmas,
    used_names,
)
from callslice.application.assembly.printer import print_blocks
from callslice.application.assembly.shortener import shorten_names
from callslice.application.assembly.splitter import split_block
from callslice.domain.model.code_slice import Slice
from callslice.domain.model.import_ import Import
from tests.factories import parse_module


def make_slice(root: Path, module: str, source: str) -> Slice:
    """Unfiltered slice of a module written under root/src."""
    tree = parse_module(root, module, source)
    return Slice(path=tree.path, module_name=tree.module_name, tree=tree.root, members=frozenset())


def statements(source: str) -> list[ast.stmt]:
    return ast.parse(textwrap.dedent(source)).body


def triples(imports: list[Import]) -> list[tuple[str, str | None, str | None]]:
    return [(imp.module, imp.name, imp.alias) for imp in imports]


class TestBlockFromSlice:
    """Tests for block_from_slice."""

    SOURCE = """
    from __future__ import annotations

    from typing import TYPE_CHECKING

    from .models import User

    if TYPE_CHECKING:
        from ..core import Base

        Alias = int


    class Service:
        pass
    """

    def test_imports_lifted_and_absolute(self, tmp_path: Path) -> None:
        block = block_from_slice(make_slice(tmp_path, "app.api.views", self.SOURCE), tmp_path)

        assert block.module_name == "app.api.views"
        assert block.path == "src/app/api/views.py"
        assert triples(block.imports) == [
            ("__future__", "annotations", None),
            ("typing", "TYPE_CHECKING", None),
            ("app.api.models", "User", None),
            ("app.core", "Base", None),
        ]

    def test_type_checking_remainder_kept(self, tmp_path: Path) -> None:
        block = block_from_slice(make_slice(tmp_path, "app.api.views", self.SOURCE), tmp_path)

        assert [ast.unparse(stmt).splitlines()[0] for stmt in block.body] == [
            "if TYPE_CHECKING:",
            "class Service:",
        ]

    def test_emptied_type_checking_dropped(self, tmp_path: Path) -> None:
        source = """
        from typing import TYPE_CHECKING

        if TYPE_CHECKING:
            from app.models import User


        def f(user: User) -> None:
            pass
        """
        block = block_from_slice(make_slice(tmp_path, "app.svc", source), tmp_path)

        assert [type(stmt) for stmt in block.body] == [ast.FunctionDef]

    def test_slice_untouched(self, tmp_path: Path) -> None:
        code_slice = make_slice(tmp_path, "app.api.views", self.SOURCE)
        before = ast.dump(code_slice.tree)

        block_from_slice(code_slice, tmp_path)

        assert ast.dump(code_slice.tree) == before

    def test_display_path_outside_root(self, tmp_path: Path) -> None:
        assert display_path(Path("/elsewhere/x.py"), tmp_path) == "/elsewhere/x.py"
        assert display_path(tmp_path / "src" / "x.py", tmp_path) == "src/x.py"


class TestSplitBlock:
    """Tests for split_block."""

    def test_one_block_per_class(self) -> None:
        body = statements(
            """
            LIMIT = 3


            class A:
                pass


            def helper():
                pass


            class B:
                pass
            """
        )
        block = ModuleBlock("app.x", "src/app/x.py", [Import("os")], body)

        first, second = split_block(block)

        assert [type(stmt).__name__ for stmt in first.body] == ["Assign", "ClassDef", "FunctionDef"]
        assert [stmt.name for stmt in second.classes] == ["B"]
        assert first.imports == second.imports == [Import("os")]
        assert first.imports is not second.imports
        assert second.path == "src/app/x.py"

    def test_single_class_unchanged(self) -> None:
        block = ModuleBlock("app.x", "src/app/x.py", [], statements("class A:\n    pass\n"))

        assert split_block(block) == [block]


class TestShortenNames:
    """Tests for shorten_names."""

    def test_qualified_references(self, tmp_path: Path) -> None:
        source = """
        import app.models
        from app import models
        from app.models import User as U


        class Local:
            pass


        class Service:
            def run(self):
                app.models.User()
                models.User()
                U()
                app.svc.Local()
                models.Account()
        """
        block = block_from_slice(make_slice(tmp_path, "app.svc", source), tmp_path)

        shorten_names(block)

        service = block.classes[1]
        run = service.body[0]
        assert isinstance(run, ast.FunctionDef)
        assert [ast.unparse(stmt) for stmt in run.body] == [
            "U()",
            "U()",
            "U()",
            "Local()",
            "models.Account()",
        ]


class TestImportPasses:
    """Tests for pragma removal, pruning, dedup and sort."""

    def test_remove_pragmas(self) -> None:
        imports = [Import("__future__", "annotations"), Import("os")]

        assert remove_pragmas(imports) == [Import("os")]

    def test_prune_unused(self) -> None:
        imports = [
            Import("os"),
            Import("typing", "TYPE_CHECKING"),
            Import("app.models", "User"),
            Import("app.helpers", "*"),
            Import("json", alias="j"),
        ]
        body = statements(
            """
            def f(u: "User") -> None:
                os.getcwd()
                j.dumps({})
            """
        )

        kept = prune_unused(imports, body)

        assert kept == [
            Import("os"),
            Import("app.models", "User"),
            Import("app.helpers", "*"),
            Import("json", alias="j"),
        ]

    def test_dedup_and_sort(self) -> None:
        imports = [
            Import("os"),
            Import("app.b", "X"),
            Import("os"),
            Import("app.a", "Y", alias="Z"),
            Import("app.a", "Y"),
        ]

        assert triples(dedup_and_sort(imports)) == [
            ("app.a", "Y", None),
            ("app.a", "Y", "Z"),
            ("app.b", "X", None),
            ("os", None, None),
        ]

    def test_plain_import_before_from_import_of_same_name(self) -> None:
        imports = [Import("app", "a"), Import("app.a")]

        assert triples(dedup_and_sort(imports)) == [("app.a", None, None), ("app", "a", None)]

    def test_used_names_sources(self) -> None:
        tree = ast.parse(
            textwrap.dedent(
                """
                __all__ = ["Api"]
                items = []  # type: List[Item]

                def f(x: "Optional[Dto]") -> "Result":
                    pass
                """
            ),
            type_comments=True,
        )

        assert {"Api", "List", "Item", "Optional", "Dto", "Result"} <= used_names(tree.body)


class TestPruneModule:
    """Tests for prune_module."""

    def test_unused_aliases_dropped(self) -> None:
        module = ast.parse(
            "from __future__ import annotations\nimport os, sys\nfrom json import dumps, loads\nsys.exit(loads('1'))\n"
        )

        prune_module(module)

        assert ast.unparse(module) == (
            "from __future__ import annotations\nimport sys\nfrom json import loads\nsys.exit(loads('1'))"
        )

    def test_type_checking_guard_kept_while_used(self) -> None:
        source = """
        from typing import TYPE_CHECKING

        if TYPE_CHECKING:
            from app.models import User, Account


        def f(user: "User") -> None:
            pass
        """
        module = ast.parse(textwrap.dedent(source))

        prune_module(module)

        assert ast.unparse(module).splitlines()[:3] == [
            "from typing import TYPE_CHECKING",
            "if TYPE_CHECKING:",
            "    from app.models import User",
        ]

    def test_emptied_guard_removed_over_two_passes(self) -> None:
        source = """
        from typing import TYPE_CHECKING

        if TYPE_CHECKING:
            from app.models import User

        x = 1
        """
        module = ast.parse(textwrap.dedent(source))

        prune_module(module)
        prune_module(module)

        assert ast.unparse(module) == "x = 1"


class TestPrintBlocks:
    """Tests for print_blocks."""

    def test_layout(self) -> None:
        blocks = [
            ModuleBlock("app.models", "src/app/models.py", [Import("os")], statements("class User:\n    pass\n")),
            ModuleBlock("app.empty", "src/app/empty.py"),
        ]

        assert print_blocks(blocks) == (
            "from __future__ import annotations\n"
            "# File: src/app/models.py\n"
            "import os\n"
            "\n"
            "class User:\n"
            "    pass\n"
            "# File: src/app/empty.py\n"
        )

    def test_no_blocks(self) -> None:
        assert print_blocks([]) == "from __future__ import annotations\n"

"""Integration tests: project on disk → reference tree → minimized artifact.

Runs the real stack (parser, cache, source-root resolver, traverser,
slicer, assembler, minimizer) over a small three-module project.
"""

import ast
import textwrap
from pathlib import Path

import pytest

from callslice.application.assembly.minimizer import minimize
from callslice.application.services.slice_service import SliceService
from callslice.domain.model.entry_point import EntryPoint
from callslice.domain.model.slice_result import SliceResult
from callslice.domain.model.traversal_config import TraversalConfig
from callslice.infrastructure.resolvers.pyproject import load_project_config
from tests.factories import make_project

SHOP = {
    "shop.models": """
        from __future__ import annotations

        from dataclasses import dataclass


        @dataclass(frozen=True)
        class Item:
            \"\"\"Catalog entry.\"\"\"

            name: str
            price: int

            def total(self, count: int) -> int:
                return self.price * count

            def unused(self) -> None:
                pass
    """,
    "shop.repo": """
        from __future__ import annotations

        from typing import TYPE_CHECKING

        from shop.models import Item

        if TYPE_CHECKING:
            from collections.abc import Iterable


        class Repository:
            def __init__(self) -> None:
                self._items: dict[str, Item] = {}

            def get(self, name: str) -> Item:
                return self._items[name]

            def all(self) -> Iterable[Item]:
                return self._items.values()
    """,
    "shop.service": """
        from __future__ import annotations

        from shop.repo import Repository


        class Checkout:
            def __init__(self, repo: Repository) -> None:
                self.repo = repo

            def price(self, name: str, count: int) -> int:
                item = self.repo.get(name)
                return item.total(count)

            def report(self) -> str:
                return "report"
    """,
}

EXPECTED = textwrap.dedent(
    """\
    from __future__ import annotations
    # shop/service.py
    from shop.repo import Repository
    class Checkout:
     def __init__(self,repo:Repository) -> None:
      self.repo = repo
     def price(self,name:str,count:int) -> int:
      item = self.repo.get(name)
      return item.total(count)
    # shop/repo.py
    from shop.models import Item
    class Repository:
     def __init__(self) -> None:
      self._items = {}
     def get(self,name:str) -> Item:
      return self._items[name]
    # shop/models.py
    from dataclasses import dataclass
    @dataclass(frozen=True)
    class Item:
     name:str
     price:int
     def total(self,count:int) -> int:
      return self.price * count
    """
)


def run_slice(root: Path, class_name: str, method_name: str, **options: object) -> SliceResult:
    """Slice entry point of project at root without host interpreter lookups."""
    service = SliceService.for_project(load_project_config(root), use_importlib=False)
    return service.run(
        TraversalConfig(EntryPoint(class_name, method_name), project_root=root, **options)  # type: ignore[arg-type]
    )


@pytest.fixture
def shop(tmp_path: Path) -> Path:
    make_project(tmp_path, SHOP)
    return tmp_path


class TestShopSlice:
    """Tests for slicing Checkout.price."""

    def test_artifact_source(self, shop: Path) -> None:
        result = run_slice(shop, "shop.service.Checkout", "price")

        assert result.artifact is not None
        assert result.artifact.source == EXPECTED

    def test_reference_tree(self, shop: Path) -> None:
        result = run_slice(shop, "shop.service.Checkout", "price")

        assert result.resolved
        assert result.references.size == 3
        root = result.references.roots[0]
        assert [child.key for child in root.children] == [
            "shop.repo.Repository::get",
            "shop.models.Item::total",
        ]

    def test_statistics(self, shop: Path) -> None:
        result = run_slice(shop, "shop.service.Checkout", "price")

        assert result.artifact is not None
        stats = result.artifact.stats
        assert stats.file_count == 3
        assert stats.cached_tree_count == 3
        assert stats.line_count == EXPECTED.count("\n")
        assert stats.byte_count == len(EXPECTED.encode("utf-8"))

    def test_artifact_is_valid_and_stable(self, shop: Path) -> None:
        result = run_slice(shop, "shop.service.Checkout", "price")

        assert result.artifact is not None
        source = result.artifact.source
        ast.parse(source)
        assert minimize(source) == source

    def test_sources_untouched(self, shop: Path) -> None:
        before = {path: path.read_text() for path in (shop / "src").rglob("*.py")}

        run_slice(shop, "shop.service.Checkout", "price")

        assert {path: path.read_text() for path in (shop / "src").rglob("*.py")} == before


class TestShopOptions:
    """Tests for exclusions, depth and unresolved entry points."""

    def test_excluded_file_not_sliced(self, shop: Path) -> None:
        result = run_slice(
            shop,
            "shop.service.Checkout",
            "price",
            excluded_paths=("src/shop/models.py",),
        )

        assert result.references.size == 2
        assert result.artifact is not None
        assert "# shop/models.py" not in result.artifact.source
        assert "class Item" not in result.artifact.source
        assert result.artifact.stats.file_count == 2

    def test_depth_bound_records_children(self, shop: Path) -> None:
        result = run_slice(shop, "shop.service.Checkout", "price", max_depth=1)

        assert result.references.size == 3
        assert result.artifact is not None
        assert result.artifact.source == EXPECTED

    def test_missing_method(self, shop: Path) -> None:
        result = run_slice(shop, "shop.service.Checkout", "refund")

        assert not result.resolved
        assert result.artifact is None

    def test_missing_class(self, shop: Path) -> None:
        result = run_slice(shop, "shop.service.Basket", "price")

        assert not result.resolved
        assert result.artifact is None

    def test_pyproject_source_roots(self, tmp_path: Path) -> None:
        make_project(tmp_path, SHOP)
        (tmp_path / "src").rename(tmp_path / "lib")
        (tmp_path / "pyproject.toml").write_text(
            '[tool.callslice]\nsource-roots = ["lib"]\npath-prefixes = ["lib/"]\n'
        )

        result = run_slice(tmp_path, "shop.service.Checkout", "price")

        assert result.artifact is not None
        assert result.artifact.source == EXPECTED


# A.m → B.s (static) → C.n (static) → A.m
STATIC_CYCLE = {
    "app.a": """
        from app.b import B


        class A:
            def m(self) -> None:
                B.s()
    """,
    "app.b": """
        from app.c import C


        class B:
            @staticmethod
            def s() -> None:
                C.n()
    """,
    "app.c": """
        from app.a import A


        class C:
            @staticmethod
            def n(a: A) -> None:
                a.m()
    """,
}


class TestStaticCycle:
    """Tests for a cycle through static calls."""

    def test_back_edge_not_expanded(self, tmp_path: Path) -> None:
        make_project(tmp_path, STATIC_CYCLE)

        result = run_slice(tmp_path, "app.a.A", "m")

        (root,) = result.references.roots
        assert [(ref.key, ref.kind.value) for ref in result.references.iter_references()] == [
            ("app.a.A::m", "method_call"),
            ("app.b.B::s", "static_call"),
            ("app.c.C::n", "static_call"),
            ("app.a.A::m", "method_call"),
            ("app.a.A", "parameter_type"),
        ]
        assert result.references.find("app.a.A::m")[1].children == []
        assert len(result.references.unique_file_paths()) == 3

    def test_artifact(self, tmp_path: Path) -> None:
        make_project(tmp_path, STATIC_CYCLE)

        result = run_slice(tmp_path, "app.a.A", "m")

        assert result.artifact is not None
        assert result.artifact.source == textwrap.dedent(
            """\
            from __future__ import annotations
            # app/a.py
            from app.b import B
            class A:
             def m(self) -> None:
              B.s()
            # app/b.py
            from app.c import C
            class B:
             @staticmethod
             def s() -> None:
              C.n()
            # app/c.py
            from app.a import A
            class C:
             @staticmethod
             def n(a:A) -> None:
              a.m()
            """
        )

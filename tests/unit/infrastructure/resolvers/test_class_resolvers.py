"""Tests for FQN → file resolvers.

Tests:
- SourceRootResolver: longest module prefix, module file before package
- ImportlibResolver: host interpreter lookup, stdlib skipped
- ChainResolver: first hit wins
"""

from pathlib import Path

import pytest

import callslice.domain.model.reference as reference_module
from callslice.infrastructure.resolvers.chain import ChainResolver
from callslice.infrastructure.resolvers.importlib_resolver import ImportlibResolver
from callslice.infrastructure.resolvers.source_root import SourceRootResolver, module_candidates
from tests.factories import make_resolver, write_module, write_package_init


class StaticResolver:
    """Resolver answering from a fixed mapping."""

    def __init__(self, mapping: dict[str, Path]) -> None:
        self.mapping = mapping
        self.asked: list[str] = []

    def resolve(self, fqn: str) -> Path | None:
        self.asked.append(fqn)
        return self.mapping.get(fqn)


def test_module_candidates_longest_first() -> None:
    assert module_candidates(["a", "b", "C"]) == [("a", "b", "C"), ("a", "b"), ("a",)]


class TestSourceRootResolver:
    """Tests for SourceRootResolver."""

    def test_class_in_module(self, tmp_path: Path) -> None:
        path = write_module(tmp_path, "app.models", "class User:\n    pass\n")

        assert make_resolver(tmp_path).resolve("app.models.User") == path.resolve()

    def test_nested_class(self, tmp_path: Path) -> None:
        path = write_module(tmp_path, "app.models", "class Outer:\n    class Inner:\n        pass\n")

        assert make_resolver(tmp_path).resolve("app.models.Outer.Inner") == path.resolve()

    def test_package_init(self, tmp_path: Path) -> None:
        path = write_package_init(tmp_path, "app", "class App:\n    pass\n")

        assert make_resolver(tmp_path).resolve("app.App") == path.resolve()

    def test_longest_prefix_wins(self, tmp_path: Path) -> None:
        """app.models.User prefers app/models.py over app/__init__.py."""
        write_package_init(tmp_path, "app", "")
        path = write_module(tmp_path, "app.models", "")

        assert make_resolver(tmp_path).resolve("app.models.User") == path.resolve()

    def test_module_file_before_package(self, tmp_path: Path) -> None:
        module_file = write_module(tmp_path, "app.models", "")
        write_package_init(tmp_path, "app.models", "")

        assert make_resolver(tmp_path).resolve("app.models.User") == module_file.resolve()

    def test_roots_in_declaration_order(self, tmp_path: Path) -> None:
        first = tmp_path / "first"
        second = tmp_path / "second"
        for root in (first, second):
            (root / "pkg").mkdir(parents=True)
            (root / "pkg" / "mod.py").write_text("")

        resolver = SourceRootResolver([second, first])

        assert resolver.resolve("pkg.mod.Thing") == (second / "pkg" / "mod.py").resolve()

    def test_unknown(self, tmp_path: Path) -> None:
        write_module(tmp_path, "app.models", "")

        assert make_resolver(tmp_path).resolve("other.Thing") is None

    def test_non_identifier_fqn(self, tmp_path: Path) -> None:
        assert make_resolver(tmp_path).resolve("app..models") is None
        assert make_resolver(tmp_path).resolve("app.my-module.X") is None

    def test_empty_fqn_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="fqn"):
            make_resolver(tmp_path).resolve("")


class TestImportlibResolver:
    """Tests for ImportlibResolver."""

    def test_installed_module(self) -> None:
        """Class FQN resolves to its module file through the parent prefix."""
        path = ImportlibResolver().resolve("callslice.domain.model.reference.Reference")

        assert path == Path(reference_module.__file__).resolve()

    def test_stdlib_skipped(self) -> None:
        assert ImportlibResolver().resolve("json.JSONDecoder") is None
        assert ImportlibResolver().resolve("collections.OrderedDict") is None

    def test_unknown_module(self) -> None:
        assert ImportlibResolver().resolve("no_such_distribution_xyz.Thing") is None


class TestChainResolver:
    """Tests for ChainResolver."""

    def test_first_hit_wins(self, tmp_path: Path) -> None:
        first = StaticResolver({"a.X": tmp_path / "first.py"})
        second = StaticResolver({"a.X": tmp_path / "second.py", "b.Y": tmp_path / "b.py"})
        chain = ChainResolver(first, second)

        assert chain.resolve("a.X") == tmp_path / "first.py"
        assert chain.resolve("b.Y") == tmp_path / "b.py"
        assert second.asked == ["b.Y"]

    def test_none_when_all_miss(self) -> None:
        assert ChainResolver(StaticResolver({})).resolve("a.X") is None

    def test_requires_resolver(self) -> None:
        with pytest.raises(ValueError, match="at least one"):
            ChainResolver()

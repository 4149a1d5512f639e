"""Tests for infrastructure/analyzers/name_resolver.py."""

import ast
import copy

import pytest

from callslice.domain.model.syntax_tree import fqn_of
from callslice.infrastructure.analyzers.name_resolver import NameResolver, dotted_name


def resolve(code: str, module: str = "app.svc") -> tuple[ast.Module, dict[str, str]]:
    tree = ast.parse(code)
    table = NameResolver().resolve(tree, module)
    return tree, table.as_dict()


class TestDottedName:
    """Tests for dotted_name."""

    def test_chain(self) -> None:
        assert dotted_name(ast.parse("a.b.c", mode="eval").body) == "a.b.c"

    def test_non_chain(self) -> None:
        assert dotted_name(ast.parse("f().x", mode="eval").body) is None


class TestNameResolver:
    """Tests for FQN stamping."""

    def test_symbol_table_has_imports_and_definitions(self) -> None:
        _, symbols = resolve("from app.models import User as U\nimport os.path\nclass Service: pass\n")

        assert symbols == {"U": "app.models.User", "os": "os", "Service": "app.svc.Service"}

    def test_definitions_stamped_with_scope(self) -> None:
        tree, _ = resolve("class Outer:\n    class Inner:\n        def m(self): pass\ndef f(): pass\n")
        outer = tree.body[0]
        assert isinstance(outer, ast.ClassDef)
        inner = outer.body[0]
        assert isinstance(inner, ast.ClassDef)

        assert fqn_of(outer) == "app.svc.Outer"
        assert fqn_of(inner) == "app.svc.Outer.Inner"
        assert fqn_of(inner.body[0]) == "app.svc.Outer.Inner.m"
        assert fqn_of(tree.body[1]) == "app.svc.f"

    def test_references_stamped(self) -> None:
        tree, _ = resolve("from app import models\nx = models.User()\n")
        call = tree.body[1].value  # type: ignore[attr-defined]

        assert fqn_of(call.func) == "app.models.User"
        assert fqn_of(call.func.value) == "app.models"

    def test_unknown_names_not_stamped(self) -> None:
        tree, _ = resolve("x = unknown.attr\n")
        value = tree.body[0].value  # type: ignore[attr-defined]

        assert fqn_of(value) is None

    def test_stamps_survive_deepcopy(self) -> None:
        tree, _ = resolve("class A: pass\n")
        clone = copy.deepcopy(tree)

        assert fqn_of(clone.body[0]) == "app.svc.A"

    def test_empty_module_name_raises(self) -> None:
        with pytest.raises(ValueError, match="module_name"):
            NameResolver().resolve(ast.parse(""), "")

"""Tests for infrastructure/analyzers/import_analyzer.py."""

import ast

from callslice.infrastructure.analyzers.import_analyzer import (
    ImportAnalyzer,
    convert_import,
    is_type_checking_block,
)


def make_tree(code: str) -> ast.Module:
    """Parse code into AST module."""
    return ast.parse(code)


class TestImportAnalyzerBasic:
    """Tests for basic import extraction."""

    def test_simple_import(self) -> None:
        imports = ImportAnalyzer().analyze(make_tree("import os"), "mypackage.module")

        assert len(imports) == 1
        assert imports[0].module == "os"
        assert imports[0].name is None
        assert imports[0].alias is None
        assert imports[0].level == 0

    def test_multiple_aliases_one_each(self) -> None:
        imports = ImportAnalyzer().analyze(make_tree("from os import path, sep as s"), "pkg.mod")

        assert [(imp.name, imp.alias) for imp in imports] == [("path", None), ("sep", "s")]

    def test_relative_import_resolved(self) -> None:
        imports = ImportAnalyzer().analyze(make_tree("from .models import User"), "app.services")

        assert imports[0].module == "app.models"
        assert imports[0].qualified_name == "app.models.User"
        assert imports[0].level == 1

    def test_relative_import_in_package_init(self) -> None:
        imports = ImportAnalyzer().analyze(make_tree("from .models import User"), "app", is_package=True)

        assert imports[0].module == "app.models"

    def test_escaping_relative_import_skipped(self) -> None:
        imports = ImportAnalyzer().analyze(make_tree("from ...x import y"), "app.models")

        assert imports == ()


class TestImportAnalyzerScopes:
    """Tests for imports outside module level."""

    def test_type_checking_and_local_imports_in_source_order(self) -> None:
        code = (
            "from typing import TYPE_CHECKING\n"
            "if TYPE_CHECKING:\n"
            "    from app.models import User\n"
            "def f():\n"
            "    import json\n"
        )
        imports = ImportAnalyzer().analyze(make_tree(code), "app.svc")

        assert [imp.bound_name for imp in imports] == ["TYPE_CHECKING", "User", "json"]

    def test_is_type_checking_block(self) -> None:
        bare = make_tree("if TYPE_CHECKING:\n    pass").body[0]
        qualified = make_tree("if typing.TYPE_CHECKING:\n    pass").body[0]
        other = make_tree("if DEBUG:\n    pass").body[0]
        assert isinstance(bare, ast.If)
        assert isinstance(qualified, ast.If)
        assert isinstance(other, ast.If)

        assert is_type_checking_block(bare) is True
        assert is_type_checking_block(qualified) is True
        assert is_type_checking_block(other) is False

    def test_convert_import_star(self) -> None:
        node = make_tree("from app.models import *").body[0]
        assert isinstance(node, ast.ImportFrom)

        imports = convert_import(node, "app.svc")

        assert imports[0].is_star is True

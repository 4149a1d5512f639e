"""Tests for ConsoleReporter and JsonReporter.

Tests:
- ConsoleConfig defaults
- console summary, tree, source and unresolved output
- JSON schema
"""

import json
import re
from pathlib import Path

from callslice.application.reporters.console import ConsoleConfig, ConsoleReporter
from callslice.application.reporters.json import JsonReporter
from callslice.domain.model.artifact import Artifact
from callslice.domain.model.call_kind import CallKind
from callslice.domain.model.entry_point import EntryPoint
from callslice.domain.model.reference_collection import ReferenceCollection
from callslice.domain.model.slice_result import SliceResult
from tests.factories import make_reference

SVC = Path("/project/src/app/svc.py")
MODELS = Path("/project/src/app/models.py")
SOURCE = "from __future__ import annotations\n# app/svc.py\nclass Service:\n pass\n"

_ANSI = re.compile(r"\x1b\[[0-9;]*m")


def plain(text: str) -> str:
    return _ANSI.sub("", text)


def resolved_result() -> SliceResult:
    root = make_reference("app.svc.Service", "run", file_path=SVC)
    make_reference("app.models.User", "save", file_path=MODELS, parent=root)
    make_reference("app.models.User", None, kind=CallKind.PARAMETER_TYPE, file_path=MODELS, parent=root)
    references = ReferenceCollection()
    references.add(root)
    return SliceResult(
        entry_point=EntryPoint("app.svc.Service", "run"),
        references=references,
        artifact=Artifact.from_source(SOURCE, file_count=2, cached_tree_count=3),
        elapsed_s=0.25,
    )


def unresolved_result() -> SliceResult:
    return SliceResult(
        entry_point=EntryPoint("app.svc.Missing", "run"),
        references=ReferenceCollection(),
        artifact=None,
    )


class TestConsoleConfig:
    """Tests for ConsoleConfig."""

    def test_default_values(self) -> None:
        config = ConsoleConfig()
        assert config.show_tree is True
        assert config.show_source is False
        assert config.show_paths is False
        assert config.width == 120


class TestConsoleReporter:
    """Tests for ConsoleReporter."""

    def test_header_and_summary(self) -> None:
        output = plain(ConsoleReporter().report(resolved_result()))

        assert "CALL SLICE app.svc.Service.run" in output
        assert "References: 3" in output
        assert "Files: 2" in output
        assert "Max depth: 1" in output
        assert "Artifact: 2 files, 4 lines" in output
        assert "parsed 3 files" in output

    def test_tree_labels(self) -> None:
        output = plain(ConsoleReporter().report(resolved_result()))

        assert "app.svc.Service.run method_call" in output
        assert "app.models.User.save method_call" in output
        assert "app.models.User parameter_type" in output

    def test_tree_hidden(self) -> None:
        output = plain(ConsoleReporter(ConsoleConfig(show_tree=False)).report(resolved_result()))

        assert "method_call" not in output

    def test_paths_shown(self) -> None:
        output = plain(ConsoleReporter(ConsoleConfig(show_paths=True)).report(resolved_result()))

        assert str(MODELS) in output

    def test_source_shown(self) -> None:
        output = plain(ConsoleReporter(ConsoleConfig(show_source=True)).report(resolved_result()))

        assert "SOURCE" in output
        assert "# app/svc.py\nclass Service:\n pass" in output

    def test_source_hidden_by_default(self) -> None:
        output = plain(ConsoleReporter().report(resolved_result()))

        assert "class Service:" not in output

    def test_unresolved(self) -> None:
        output = plain(ConsoleReporter().report(unresolved_result()))

        assert "Entry point not found: app.svc.Missing::run" in output
        assert "References:" not in output

    def test_markup_in_names_escaped(self) -> None:
        """Square brackets in names are printed, not parsed as markup."""
        result = SliceResult(
            entry_point=EntryPoint("app.[bold]x", "run"),
            references=ReferenceCollection(),
            artifact=None,
        )

        output = plain(ConsoleReporter().report(result))

        assert "app.[bold]x::run" in output


class TestJsonReporter:
    """Tests for JsonReporter."""

    def test_schema(self) -> None:
        data = json.loads(JsonReporter().report(resolved_result()))

        assert set(data) == {"entry_point", "resolved", "references", "files", "artifact", "elapsed_s"}
        assert data["entry_point"] == {"class_name": "app.svc.Service", "method_name": "run"}
        assert data["resolved"] is True
        assert data["files"] == [str(SVC), str(MODELS)]
        assert data["elapsed_s"] == 0.25

    def test_reference_tree(self) -> None:
        data = json.loads(JsonReporter().report(resolved_result()))

        (root,) = data["references"]
        assert root["fully_qualified_name"] == "app.svc.Service.run"
        assert root["depth"] == 0
        assert [child["kind"] for child in root["children"]] == ["method_call", "parameter_type"]
        assert root["children"][1]["member_name"] is None

    def test_artifact(self) -> None:
        data = json.loads(JsonReporter().report(resolved_result()))

        assert data["artifact"] == {
            "file_count": 2,
            "byte_count": len(SOURCE),
            "line_count": 4,
            "cached_tree_count": 3,
            "source": SOURCE,
        }

    def test_source_excluded(self) -> None:
        data = json.loads(JsonReporter(include_source=False).report(resolved_result()))

        assert "source" not in data["artifact"]

    def test_unresolved(self) -> None:
        data = json.loads(JsonReporter().report(unresolved_result()))

        assert data["resolved"] is False
        assert data["references"] == []
        assert data["artifact"] is None

    def test_compact(self) -> None:
        output = JsonReporter(indent=None).report(unresolved_result())

        assert "\n" not in output

"""End-to-end tests for the document commands."""

from collections.abc import Callable
from pathlib import Path

import orjson
import pytest

from fmedit.cli._commands import ExitCode

type RunCli = Callable[..., int]
type WritePage = Callable[[str, str], Path]

ITEM_JSON = """{
  "identifier": "inv_item",
  "title": "Inventory Item",
  "count": 32,
  "tags": ["tool", "metal"],
  "meta": {"author": "sam"}
}
"""

ITEM_PAGE = """---
title: Inventory Item
inventory:
  items:
  - AKG Wired Earbuds
  - Steel Series Arctis 5 Cable
---
# Inventory Item

Notes stay untouched.
"""


@pytest.fixture
def item(write_page: WritePage) -> Path:
    return write_page("item.json", ITEM_JSON)


@pytest.fixture
def page(write_page: WritePage) -> Path:
    return write_page("item.md", ITEM_PAGE)


def _read(path: Path) -> dict[str, object]:
    return orjson.loads(path.read_bytes())


def _event(capsys: pytest.CaptureFixture[str]) -> object:
    return orjson.loads(capsys.readouterr().out)


class TestSet:
    def test_sets_text(
        self, fmedit_cli: RunCli, item: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = fmedit_cli("set", str(item), "meta.author", "kim")

        assert code == ExitCode.SUCCESS
        assert _read(item)["meta"] == {"author": "kim"}
        assert _event(capsys) == {
            "path": ["meta", "author"],
            "oldValue": "sam",
            "newValue": "kim",
        }

    def test_number_keeps_type(self, fmedit_cli: RunCli, item: Path) -> None:
        code = fmedit_cli("set", str(item), "count", "43")

        assert code == ExitCode.SUCCESS
        assert _read(item)["count"] == 43

    def test_json_scalar(self, fmedit_cli: RunCli, item: Path) -> None:
        code = fmedit_cli("set", str(item), "title", "null", "--json")

        assert code == ExitCode.SUCCESS
        assert _read(item)["title"] is None

    def test_noop_prints_null_and_keeps_file(
        self, fmedit_cli: RunCli, item: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = fmedit_cli("set", str(item), "title", "Inventory Item")

        assert code == ExitCode.SUCCESS
        assert _event(capsys) is None
        assert item.read_text() == ITEM_JSON

    def test_dry_run_keeps_file(
        self, fmedit_cli: RunCli, item: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = fmedit_cli("set", str(item), "title", "New", "--dry-run")

        assert code == ExitCode.SUCCESS
        assert item.read_text() == ITEM_JSON
        assert _event(capsys) == {
            "path": ["title"],
            "oldValue": "Inventory Item",
            "newValue": "New",
        }

    def test_missing_key(self, fmedit_cli: RunCli, item: Path) -> None:
        assert fmedit_cli("set", str(item), "nope", "x") == ExitCode.NOT_FOUND

    def test_not_a_leaf(self, fmedit_cli: RunCli, item: Path) -> None:
        code = fmedit_cli("set", str(item), "meta", "x")

        assert code == ExitCode.VALIDATION_ERROR


class TestKeys:
    def test_rename_keeps_position(self, fmedit_cli: RunCli, item: Path) -> None:
        code = fmedit_cli("rename", str(item), "", "title", "name")

        assert code == ExitCode.SUCCESS
        assert list(_read(item)) == ["identifier", "name", "count", "tags", "meta"]

    def test_rename_duplicate_rejected(
        self, fmedit_cli: RunCli, item: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = fmedit_cli("rename", str(item), "", "title", "identifier")

        assert code == ExitCode.VALIDATION_ERROR
        assert "identifier" in capsys.readouterr().err
        assert item.read_text() == ITEM_JSON

    def test_add_placeholder_field(
        self, fmedit_cli: RunCli, item: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = fmedit_cli("add", str(item), "meta", "section")

        assert code == ExitCode.SUCCESS
        assert _read(item)["meta"] == {"author": "sam", "new_section": {}}
        assert _event(capsys) == {
            "path": ["meta"],
            "oldValue": {"author": "sam"},
            "newValue": {"author": "sam", "new_section": {}},
        }

    def test_add_with_key(self, fmedit_cli: RunCli, item: Path) -> None:
        code = fmedit_cli("add", str(item), "", "array", "--key", "parts")

        assert code == ExitCode.SUCCESS
        assert _read(item)["parts"] == []

    def test_add_numbers_taken_placeholder(
        self, fmedit_cli: RunCli, item: Path
    ) -> None:
        _ = fmedit_cli("add", str(item), "", "field")
        _ = fmedit_cli("add", str(item), "", "field")

        assert list(_read(item))[-2:] == ["new_field", "new_field_1"]

    def test_remove(self, fmedit_cli: RunCli, item: Path) -> None:
        code = fmedit_cli("remove", str(item), "", "tags")

        assert code == ExitCode.SUCCESS
        assert "tags" not in _read(item)

    def test_merge(self, fmedit_cli: RunCli, item: Path) -> None:
        code = fmedit_cli(
            "merge", str(item), '{"title": "Renamed", "status": "draft"}'
        )

        assert code == ExitCode.SUCCESS
        data = _read(item)
        assert list(data) == ["identifier", "title", "count", "tags", "meta", "status"]
        assert data["title"] == "Renamed"

    @pytest.mark.parametrize("fields", ["{not json", "[1, 2]"])
    def test_merge_rejects_non_objects(
        self, fmedit_cli: RunCli, item: Path, fields: str
    ) -> None:
        code = fmedit_cli("merge", str(item), fields)

        assert code == ExitCode.VALIDATION_ERROR
        assert item.read_text() == ITEM_JSON


class TestLists:
    def test_add_item(self, fmedit_cli: RunCli, item: Path) -> None:
        code = fmedit_cli("add-item", str(item), "tags")

        assert code == ExitCode.SUCCESS
        assert _read(item)["tags"] == ["tool", "metal", ""]

    def test_set_item(self, fmedit_cli: RunCli, item: Path) -> None:
        code = fmedit_cli("set-item", str(item), "tags", "1", "steel")

        assert code == ExitCode.SUCCESS
        assert _read(item)["tags"] == ["tool", "steel"]

    def test_remove_item(
        self, fmedit_cli: RunCli, item: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = fmedit_cli("remove-item", str(item), "tags", "0")

        assert code == ExitCode.SUCCESS
        assert _read(item)["tags"] == ["metal"]
        assert _event(capsys) == {
            "path": ["tags"],
            "oldValue": ["tool", "metal"],
            "newValue": ["metal"],
        }

    def test_index_out_of_range(self, fmedit_cli: RunCli, item: Path) -> None:
        code = fmedit_cli("remove-item", str(item), "tags", "5")

        assert code == ExitCode.VALIDATION_ERROR

    def test_remove_path_into_list(self, fmedit_cli: RunCli, item: Path) -> None:
        code = fmedit_cli("remove-path", str(item), "tags.0")

        assert code == ExitCode.SUCCESS
        assert _read(item)["tags"] == ["metal"]

    def test_remove_path_section_key(
        self, fmedit_cli: RunCli, item: Path
    ) -> None:
        code = fmedit_cli("remove-path", str(item), "meta.author")

        assert code == ExitCode.SUCCESS
        assert _read(item)["meta"] == {}


class TestMarkdownPages:
    def test_edit_keeps_body(self, fmedit_cli: RunCli, page: Path) -> None:
        code = fmedit_cli(
            "set-item", str(page), "inventory.items", "0", "Sony Earbuds"
        )

        assert code == ExitCode.SUCCESS
        expected = ITEM_PAGE.replace("AKG Wired Earbuds", "Sony Earbuds")
        assert page.read_text() == expected

    def test_edit_keeps_dates_unquoted(
        self, fmedit_cli: RunCli, write_page: WritePage
    ) -> None:
        path = write_page("dated.md", "---\ntitle: Old\ncreated: 2024-01-01\n---\n")

        code = fmedit_cli("set", str(path), "title", "New")

        assert code == ExitCode.SUCCESS
        assert path.read_text() == "---\ntitle: New\ncreated: 2024-01-01\n---\n"

    def test_show_yaml_keeps_dates_unquoted(
        self,
        fmedit_cli: RunCli,
        write_page: WritePage,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        path = write_page("dated.md", "---\ncreated: 2024-01-01\n---\n")

        code = fmedit_cli("show", str(path), "--format", "yaml")

        assert code == ExitCode.SUCCESS
        assert capsys.readouterr().out == "created: 2024-01-01\n"

    def test_show_tree(
        self, fmedit_cli: RunCli, page: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = fmedit_cli("show", str(page))

        out = capsys.readouterr().out
        assert code == ExitCode.SUCCESS
        assert "title: Inventory Item" in out
        assert "items [2]" in out
        assert out.index("title") < out.index("inventory")

    def test_show_json(
        self, fmedit_cli: RunCli, page: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = fmedit_cli("show", str(page), "--format", "json")

        assert code == ExitCode.SUCCESS
        data = _event(capsys)
        assert isinstance(data, dict)
        assert list(data) == ["title", "inventory"]

    def test_flatten(
        self, fmedit_cli: RunCli, item: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = fmedit_cli("flatten", str(item))

        assert code == ExitCode.SUCCESS
        assert capsys.readouterr().out.splitlines() == [
            "identifier: inv_item",
            "title: Inventory Item",
            "count: 32",
            "meta.author: sam",
        ]

    def test_flatten_json(
        self, fmedit_cli: RunCli, item: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = fmedit_cli("flatten", str(item), "--format", "json")

        assert code == ExitCode.SUCCESS
        assert _event(capsys) == {
            "identifier": "inv_item",
            "title": "Inventory Item",
            "count": "32",
            "meta.author": "sam",
        }


class TestErrors:
    def test_missing_file(self, fmedit_cli: RunCli, tmp_path: Path) -> None:
        code = fmedit_cli("show", str(tmp_path / "missing.json"))

        assert code == ExitCode.NOT_FOUND

    def test_unsupported_suffix(
        self, fmedit_cli: RunCli, write_page: WritePage
    ) -> None:
        path = write_page("notes.txt", "title: x\n")

        assert fmedit_cli("show", str(path)) == ExitCode.IO_ERROR

    def test_invalid_json(self, fmedit_cli: RunCli, write_page: WritePage) -> None:
        path = write_page("broken.json", "{")

        assert fmedit_cli("flatten", str(path)) == ExitCode.IO_ERROR


class TestConfigCommands:
    def test_schema(
        self, fmedit_cli: RunCli, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = fmedit_cli("config", "schema")

        assert code == ExitCode.SUCCESS
        schema = _event(capsys)
        assert isinstance(schema, dict)
        assert set(schema["properties"]) == {"editor", "logging"}

    def test_show_defaults(
        self, fmedit_cli: RunCli, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = fmedit_cli("config", "show", "--format", "json", "--defaults")

        assert code == ExitCode.SUCCESS
        data = _event(capsys)
        assert isinstance(data, dict)
        assert data["editor"]["field_key"] == "new_field"

    def test_malformed_front_matter_keeps_page(
        self, fmedit_cli: RunCli, write_page: WritePage
    ) -> None:
        content = "---\ntitle: [unclosed\n---\nbody\n"
        path = write_page("broken.md", content)

        code = fmedit_cli("set", str(path), "title", "x")

        assert code == ExitCode.IO_ERROR
        assert path.read_text() == content

import pytest

from fmedit.exceptions import DocumentFormatError
from fmedit.storage import dump_yaml, load_yaml, parse_frontmatter, render_frontmatter

PAGE = """---
title: Inventory Item
tags:
- tool
- metal
---
# Heading

Body text.
"""


class TestParseFrontmatter:
    def test_splits_block_and_body(self) -> None:
        wire, body = parse_frontmatter(PAGE)

        assert wire == {"title": "Inventory Item", "tags": ["tool", "metal"]}
        assert body == "# Heading\n\nBody text.\n"

    def test_keeps_key_order(self) -> None:
        wire, _ = parse_frontmatter("---\nz: 1\na: 2\nm: 3\n---\n")

        assert wire is not None
        assert list(wire) == ["z", "a", "m"]

    def test_empty_block(self) -> None:
        assert parse_frontmatter("---\n---\nbody") == ({}, "body")

    def test_closing_fence_at_end_of_file(self) -> None:
        assert parse_frontmatter("---\na: 1\n---") == ({"a": 1}, "")

    @pytest.mark.parametrize(
        "content",
        ["no front matter\n", "---\na: 1\nnever closed\n", ""],
    )
    def test_without_fenced_block_returns_whole_content(self, content: str) -> None:
        assert parse_frontmatter(content) == (None, content)

    @pytest.mark.parametrize(
        "content",
        ["---\n- a\n- b\n---\nbody\n", "---\na: [unclosed\n---\nbody\n"],
    )
    def test_unusable_block_raises(self, content: str) -> None:
        with pytest.raises(DocumentFormatError):
            _ = parse_frontmatter(content)

    def test_dates_stay_text(self) -> None:
        wire, _ = parse_frontmatter("---\ncreated: 2024-01-01\n---\n")

        assert wire == {"created": "2024-01-01"}

    def test_body_kept_byte_for_byte(self) -> None:
        body = "line one\r\n\n---\nnot front matter\n"

        _, parsed_body = parse_frontmatter("---\na: 1\n---\n" + body)

        assert parsed_body == body


class TestRender:
    def test_dump_yaml_block_style_in_order(self) -> None:
        text = dump_yaml({"title": "Ünïcode", "tags": ["a"], "meta": {"k": None}})

        assert text == "title: Ünïcode\ntags:\n- a\nmeta:\n  k: null\n"

    def test_render_round_trips(self) -> None:
        wire, body = parse_frontmatter(PAGE)
        assert wire is not None

        assert render_frontmatter(wire, body) == PAGE

    def test_render_empty_document(self) -> None:
        assert render_frontmatter({}, "body\n") == "---\n---\nbody\n"

    def test_date_like_strings_written_unquoted(self) -> None:
        text = dump_yaml({"created": "2024-01-01", "at": "2024-01-01 10:00:00"})

        assert text == "created: 2024-01-01\nat: 2024-01-01 10:00:00\n"
        assert load_yaml(text) == {
            "created": "2024-01-01",
            "at": "2024-01-01 10:00:00",
        }

    def test_other_scalars_still_typed(self) -> None:
        assert load_yaml("n: 3\nok: true\nnone: null\nword: 'true'\n") == {
            "n": 3,
            "ok": True,
            "none": None,
            "word": "true",
        }
        assert dump_yaml({"word": "true", "n": "3"}) == "word: 'true'\nn: '3'\n"

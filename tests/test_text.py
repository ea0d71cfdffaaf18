"""Tests for notemark.text: plain-text extraction."""

import pytest

from notemark import convert, extract_text, to_plain_text


class TestExtractText:
    def test_heading(self) -> None:
        doc = convert("# Hello **World**")
        assert extract_text(doc.content[0]) == "Hello World"

    def test_link_keeps_label(self) -> None:
        assert to_plain_text("read [the docs](https://x.y) now") == "read the docs now"

    def test_wiki_link_keeps_label(self) -> None:
        assert to_plain_text("see [[Target|label]] and [[Other]]") == "see label and Other"

    def test_image_keeps_alt(self) -> None:
        assert to_plain_text("![a cat](cat.png)") == "a cat"

    def test_code_content_is_kept(self) -> None:
        assert to_plain_text("```py\nx = 1\n```") == "x = 1"
        assert to_plain_text("run `make`") == "run make"


class TestMarkersRemoved:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("## Plans", "Plans"),
            ("> quoted", "quoted"),
            ("- item", "item"),
            ("1. first", "first"),
            ("- [ ] todo", "todo"),
            ("- [x] done", "done"),
            ("**bold** and *italic*", "bold and italic"),
            ("__b__ _i_ ~~s~~", "b i s"),
        ],
    )
    def test_markup_is_stripped(self, source: str, expected: str) -> None:
        assert to_plain_text(source) == expected

    def test_horizontal_rule_contributes_nothing(self) -> None:
        assert to_plain_text("above\n\n---\n\nbelow") == "above\n\nbelow"


class TestLayout:
    def test_blocks_separated_by_blank_line(self) -> None:
        assert to_plain_text("# Title\n\nbody") == "Title\n\nbody"

    def test_list_items_on_separate_lines(self) -> None:
        assert to_plain_text("- a\n- b\n- c") == "a\nb\nc"

    def test_table_rows_and_cells(self) -> None:
        assert to_plain_text("| a | b |\n|---|---|\n| 1 | 2 |") == "a b\n1 2"

    def test_result_is_trimmed(self) -> None:
        assert to_plain_text("\n\n  hello  \n\n") == "hello"

    def test_empty(self) -> None:
        assert to_plain_text("") == ""

    def test_no_runs_of_three_newlines(self) -> None:
        text = to_plain_text("a\n\n---\n\n---\n\n```\n```\n\nb")
        assert "\n\n\n" not in text
        assert text == "a\n\nb"

    def test_plain_paragraphs_round_trip(self) -> None:
        source = "first paragraph\nwrapped\n\nsecond one"
        assert to_plain_text(source) == source

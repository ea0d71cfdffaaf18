"""Property-based tests for the never-fail guarantees using Hypothesis.

Conversion, rendering and plain-text extraction must succeed on any string,
and every converted tree must satisfy the structural invariants.
"""

import json
from html.parser import HTMLParser

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from notemark import convert, extract_text, render, render_html, to_dict, to_plain_text, validate

# Characters that drive every block and inline rule
_MARKDOWN_ALPHABET = "#>-*+_|`[]()!~:x1. \t\n\\<&\"'"

_markdown = st.text(alphabet=_MARKDOWN_ALPHABET, max_size=300)

_VOID_TAGS = frozenset(("br", "hr", "img", "input"))


class _TagBalanceChecker(HTMLParser):
    """Track open tags; records a problem on any mismatched close."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.stack: list[str] = []
        self.problems: list[str] = []

    def handle_starttag(self, tag: str, attrs: list) -> None:  # type: ignore[type-arg]
        if tag not in _VOID_TAGS:
            self.stack.append(tag)

    def handle_startendtag(self, tag: str, attrs: list) -> None:  # type: ignore[type-arg]
        # Self-closing tags (<br />, <img />) never open anything
        pass

    def handle_endtag(self, tag: str) -> None:
        if not self.stack or self.stack[-1] != tag:
            self.problems.append(f"unexpected </{tag}> with stack {self.stack}")
            return
        self.stack.pop()


def _assert_balanced(html: str) -> None:
    checker = _TagBalanceChecker()
    checker.feed(html)
    checker.close()
    assert not checker.problems, checker.problems
    assert not checker.stack, f"unclosed tags: {checker.stack}"


class TestNeverFails:
    @given(st.text(max_size=500))
    @settings(max_examples=200)
    def test_convert_any_text(self, source: str) -> None:
        doc = convert(source)
        assert doc.type == "doc"
        assert doc.content

    @given(_markdown)
    @settings(max_examples=300)
    def test_render_markdown_alphabet(self, source: str) -> None:
        assert isinstance(render_html(source), str)

    @given(st.text(max_size=500))
    @settings(max_examples=200)
    def test_plain_text_any_text(self, source: str) -> None:
        text = to_plain_text(source)
        assert "\n\n\n" not in text
        assert text == text.strip()

    @pytest.mark.parametrize(
        "source",
        [
            "",
            "|",
            "||||||",
            "| | | |\n| | |",
            "`",
            "```",
            "``````",
            "```\n```\n```",
            "*" * 200,
            "_" * 200,
            "~" * 200,
            "[" * 100 + "]" * 100,
            "**" * 60 + "x" + "**" * 60,
            "*a " * 80 + "b*" * 80,
            "> " * 50,
            "- " * 50,
            "# " * 10,
        ],
    )
    def test_pathological_inputs(self, source: str) -> None:
        html = render_html(source)
        _assert_balanced(html)
        validate(convert(source))
        to_plain_text(source)


class TestTreeInvariants:
    @given(_markdown)
    @settings(max_examples=300)
    def test_converted_tree_validates(self, source: str) -> None:
        validate(convert(source))

    @given(_markdown)
    @settings(max_examples=200)
    def test_editor_json_never_uses_internal_names(self, source: str) -> None:
        assert "tableHeaderCell" not in json.dumps(to_dict(convert(source)))


class TestHtmlWellFormed:
    @given(_markdown)
    @settings(max_examples=300)
    def test_tags_are_balanced(self, source: str) -> None:
        _assert_balanced(render_html(source))

    @given(st.text(alphabet="<>&\"' abc\n", max_size=100))
    @settings(max_examples=200)
    def test_raw_html_never_survives(self, source: str) -> None:
        html = render_html(source)
        checker = _TagBalanceChecker()
        checker.feed(html)
        assert not ({"script", "a", "b", "c"} & set(checker.stack))
        assert "<a" not in html.replace("<a href", "")


class TestPlainTextProperties:
    @given(st.lists(st.from_regex(r"[a-z]+( [a-z]+)*", fullmatch=True), min_size=1, max_size=5))
    @settings(max_examples=100)
    def test_plain_paragraphs_unchanged(self, paragraphs: list[str]) -> None:
        source = "\n\n".join(paragraphs)
        assert to_plain_text(source) == source

    @given(st.from_regex(r"[a-z]+( [a-z]+)*", fullmatch=True))
    @settings(max_examples=100)
    def test_plain_text_is_one_run(self, source: str) -> None:
        doc = convert(source)
        assert len(doc.content) == 1
        runs = doc.content[0].content
        assert len(runs) == 1
        assert runs[0].text == source

    @given(
        st.sampled_from(["# ", "## ", "> ", "- ", "1. ", "- [ ] ", "- [x] "]),
        st.sampled_from(["**", "*", "__", "_", "`", "~~"]),
        st.from_regex(r"[a-z]+( [a-z]+)*", fullmatch=True),
    )
    @settings(max_examples=150)
    def test_markup_markers_removed(self, prefix: str, delimiter: str, words: str) -> None:
        text = to_plain_text(f"{prefix}{delimiter}{words}{delimiter}")
        assert text == words

    @given(_markdown)
    @settings(max_examples=100)
    def test_extract_text_matches_to_plain_text(self, source: str) -> None:
        assert extract_text(convert(source)) == to_plain_text(source)

    @given(_markdown)
    @settings(max_examples=100)
    def test_render_matches_render_html(self, source: str) -> None:
        assert render(convert(source)) == render_html(source)

"""Tests for notemark.parsing.inline: runs and marks."""

from notemark import ConvertConfig, convert_config_context, parse_inline
from notemark.nodes import Node


def _runs(text: str) -> list[tuple[str | None, list[str]]]:
    """(text, mark types) per run, for compact assertions."""
    return [(run.text, [m.type for m in run.marks]) for run in parse_inline(text)]


def _link_attrs(run: Node) -> dict:
    return next(m.attrs for m in run.marks if m.type == "link")


class TestPlainText:
    def test_empty_input(self) -> None:
        assert parse_inline("") == []

    def test_plain_text_is_one_run(self) -> None:
        assert _runs("call the plumber") == [("call the plumber", [])]

    def test_newlines_are_kept(self) -> None:
        assert _runs("first\nsecond") == [("first\nsecond", [])]

    def test_unmatched_delimiters_are_literal(self) -> None:
        assert _runs("**unclosed") == [("**unclosed", [])]
        assert _runs("a ~ b ` c [d") == [("a ~ b ` c [d", [])]

    def test_snake_case_stays_literal(self) -> None:
        """Underscores inside words never open emphasis."""
        assert _runs("rename snake_case_name now") == [("rename snake_case_name now", [])]


class TestEmphasis:
    def test_bold(self) -> None:
        assert _runs("**bold**") == [("bold", ["bold"])]

    def test_bold_underscore(self) -> None:
        assert _runs("__bold__") == [("bold", ["bold"])]

    def test_italic(self) -> None:
        assert _runs("*it*") == [("it", ["italic"])]
        assert _runs("_it_") == [("it", ["italic"])]

    def test_bold_italic_is_one_run(self) -> None:
        """Triple delimiters give bold around italic."""
        assert _runs("***both***") == [("both", ["bold", "italic"])]

    def test_italic_containing_bold(self) -> None:
        assert _runs("*a **b** c*") == [
            ("a ", ["italic"]),
            ("b", ["italic", "bold"]),
            (" c", ["italic"]),
        ]

    def test_text_around_emphasis(self) -> None:
        assert _runs("buy **milk** today") == [
            ("buy ", []),
            ("milk", ["bold"]),
            (" today", []),
        ]

    def test_strikethrough(self) -> None:
        assert _runs("~~gone~~") == [("gone", ["strike"])]

    def test_strikethrough_parses_inner_marks(self) -> None:
        assert _runs("~~**x**~~") == [("x", ["strike", "bold"])]


class TestCode:
    def test_code_span(self) -> None:
        assert _runs("run `make test`") == [("run ", []), ("make test", ["code"])]

    def test_code_is_not_rescanned(self) -> None:
        assert _runs("`**x**`") == [("**x**", ["code"])]

    def test_code_excludes_outer_marks(self) -> None:
        assert _runs("**a `c`**") == [("a ", ["bold"]), ("c", ["code"])]


class TestLinks:
    def test_markdown_link(self) -> None:
        runs = parse_inline("[site](https://example.com)")
        assert len(runs) == 1
        assert runs[0].text == "site"
        assert _link_attrs(runs[0]) == {"href": "https://example.com", "target": "_blank"}

    def test_link_inside_bold(self) -> None:
        runs = parse_inline("**[x](u)**")
        assert [m.type for m in runs[0].marks] == ["bold", "link"]

    def test_wiki_link(self) -> None:
        runs = parse_inline("see [[Project Ideas]]")
        assert runs[0].text == "see "
        assert runs[1].text == "Project Ideas"
        assert _link_attrs(runs[1]) == {"href": "#project-ideas", "target": "_self"}

    def test_wiki_link_with_label(self) -> None:
        runs = parse_inline("[[My Page|here]]")
        assert runs[0].text == "here"
        assert _link_attrs(runs[0])["href"] == "#my-page"

    def test_link_target_from_config(self) -> None:
        with convert_config_context(ConvertConfig(link_target="_self")):
            runs = parse_inline("[a](b)")
        assert _link_attrs(runs[0])["target"] == "_self"


class TestImages:
    def test_image(self) -> None:
        runs = parse_inline("![logo](img.png)")
        assert len(runs) == 1
        assert runs[0].type == "image"
        assert runs[0].attrs == {"src": "img.png", "alt": "logo"}
        assert runs[0].text is None

    def test_image_with_empty_alt(self) -> None:
        runs = parse_inline("![](a.png)")
        assert runs[0].attrs == {"src": "a.png", "alt": ""}

    def test_image_wins_over_link(self) -> None:
        runs = parse_inline("x ![a](b) y")
        assert [run.type for run in runs] == ["text", "image", "text"]


class TestNestingDepth:
    def test_depth_limit_keeps_inner_text_literal(self) -> None:
        with convert_config_context(ConvertConfig(max_inline_depth=1)):
            assert _runs("~~**_x_**~~") == [("_x_", ["strike", "bold"])]

    def test_deep_nesting_does_not_raise(self) -> None:
        source = "*" * 120 + "x" + "*" * 120
        runs = parse_inline(source)
        assert "".join(run.text or "" for run in runs).count("x") == 1


class TestUnmatchedBrackets:
    def test_long_bracket_run_is_literal(self) -> None:
        source = "[" * 20000
        assert _runs(source) == [(source, [])]

    def test_many_unclosed_links_are_literal(self) -> None:
        source = "[a](b " * 5000
        assert _runs(source) == [(source, [])]

    def test_label_starts_after_last_open_bracket(self) -> None:
        runs = parse_inline("[a [b](u)")
        assert runs[0].text == "[a "
        assert runs[1].text == "b"
        assert _link_attrs(runs[1])["href"] == "u"


class TestRunMerging:
    def test_no_empty_runs(self) -> None:
        for source in ["****", "``", "~~~~", "[]()", "a**b"]:
            assert all(run.text for run in parse_inline(source) if run.type == "text")

    def test_adjacent_runs_with_same_marks_merge(self) -> None:
        runs = parse_inline("a*b")
        assert len(runs) == 1
        assert runs[0].text == "a*b"

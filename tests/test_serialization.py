"""Tests for notemark.serialization: editor JSON and tree validation."""

import json

import pytest

from notemark import (
    NotemarkError,
    TreeError,
    convert,
    from_dict,
    from_json,
    to_dict,
    to_json,
    validate,
)
from notemark.nodes import Mark, Node, document, heading, paragraph, text_node


class TestToDict:
    def test_editor_shape(self) -> None:
        assert to_dict(convert("**hi**")) == {
            "type": "doc",
            "content": [
                {
                    "type": "paragraph",
                    "content": [{"type": "text", "text": "hi", "marks": [{"type": "bold"}]}],
                }
            ],
        }

    def test_heading_attrs(self) -> None:
        data = to_dict(convert("## Two"))
        assert data["content"][0]["attrs"] == {"level": 2}

    def test_link_mark_attrs(self) -> None:
        run = to_dict(convert("[a](b)"))["content"][0]["content"][0]
        assert run["marks"] == [{"type": "link", "attrs": {"href": "b", "target": "_blank"}}]

    def test_table_header_uses_editor_name(self) -> None:
        data = to_dict(convert("| a |\n|---|\n| b |"))
        rows = data["content"][0]["content"]
        assert rows[0]["content"][0]["type"] == "tableHeader"
        assert rows[1]["content"][0]["type"] == "tableCell"
        assert "tableHeaderCell" not in json.dumps(data)

    def test_horizontal_rule_has_only_type(self) -> None:
        assert to_dict(convert("---"))["content"][0] == {"type": "horizontalRule"}

    def test_to_json_is_sorted(self) -> None:
        doc = convert("# x")
        assert to_json(doc) == json.dumps(to_dict(doc), sort_keys=True)


class TestRoundTrip:
    @pytest.mark.parametrize(
        "source",
        [
            "plain",
            "# Title **b**",
            "- [ ] a\n- [x] b",
            "3. c\n4. d",
            "> q",
            "```js\nx\n```",
            "```\n```",
            "| a | b |\n|---|---|\n| 1 | 2 |",
            "![alt](src.png) and [[Wiki|w]]",
            "---",
            "",
        ],
    )
    def test_json_round_trip(self, source: str) -> None:
        doc = convert(source)
        assert from_json(to_json(doc)) == doc

    def test_missing_content_means_empty(self) -> None:
        """Editors leave out ``content`` on empty paragraphs and headings."""
        doc = from_json(
            json.dumps(
                {
                    "type": "doc",
                    "content": [
                        {"type": "paragraph"},
                        {"type": "heading", "attrs": {"level": 2}},
                        {"type": "horizontalRule"},
                    ],
                }
            )
        )
        assert doc.content[0].content == ()
        assert doc.content[1].content == ()
        assert doc.content[2].content is None

    def test_from_dict_accepts_editor_table_header(self) -> None:
        node = from_dict({"type": "tableHeader", "content": []})
        assert node.type == "tableHeaderCell"


class TestFromDictErrors:
    def test_missing_type(self) -> None:
        with pytest.raises(TreeError, match="Missing 'type'"):
            from_dict({"content": []})

    def test_unknown_type_reports_path(self) -> None:
        data = {"type": "doc", "content": [{"type": "paragraph"}, {"type": "video"}]}
        with pytest.raises(TreeError) as exc_info:
            from_dict(data)
        assert exc_info.value.path == "content[1]"
        assert "video" in str(exc_info.value)

    def test_unknown_mark(self) -> None:
        data = {"type": "text", "text": "x", "marks": [{"type": "underline"}]}
        with pytest.raises(TreeError, match="Unknown mark type"):
            from_dict(data)

    def test_wrong_field_types(self) -> None:
        with pytest.raises(TreeError):
            from_dict({"type": "paragraph", "content": "nope"})
        with pytest.raises(TreeError):
            from_dict({"type": "text", "text": 3})
        with pytest.raises(TreeError):
            from_dict({"type": "heading", "attrs": [1]})

    def test_invalid_json(self) -> None:
        with pytest.raises(TreeError, match="Invalid JSON"):
            from_json("{not json")

    def test_root_must_be_doc(self) -> None:
        with pytest.raises(TreeError, match="Expected doc"):
            from_json('{"type": "paragraph", "content": []}')

    def test_errors_are_value_errors(self) -> None:
        with pytest.raises(ValueError):
            from_json("[]")
        with pytest.raises(NotemarkError):
            from_json("[]")


class TestValidate:
    def test_converted_documents_are_valid(self) -> None:
        validate(convert("# a\n\n- b\n\n| c |\n|---|\n\n> d\n\n```\ne\n```\n\n---"))

    def test_text_and_content_are_exclusive(self) -> None:
        node = Node(type="paragraph", content=(), text="x")
        with pytest.raises(TreeError, match="must have content"):
            validate(document((node,)))

    def test_empty_text(self) -> None:
        with pytest.raises(TreeError, match="non-empty"):
            validate(document((paragraph((text_node(""),)),)))

    def test_doc_holds_only_blocks(self) -> None:
        with pytest.raises(TreeError) as exc_info:
            validate(document((text_node("loose"),)))
        assert exc_info.value.path == "content[0]"

    def test_list_holds_only_items(self) -> None:
        bad = Node(type="bulletList", content=(paragraph(),))
        with pytest.raises(TreeError, match="bulletList cannot contain paragraph"):
            validate(document((bad,)))

    def test_table_row_holds_only_cells(self) -> None:
        row = Node(type="tableRow", content=(paragraph(),))
        table = Node(type="table", content=(row,))
        with pytest.raises(TreeError) as exc_info:
            validate(document((table,)))
        assert exc_info.value.path == "content[0].content[0].content[0]"

    def test_code_mark_is_exclusive(self) -> None:
        run = text_node("x", (Mark("code"), Mark("bold")))
        with pytest.raises(TreeError, match="code mark"):
            validate(document((paragraph((run,)),)))

    @pytest.mark.parametrize("level", [0, 7, "2", True, None])
    def test_heading_level_range(self, level: object) -> None:
        node = Node(type="heading", attrs={"level": level}, content=())
        with pytest.raises(TreeError, match="Heading level"):
            validate(document((node,)))

    def test_valid_heading(self) -> None:
        validate(document((heading(6, (text_node("x"),)),)))

    def test_leaf_nodes_carry_nothing(self) -> None:
        with pytest.raises(TreeError):
            validate(document((Node(type="horizontalRule", content=()),)))

    def test_from_json_validates(self) -> None:
        bad = json.dumps({"type": "doc", "content": [{"type": "text", "text": "x"}]})
        with pytest.raises(TreeError, match="doc cannot contain text"):
            from_json(bad)

"""Editor JSON serialization for notemark document trees.

Converts trees to/from the JSON shape the rich-text editor consumes
(ProseMirror/TipTap): ``{"type", "attrs"?, "content"?, "text"?, "marks"?}``.
Also checks the structural invariants of a tree with ``validate``.

All output is deterministic (sorted keys) for cache-key stability.

Example:
    from notemark import convert
    from notemark.serialization import to_json, from_json

    doc = convert("# Hello **World**")
    json_str = to_json(doc)
    restored = from_json(json_str)
    assert doc == restored

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from typing import Any

from notemark.errors import TreeError
from notemark.nodes import (
    BLOCK_TYPES,
    CHILD_TYPES,
    INLINE_TYPES,
    LEAF_TYPES,
    MARK_TYPES,
    Mark,
    Node,
)

# Tree type -> editor type, where the editor names a node differently
_EDITOR_NAMES: dict[str, str] = {"tableHeaderCell": "tableHeader"}
_TREE_NAMES: dict[str, str] = {v: k for k, v in _EDITOR_NAMES.items()}

NODE_TYPES: frozenset[str] = (
    BLOCK_TYPES
    | INLINE_TYPES
    | frozenset(("doc", "listItem", "taskItem", "tableRow", "tableHeaderCell", "tableCell"))
)

# Node types whose children are inline runs
_INLINE_PARENTS = frozenset(("paragraph", "heading"))

# Node types whose children are blocks
_BLOCK_PARENTS = frozenset(("blockquote", "listItem", "taskItem", "tableHeaderCell", "tableCell"))


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a tree node to an editor JSON dict.

    Keys whose value is absent are omitted; ``tableHeaderCell`` is emitted
    under the editor's name ``tableHeader``.

    Args:
        node: Any tree node.

    Returns:
        JSON-compatible dict.

    """
    result: dict[str, Any] = {"type": _EDITOR_NAMES.get(node.type, node.type)}
    if node.attrs is not None:
        result["attrs"] = dict(node.attrs)
    if node.content is not None:
        result["content"] = [to_dict(child) for child in node.content]
    if node.text is not None:
        result["text"] = node.text
    if node.marks:
        result["marks"] = [_mark_to_dict(mark) for mark in node.marks]
    return result


def _mark_to_dict(mark: Mark) -> dict[str, Any]:
    if mark.attrs is None:
        return {"type": mark.type}
    return {"type": mark.type, "attrs": dict(mark.attrs)}


def from_dict(data: dict[str, Any], path: str = "") -> Node:
    """Reconstruct a tree node from an editor JSON dict.

    Checks the shape of each field; use ``validate`` for the structural
    invariants between nodes.

    Args:
        data: Dict as produced by to_dict (or by the editor).
        path: Location of ``data`` inside the enclosing document.

    Returns:
        Tree node (frozen dataclass).

    Raises:
        TreeError: If a field is missing, unknown or of the wrong type.

    """
    if not isinstance(data, dict):
        msg = f"Expected an object, got {type(data).__name__}"
        raise TreeError(msg, path)

    type_name = data.get("type")
    if type_name is None:
        msg = "Missing 'type' field in serialized node"
        raise TreeError(msg, path)
    if not isinstance(type_name, str):
        msg = f"Node type must be a string, got {type(type_name).__name__}"
        raise TreeError(msg, path)
    node_type = _TREE_NAMES.get(type_name, type_name)
    if node_type not in NODE_TYPES:
        msg = f"Unknown node type: {type_name!r}"
        raise TreeError(msg, path)

    attrs = data.get("attrs")
    if attrs is not None and not isinstance(attrs, dict):
        msg = "'attrs' must be an object"
        raise TreeError(msg, path)

    content = data.get("content")
    children: tuple[Node, ...] | None = None
    if content is not None:
        if not isinstance(content, list):
            msg = "'content' must be an array"
            raise TreeError(msg, path)
        children = tuple(
            from_dict(child, _child_path(path, i)) for i, child in enumerate(content)
        )
    elif node_type != "text" and node_type not in LEAF_TYPES:
        # Editors omit "content" on empty containers
        children = ()

    text = data.get("text")
    if text is not None and not isinstance(text, str):
        msg = "'text' must be a string"
        raise TreeError(msg, path)

    raw_marks = data.get("marks") or []
    if not isinstance(raw_marks, list):
        msg = "'marks' must be an array"
        raise TreeError(msg, path)
    marks = tuple(
        _mark_from_dict(mark, f"{path}.marks[{i}]" if path else f"marks[{i}]")
        for i, mark in enumerate(raw_marks)
    )

    return Node(type=node_type, attrs=attrs, content=children, text=text, marks=marks)


def _mark_from_dict(data: Any, path: str) -> Mark:
    if not isinstance(data, dict):
        msg = f"Expected a mark object, got {type(data).__name__}"
        raise TreeError(msg, path)
    mark_type = data.get("type")
    if mark_type not in MARK_TYPES:
        msg = f"Unknown mark type: {mark_type!r}"
        raise TreeError(msg, path)
    attrs = data.get("attrs")
    if attrs is not None and not isinstance(attrs, dict):
        msg = "Mark 'attrs' must be an object"
        raise TreeError(msg, path)
    return Mark(mark_type, attrs)


def _child_path(path: str, index: int) -> str:
    return f"{path}.content[{index}]" if path else f"content[{index}]"


def validate(node: Node, path: str = "") -> None:
    """Check the structural invariants of a tree.

    - a node has ``content`` or ``text`` but not both (``horizontalRule``
      and ``image`` have neither)
    - ``text`` is never empty, and marks appear only on text runs
    - a ``code`` mark excludes every other mark on the same run
    - ``doc`` holds only blocks; lists, tables and rows hold only their
      item, row and cell types; paragraphs and headings hold inline runs
    - ``heading.level`` is within 1..6

    Raises:
        TreeError: On the first violation, with the path of the offending node.

    """
    if node.type not in NODE_TYPES:
        raise TreeError(f"Unknown node type: {node.type!r}", path)

    if node.type in LEAF_TYPES:
        if node.content is not None or node.text is not None:
            raise TreeError(f"{node.type} must carry neither content nor text", path)
    elif node.type == "text":
        if node.content is not None:
            raise TreeError("text node cannot have content", path)
        if not node.text:
            raise TreeError("text node must have non-empty text", path)
    elif node.text is not None or node.content is None:
        raise TreeError(f"{node.type} must have content and no text", path)

    if node.marks:
        _validate_marks(node, path)

    if node.type == "heading":
        level = node.attr("level")
        if isinstance(level, bool) or not isinstance(level, int) or not 1 <= level <= 6:
            raise TreeError(f"Heading level must be within 1..6, got {level!r}", path)

    allowed = _allowed_children(node.type)
    for i, child in enumerate(node.children):
        child_path = _child_path(path, i)
        if allowed is not None and child.type not in allowed:
            raise TreeError(f"{node.type} cannot contain {child.type}", child_path)
        validate(child, child_path)


def _allowed_children(node_type: str) -> frozenset[str] | None:
    if node_type == "doc":
        return BLOCK_TYPES
    if node_type in _INLINE_PARENTS:
        return INLINE_TYPES
    if node_type == "codeBlock":
        return frozenset(("text",))
    if node_type in _BLOCK_PARENTS:
        return BLOCK_TYPES
    return CHILD_TYPES.get(node_type)


def _validate_marks(node: Node, path: str) -> None:
    if node.type != "text":
        raise TreeError(f"Only text nodes carry marks, not {node.type}", path)
    types = [mark.type for mark in node.marks]
    unknown = [t for t in types if t not in MARK_TYPES]
    if unknown:
        raise TreeError(f"Unknown mark type: {unknown[0]!r}", path)
    if "code" in types and len(types) > 1:
        raise TreeError("A code mark excludes every other mark", path)


def to_json(doc: Node, *, indent: int | None = None) -> str:
    """Serialize a tree to an editor JSON string.

    Output is deterministic (sorted keys) for cache-key stability.

    Args:
        doc: Tree to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent, ensure_ascii=False)


def from_json(data: str) -> Node:
    """Deserialize and validate a document from an editor JSON string.

    Args:
        data: JSON string (as produced by to_json or the editor).

    Returns:
        ``doc`` node.

    Raises:
        TreeError: If the JSON is malformed, doesn't represent a document,
            or breaks a tree invariant.

    """
    try:
        raw = json.loads(data)
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON: {e.msg} at line {e.lineno} column {e.colno}"
        raise TreeError(msg) from e
    node = from_dict(raw)
    if node.type != "doc":
        msg = f"Expected doc, got {node.type}"
        raise TreeError(msg)
    validate(node)
    return node

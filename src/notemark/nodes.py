"""Document tree nodes for notemark.

The tree mirrors the editor's display model (ProseMirror/TipTap JSON), so a
single generic node type carries a ``type`` tag instead of one class per
element:

Node Hierarchy:
doc
├── paragraph / heading ............ inline runs
├── bulletList / orderedList ....... listItem > paragraph
├── taskList ....................... taskItem > paragraph
├── blockquote ..................... paragraph
├── codeBlock ...................... text
├── table .......................... tableRow > tableHeaderCell | tableCell > paragraph
└── horizontalRule
inline: text (with marks), image

Thread Safety:
All nodes are frozen and never mutated after construction. They are safe to
share across threads.

"""

from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

NodeType: TypeAlias = Literal[
    "doc",
    "paragraph",
    "heading",
    "bulletList",
    "orderedList",
    "listItem",
    "taskList",
    "taskItem",
    "table",
    "tableRow",
    "tableHeaderCell",
    "tableCell",
    "blockquote",
    "codeBlock",
    "horizontalRule",
    "text",
    "image",
]

MarkType: TypeAlias = Literal["bold", "italic", "code", "strike", "link"]

BLOCK_TYPES: frozenset[str] = frozenset(
    (
        "paragraph",
        "heading",
        "bulletList",
        "orderedList",
        "taskList",
        "table",
        "blockquote",
        "codeBlock",
        "horizontalRule",
    )
)

INLINE_TYPES: frozenset[str] = frozenset(("text", "image"))

# Node types that carry neither content nor text
LEAF_TYPES: frozenset[str] = frozenset(("horizontalRule", "image"))

# Container type -> the only child type it may hold
CHILD_TYPES: dict[str, frozenset[str]] = {
    "bulletList": frozenset(("listItem",)),
    "orderedList": frozenset(("listItem",)),
    "taskList": frozenset(("taskItem",)),
    "table": frozenset(("tableRow",)),
    "tableRow": frozenset(("tableHeaderCell", "tableCell")),
}

MARK_TYPES: frozenset[str] = frozenset(("bold", "italic", "code", "strike", "link"))


@dataclass(frozen=True, slots=True)
class Mark:
    """Inline formatting attribute on a text run.

    Markdown: **bold**, *italic*, `code`, ~~strike~~, [label](href)

    """

    type: MarkType
    attrs: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class Node:
    """One element of the document tree.

    Exactly one of ``content`` and ``text`` is set, except for
    ``horizontalRule`` and ``image`` which carry neither. ``marks`` is only
    meaningful on ``text`` nodes.

    """

    type: NodeType
    attrs: dict[str, Any] | None = None
    content: tuple["Node", ...] | None = None
    text: str | None = None
    marks: tuple[Mark, ...] = ()

    def attr(self, name: str, default: Any = None) -> Any:
        """Read one attribute, falling back to ``default``."""
        if self.attrs is None:
            return default
        return self.attrs.get(name, default)

    @property
    def children(self) -> tuple["Node", ...]:
        """Child nodes, empty for text and leaf nodes."""
        return self.content or ()

    def has_mark(self, mark_type: str) -> bool:
        return any(m.type == mark_type for m in self.marks)


# =============================================================================
# Constructors
# =============================================================================


def text_node(value: str, marks: tuple[Mark, ...] = ()) -> Node:
    return Node(type="text", text=value, marks=marks)


def paragraph(content: tuple[Node, ...] | list[Node] = ()) -> Node:
    return Node(type="paragraph", content=tuple(content))


def heading(level: int, content: tuple[Node, ...] | list[Node]) -> Node:
    return Node(type="heading", attrs={"level": level}, content=tuple(content))


def code_block(code: str, language: str) -> Node:
    """Code block with one text child, or none when ``code`` is empty."""
    children = (text_node(code),) if code else ()
    return Node(type="codeBlock", attrs={"language": language}, content=children)


def horizontal_rule() -> Node:
    return Node(type="horizontalRule")


def document(content: tuple[Node, ...] | list[Node]) -> Node:
    return Node(type="doc", content=tuple(content))

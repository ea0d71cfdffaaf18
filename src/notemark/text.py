"""Extract plain text from notemark document trees.

Provides the search/preview projection of a note: formatting markers never
appear, only the words. Also used for heading slugs.

Example:
    >>> from notemark import convert, extract_text
    >>> doc = convert("# Hello **World**")
    >>> extract_text(doc.content[0])
    'Hello World'
"""

import re

from notemark.nodes import Node
from notemark.parser import convert

_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def extract_text(node: Node) -> str:
    """Extract plain text from any tree node.

    Recursively walks the tree. Inline runs contribute their text with marks
    dropped (a link keeps its label, an image its alt text). List items and
    table rows are separated by a newline, table cells by a space, and
    blocks of a document by a blank line. Horizontal rules contribute
    nothing.

    Args:
        node: Any tree node (block or inline).

    Returns:
        Plain text of the node and its descendants.

    """
    match node.type:
        case "text":
            return node.text or ""
        case "image":
            return str(node.attr("alt", ""))
        case "horizontalRule":
            return ""
        case "paragraph" | "heading" | "codeBlock" | "tableHeaderCell" | "tableCell":
            return "".join(extract_text(c) for c in node.children)
        case "bulletList" | "orderedList" | "taskList" | "listItem" | "taskItem" | "table":
            return "\n".join(extract_text(c) for c in node.children)
        case "tableRow":
            return " ".join(extract_text(c) for c in node.children)
        case "blockquote":
            return "\n\n".join(extract_text(c) for c in node.children)
        case "doc":
            text = "\n\n".join(extract_text(c) for c in node.children)
            return _EXCESS_NEWLINES.sub("\n\n", text).strip()
        case _:
            return ""


def to_plain_text(markdown: str) -> str:
    """Convert markdown to plain text for search indexing and previews.

    Lossy and one-directional; never raises.

    Example:
        >>> to_plain_text("## Plans\\n\\n- [ ] call **Sam**\\n- [x] email")
        'Plans\\n\\ncall Sam\\nemail'

    """
    return extract_text(convert(markdown))

"""Single-pass block assembler producing the document tree.

Consumes classified lines from the LineClassifier and builds the tree with a
single dispatch loop. Multi-line constructs are carried as pending state:

- an open fenced code buffer (closed by the next fence, flushed at EOF)
- a pending list (flushed when a different list kind or a non-list line
  appears, so switching markers starts a sibling list)
- a pending block quote (flushed by the first non-quote line)
- a pending paragraph (soft-wrapped lines, flushed by a blank line or any
  block construct)

Tables are collected with bounded lookahead and handed to the TableDecoder
as one unit; an undecodable table degrades to paragraph text.

Thread Safety:
Parser instances are single-use and not thread-safe. Create one per
conversion. The resulting tree is immutable and thread-safe.

"""

from __future__ import annotations

from notemark.config import get_convert_config
from notemark.lexer import LineClassifier, split_lines
from notemark.nodes import (
    Node,
    code_block,
    document,
    heading,
    horizontal_rule,
    paragraph,
)
from notemark.parsing.inline import parse_inline
from notemark.parsing.table import decode_table
from notemark.tokens import Line, LineKind
from notemark.utils.logger import get_logger

logger = get_logger(__name__)

# List line kind -> (container type, item type)
_LIST_CONTAINERS: dict[LineKind, tuple[str, str]] = {
    LineKind.TASK_ITEM: ("taskList", "taskItem"),
    LineKind.BULLET_ITEM: ("bulletList", "listItem"),
    LineKind.ORDERED_ITEM: ("orderedList", "listItem"),
}

_CLASSIFIER = LineClassifier()


class Parser:
    """Line-driven state machine for block structure.

    Usage:
            >>> doc = Parser("# Plans\\n\\n- [ ] call Sam").parse()
            >>> [child.type for child in doc.content]
            ['heading', 'taskList']

    """

    __slots__ = (
        "_lines",
        "_pos",
        "_blocks",
        # Open fenced code: language and buffered raw lines
        "_fence_language",
        "_fence_lines",
        "_fence_lineno",
        # Pending list: kind of its items and the items so far
        "_list_kind",
        "_list_items",
        "_list_start",
        "_quote_lines",
        "_paragraph_lines",
    )

    def __init__(self, source: str) -> None:
        self._lines = split_lines(source)
        self._pos = 0
        self._blocks: list[Node] = []
        self._fence_language: str | None = None
        self._fence_lines: list[str] = []
        self._fence_lineno = 0
        self._list_kind: LineKind | None = None
        self._list_items: list[Node] = []
        self._list_start = 1
        self._quote_lines: list[str] = []
        self._paragraph_lines: list[str] = []

    def parse(self) -> Node:
        """Run the dispatch loop and return the ``doc`` node."""
        while self._pos < len(self._lines):
            line = _CLASSIFIER.classify(self._lines[self._pos], self._pos + 1)
            self._pos += 1

            if self._fence_language is not None:
                self._handle_fenced_line(line)
                continue

            match line.kind:
                case LineKind.FENCE:
                    self._flush_pending()
                    self._fence_language = line.content or get_convert_config().default_language
                    self._fence_lines = []
                    self._fence_lineno = line.lineno
                case LineKind.BLANK:
                    self._flush_pending()
                case LineKind.HEADING:
                    self._flush_pending()
                    self._blocks.append(heading(line.level, parse_inline(line.content)))
                case LineKind.THEMATIC_BREAK:
                    self._flush_pending()
                    self._blocks.append(horizontal_rule())
                case LineKind.QUOTE:
                    self._flush_paragraph()
                    self._flush_list()
                    self._quote_lines.append(line.content)
                case kind if kind.is_list_item:
                    self._flush_paragraph()
                    self._flush_quote()
                    self._add_list_item(line)
                case LineKind.TABLE_ROW:
                    self._flush_pending()
                    self._consume_table(line)
                case _:
                    self._flush_quote()
                    self._flush_list()
                    self._paragraph_lines.append(line.raw)

        self._flush_pending()
        if self._fence_language is not None:
            logger.debug(
                "Unterminated code fence opened at line %d; flushing %d buffered lines",
                self._fence_lineno,
                len(self._fence_lines),
            )
            self._flush_fence()

        if not self._blocks:
            # Editors need at least one block to initialize
            return document((paragraph(),))
        return document(self._blocks)

    # =========================================================================
    # Construct handlers
    # =========================================================================

    def _handle_fenced_line(self, line: Line) -> None:
        if line.kind is LineKind.FENCE:
            self._flush_fence()
        else:
            self._fence_lines.append(line.raw)

    def _add_list_item(self, line: Line) -> None:
        if self._list_kind is not line.kind:
            self._flush_list()
            self._list_kind = line.kind
            self._list_start = line.number

        _, item_type = _LIST_CONTAINERS[line.kind]
        attrs = {"checked": line.checked} if line.kind is LineKind.TASK_ITEM else None
        self._list_items.append(
            Node(
                type=item_type,
                attrs=attrs,
                content=(paragraph(parse_inline(line.content)),),
            )
        )

    def _consume_table(self, first: Line) -> None:
        """Collect contiguous table lines and decode them.

        Blank lines are tolerated only when a table row follows them.
        """
        collected = [first.raw]
        lines = self._lines
        while self._pos < len(lines):
            raw = lines[self._pos]
            if _CLASSIFIER.is_table_continuation(raw):
                collected.append(raw)
                self._pos += 1
            elif not raw.strip():
                next_pos = self._pos + 1
                if next_pos < len(lines) and _CLASSIFIER.is_table_row(lines[next_pos]):
                    self._pos += 1
                    continue
                break
            else:
                break

        table = decode_table(collected)
        if table is not None:
            self._blocks.append(table)
            return

        logger.debug(
            "Table candidate at line %d did not decode; treating %d lines as paragraph text",
            first.lineno,
            len(collected),
        )
        self._paragraph_lines.extend(raw for raw in collected if raw.strip())

    # =========================================================================
    # Flushing
    # =========================================================================

    def _flush_pending(self) -> None:
        self._flush_paragraph()
        self._flush_quote()
        self._flush_list()

    def _flush_paragraph(self) -> None:
        if not self._paragraph_lines:
            return
        runs = parse_inline("\n".join(self._paragraph_lines))
        self._paragraph_lines = []
        if runs:
            self._blocks.append(paragraph(runs))

    def _flush_quote(self) -> None:
        if not self._quote_lines:
            return
        text = "\n".join(self._quote_lines)
        self._quote_lines = []
        self._blocks.append(Node(type="blockquote", content=(paragraph(parse_inline(text)),)))

    def _flush_list(self) -> None:
        if self._list_kind is None:
            return
        container_type, _ = _LIST_CONTAINERS[self._list_kind]
        attrs = {"start": self._list_start} if self._list_kind is LineKind.ORDERED_ITEM else None
        self._blocks.append(Node(type=container_type, attrs=attrs, content=tuple(self._list_items)))
        self._list_kind = None
        self._list_items = []
        self._list_start = 1

    def _flush_fence(self) -> None:
        language = self._fence_language or get_convert_config().default_language
        self._blocks.append(code_block("\n".join(self._fence_lines), language))
        self._fence_language = None
        self._fence_lines = []


def convert(markdown: str) -> Node:
    """Convert markdown into a document tree.

    Never raises: malformed constructs degrade to simpler ones, and empty
    input yields a document holding one empty paragraph.

    Args:
        markdown: Markdown source text

    Returns:
        ``doc`` node

    Example:
        >>> convert("- a\\n1. b").content[0].type
        'bulletList'

    """
    return Parser(markdown).parse()

"""Line classifier: one tagged Line per source line.

Every line is tried against the block patterns in a fixed priority order and
the first match wins. Classification is pure and looks at a single line;
multi-line constructs (fences, lists, quotes, tables, soft-wrapped
paragraphs) are assembled by the parser.

Thread Safety:
LineClassifier holds no state. A single instance can be shared.

"""

from __future__ import annotations

from collections.abc import Iterator

from notemark.lexer.classifiers import (
    FenceClassifierMixin,
    HeadingClassifierMixin,
    ListClassifierMixin,
    QuoteClassifierMixin,
    TableClassifierMixin,
    ThematicClassifierMixin,
)
from notemark.tokens import Line, LineKind


def split_lines(source: str) -> list[str]:
    """Split source into lines.

    ``\\r\\n`` and lone ``\\r`` are normalized to ``\\n``. A single trailing
    newline terminates the last line rather than starting an empty one.
    """
    if not source:
        return []
    normalized = source.replace("\r\n", "\n").replace("\r", "\n")
    lines = normalized.split("\n")
    if normalized.endswith("\n"):
        lines.pop()
    return lines


class LineClassifier(
    FenceClassifierMixin,
    HeadingClassifierMixin,
    ThematicClassifierMixin,
    QuoteClassifierMixin,
    ListClassifierMixin,
    TableClassifierMixin,
):
    """Classify raw lines into LineKind-tagged tokens.

    Usage:
            >>> classifier = LineClassifier()
            >>> classifier.classify("## Plans", 1)
            Line(HEADING, 'Plans', 1)
            >>> [line.kind.name for line in classifier.tokenize("- a\\n\\n1. b")]
            ['BULLET_ITEM', 'BLANK', 'ORDERED_ITEM']

    """

    __slots__ = ()

    def classify(self, raw: str, lineno: int = 0) -> Line:
        """Classify one line. First match wins."""
        if not raw.strip():
            return Line(LineKind.BLANK, raw, "", lineno)

        return (
            self._try_classify_fence(raw, lineno)
            or self._try_classify_heading(raw, lineno)
            or self._try_classify_thematic_break(raw, lineno)
            or self._try_classify_quote(raw, lineno)
            or self._try_classify_list_item(raw, lineno)
            or self._try_classify_table_row(raw, lineno)
            or Line(LineKind.PARAGRAPH, raw, raw, lineno)
        )

    def tokenize(self, source: str) -> Iterator[Line]:
        """Classify every line of a source string."""
        for index, raw in enumerate(split_lines(source)):
            yield self.classify(raw, index + 1)

    def is_table_continuation(self, raw: str) -> bool:
        """Whether a line may extend a table already being collected."""
        return self._is_table_row(raw) or self._is_table_delimiter(raw)

    def is_table_row(self, raw: str) -> bool:
        """Whether a line is a pipe-delimited table row."""
        return self._is_table_row(raw)

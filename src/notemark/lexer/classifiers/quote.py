"""Block quote classifier mixin."""

from notemark.tokens import Line, LineKind


class QuoteClassifierMixin:
    """Mixin providing block quote classification."""

    def _try_classify_quote(self, raw: str, lineno: int) -> Line | None:
        """Try to classify a line as a block quote line.

        The ``>`` marker must be at column 1. Whitespace after the marker is
        consumed; the rest (possibly empty) is the quote content.

        Returns:
            Line if the line is quoted, None otherwise.
        """
        if not raw.startswith(">"):
            return None

        return Line(LineKind.QUOTE, raw, raw[1:].lstrip(), lineno)

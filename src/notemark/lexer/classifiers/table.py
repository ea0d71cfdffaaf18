"""Table row classifier mixin."""

from notemark.tokens import Line, LineKind

_DELIMITER_CHARS = frozenset("|-: \t")


class TableClassifierMixin:
    """Mixin providing table row classification."""

    def _is_table_row(self, raw: str) -> bool:
        """Check for ``|...|``: starts and ends with a pipe, something between."""
        line = raw.rstrip()
        return len(line) >= 3 and line.startswith("|") and line.endswith("|")

    def _is_table_delimiter(self, raw: str) -> bool:
        """Check for a separator-shaped line such as ``---|:---:``.

        Only pipes, dashes, colons and whitespace, with at least one pipe and
        one dash (so a bare ``---`` stays a horizontal rule).
        """
        line = raw.strip()
        return (
            bool(line)
            and "|" in line
            and "-" in line
            and all(c in _DELIMITER_CHARS for c in line)
        )

    def _try_classify_table_row(self, raw: str, lineno: int) -> Line | None:
        """Try to classify a line as a table row.

        Returns:
            Line if the line is pipe-delimited, None otherwise.
        """
        if not self._is_table_row(raw):
            return None
        return Line(LineKind.TABLE_ROW, raw, raw.strip(), lineno)

"""Horizontal rule classifier mixin."""

from notemark.tokens import Line, LineKind


class ThematicClassifierMixin:
    """Mixin providing horizontal rule classification."""

    def _try_classify_thematic_break(self, raw: str, lineno: int) -> Line | None:
        """Try to classify a line as a horizontal rule.

        A rule is 3+ repetitions of one character from ``-``, ``_``, ``*``
        and nothing else once surrounding whitespace is stripped. Spaced
        forms such as ``* * *`` are not rules.

        Returns:
            Line if valid rule, None otherwise.
        """
        stripped = raw.strip()
        if len(stripped) < 3:
            return None

        char = stripped[0]
        if char not in "-_*":
            return None

        if stripped.count(char) != len(stripped):
            return None

        return Line(LineKind.THEMATIC_BREAK, raw, "", lineno)

"""ATX heading classifier mixin."""

from notemark.tokens import Line, LineKind


class HeadingClassifierMixin:
    """Mixin providing ATX heading classification."""

    def _try_classify_heading(self, raw: str, lineno: int) -> Line | None:
        """Try to classify a line as an ATX heading.

        Headings start at column 1 with 1-6 ``#`` characters followed by
        whitespace and at least one non-space character. A trailing ``#``
        sequence is removed if preceded by a space.

        Returns:
            Line if valid heading, None otherwise.
        """
        level = 0
        while level < len(raw) and raw[level] == "#":
            level += 1

        if level == 0 or level > 6:
            return None

        # Must be followed by whitespace
        if level >= len(raw) or raw[level] not in " \t":
            return None

        content = raw[level:].strip()
        if not content:
            return None

        # Remove trailing # sequence (if preceded by space)
        if content.endswith("#"):
            trailing_start = len(content)
            while trailing_start > 0 and content[trailing_start - 1] == "#":
                trailing_start -= 1
            if trailing_start == 0:
                content = ""
            elif content[trailing_start - 1] in " \t":
                content = content[: trailing_start - 1].rstrip()

        return Line(LineKind.HEADING, raw, content, lineno, level=level)

"""Fenced code delimiter classifier mixin."""

from notemark.tokens import Line, LineKind


class FenceClassifierMixin:
    """Mixin providing fenced code delimiter classification."""

    def _try_classify_fence(self, raw: str, lineno: int) -> Line | None:
        """Try to classify a line as a fence delimiter.

        A fence is any line whose stripped form starts with three backticks.
        The same kind is used for opening and closing fences; the assembler
        decides which one it is. The info string's first word becomes the
        language (empty when absent).

        Returns:
            Line if the line is a fence, None otherwise.
        """
        stripped = raw.strip()
        if not stripped.startswith("```"):
            return None

        info = stripped.lstrip("`").strip()
        language = info.split()[0] if info else ""
        return Line(LineKind.FENCE, raw, language, lineno)

"""List item classifier mixin.

Recognizes task items, bullet items and ordered items. Leading indentation
is accepted and discarded: nested lists are flattened into the current list.
"""

from __future__ import annotations

from notemark.tokens import Line, LineKind

UNORDERED_LIST_MARKERS = frozenset("-*+")

# str.isdigit() also accepts superscripts that int() rejects
ASCII_DIGITS = frozenset("0123456789")

# Checkbox markers and their checked state
TASK_CHECKBOXES = {"[ ]": False, "[x]": True, "[X]": True}

# Longest ordered-list number accepted (longer runs are plain text)
MAX_ORDERED_DIGITS = 9


class ListClassifierMixin:
    """Mixin providing list item classification."""

    def _try_classify_list_item(self, raw: str, lineno: int) -> Line | None:
        """Try to classify a line as a task, bullet or ordered item.

        Task items are checked before bullet items, so ``- [x] done`` is a
        task and never a bullet whose text starts with ``[x]``.

        Returns:
            Line if the line is a list item, None otherwise.
        """
        content = raw.lstrip()
        if not content:
            return None

        if content[0] in UNORDERED_LIST_MARKERS:
            return self._classify_unordered(raw, content, lineno)

        if content[0] in ASCII_DIGITS:
            return self._classify_ordered(raw, content, lineno)

        return None

    def _classify_unordered(self, raw: str, content: str, lineno: int) -> Line | None:
        # Marker must be followed by whitespace and then text
        if len(content) < 2 or content[1] not in " \t":
            return None
        item = content[1:].lstrip()
        if not item:
            return None

        checkbox = item[:3]
        if checkbox in TASK_CHECKBOXES and len(item) > 3 and item[3] in " \t":
            task_text = item[3:].lstrip()
            if task_text:
                return Line(
                    LineKind.TASK_ITEM,
                    raw,
                    task_text,
                    lineno,
                    checked=TASK_CHECKBOXES[checkbox],
                )

        return Line(LineKind.BULLET_ITEM, raw, item, lineno)

    def _classify_ordered(self, raw: str, content: str, lineno: int) -> Line | None:
        pos = 0
        while pos < len(content) and content[pos] in ASCII_DIGITS:
            pos += 1
        if pos > MAX_ORDERED_DIGITS:
            return None

        # Digits must be followed by ".", whitespace, then text
        if pos + 1 >= len(content) or content[pos] != "." or content[pos + 1] not in " \t":
            return None
        item = content[pos + 1 :].lstrip()
        if not item:
            return None

        return Line(LineKind.ORDERED_ITEM, raw, item, lineno, number=int(content[:pos]))

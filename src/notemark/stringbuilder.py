"""StringBuilder for O(n) string accumulation.

Renderers append fragments to a list and join once at the end instead of
concatenating strings repeatedly.

Thread Safety:
StringBuilder instances are local to each render() call.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append("<p>").append("note").append("</p>")
            >>> sb.build()
            '<p>note</p>'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a string (empty strings are skipped) and return self."""
        if s:
            self._parts.append(s)
        return self

    def build(self) -> str:
        """Join all parts into the final string."""
        return "".join(self._parts)

    def __bool__(self) -> bool:
        return bool(self._parts)

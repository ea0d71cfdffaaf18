"""Inline span parsing for notemark.

Turns one logical line or paragraph into ordered text runs carrying marks.
The parser is hand-written recursive descent over an explicit cursor: at
each position holding a potential delimiter start, the delimiter rules are
tried in priority order and the first match wins:

    image > bold > italic > code > link > wiki-link > strikethrough

Bold, italic and strikethrough parse their inner text recursively and put
their own mark in front of every inner run, so ``***x***`` becomes one run
marked ``[bold, italic]``. A code span is never re-scanned, and runs marked
``code`` never receive another mark.

Thread Safety:
InlineParser instances are single-use per call. parse_inline() creates a
fresh one; configuration is read from ContextVar.

"""

from __future__ import annotations

import re

from notemark.config import get_convert_config
from notemark.nodes import Mark, Node, text_node
from notemark.utils.text import slugify

# Characters where a delimiter rule may start
DELIMITER_START = re.compile(r"[*_`\[~!]")

_IMAGE = re.compile(r"!\[([^\[\]]*)\]\(([^)]+)\)")
_BOLD_STAR = re.compile(r"\*\*(.+?)\*\*(?!\*)", re.DOTALL)
_BOLD_UNDERSCORE = re.compile(r"__(.+?)__(?![_\w])", re.DOTALL)
# Inner text may contain complete doubled runs but never a lone delimiter
_ITALIC_STAR = re.compile(r"\*(?!\*)((?:\*\*[^*]+\*\*|[^*])+?)\*(?!\*)")
_ITALIC_UNDERSCORE = re.compile(r"_(?!_)((?:__[^_]+__|[^_])+?)_(?![_\w])")
_CODE = re.compile(r"`([^`]+)`")
# Labels stop at the next bracket so runs of "[" are scanned once
_LINK = re.compile(r"\[([^\[\]]+)\]\(([^)]+)\)")
_WIKI_LINK = re.compile(r"\[\[([^\[\]]+)\]\]")
_STRIKE = re.compile(r"~~(.+?)~~", re.DOTALL)


class InlineParser:
    """Recursive descent parser for inline markdown.

    Usage:
            >>> InlineParser("plain **bold**").parse()
            [Node(type='text', ..., text='plain ', ...), Node(type='text', ..., text='bold', ...)]

    """

    __slots__ = ("_text", "_pos", "_depth", "_runs", "_config", "_closers")

    def __init__(self, text: str, depth: int = 0) -> None:
        self._text = text
        self._pos = 0
        self._depth = depth
        self._runs: list[Node] = []
        self._config = get_convert_config()
        self._closers: dict[str, int] = {}

    def parse(self) -> list[Node]:
        """Scan the whole text and return merged runs."""
        text = self._text
        while self._pos < len(text):
            match = DELIMITER_START.search(text, self._pos)
            if match is None:
                self._emit(text[self._pos :])
                break

            start = match.start()
            if start > self._pos:
                self._emit(text[self._pos : start])
                self._pos = start

            if not self._try_rules():
                # Unmatched delimiter is literal text
                self._emit(text[self._pos])
                self._pos += 1

        return _merge_runs(self._runs)

    # =========================================================================
    # Delimiter rules
    # =========================================================================

    def _try_rules(self) -> bool:
        return (
            self._try_image()
            or self._try_bold()
            or self._try_italic()
            or self._try_code()
            or self._try_link()
            or self._try_wiki_link()
            or self._try_strike()
        )

    def _try_image(self) -> bool:
        if not self._has_closer(")"):
            return False
        match = _IMAGE.match(self._text, self._pos)
        if match is None:
            return False
        self._runs.append(
            Node(type="image", attrs={"src": match.group(2).strip(), "alt": match.group(1)})
        )
        self._pos = match.end()
        return True

    def _try_bold(self) -> bool:
        match self._text[self._pos]:
            case "*":
                return self._try_wrapping(_BOLD_STAR, Mark("bold"))
            case "_" if self._can_open_underscore():
                return self._try_wrapping(_BOLD_UNDERSCORE, Mark("bold"))
        return False

    def _try_italic(self) -> bool:
        match self._text[self._pos]:
            case "*":
                return self._try_wrapping(_ITALIC_STAR, Mark("italic"))
            case "_" if self._can_open_underscore():
                return self._try_wrapping(_ITALIC_UNDERSCORE, Mark("italic"))
        return False

    def _try_code(self) -> bool:
        match = _CODE.match(self._text, self._pos)
        if match is None:
            return False
        self._runs.append(text_node(match.group(1), (Mark("code"),)))
        self._pos = match.end()
        return True

    def _try_link(self) -> bool:
        if not self._has_closer(")"):
            return False
        match = _LINK.match(self._text, self._pos)
        if match is None:
            return False
        href = match.group(2).strip()
        mark = Mark("link", {"href": href, "target": self._config.link_target})
        self._runs.append(text_node(match.group(1), (mark,)))
        self._pos = match.end()
        return True

    def _try_wiki_link(self) -> bool:
        match = _WIKI_LINK.match(self._text, self._pos)
        if match is None:
            return False
        target, _, label = match.group(1).partition("|")
        label = label.strip() or target.strip()
        mark = Mark(
            "link",
            {"href": f"#{slugify(target)}", "target": self._config.wiki_link_target},
        )
        if label:
            self._runs.append(text_node(label, (mark,)))
        self._pos = match.end()
        return True

    def _try_strike(self) -> bool:
        return self._try_wrapping(_STRIKE, Mark("strike"))

    # =========================================================================
    # Helpers
    # =========================================================================

    def _can_open_underscore(self) -> bool:
        """Underscores inside words (snake_case) never open emphasis."""
        return self._pos == 0 or not _is_word_char(self._text[self._pos - 1])

    def _has_closer(self, char: str) -> bool:
        """Whether ``char`` occurs at or after the cursor.

        The cursor only moves forward, so each lookup resumes where the
        previous one stopped.
        """
        found = self._closers.get(char)
        if found is None or 0 <= found < self._pos:
            found = self._text.find(char, self._pos)
            self._closers[char] = found
        return found != -1

    def _try_wrapping(self, pattern: re.Pattern[str], mark: Mark) -> bool:
        """Match a delimiter pair, parse its inside, and apply ``mark``."""
        match = pattern.match(self._text, self._pos)
        if match is None:
            return False

        inner = match.group(1)
        if self._depth >= self._config.max_inline_depth:
            inner_runs = [text_node(inner)]
        else:
            inner_runs = InlineParser(inner, self._depth + 1).parse()

        self._runs.extend(_apply_mark(run, mark) for run in inner_runs)
        self._pos = match.end()
        return True

    def _emit(self, value: str) -> None:
        if value:
            self._runs.append(text_node(value))


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def _apply_mark(run: Node, mark: Mark) -> Node:
    """Put ``mark`` outermost on a text run.

    Code runs and runs already carrying the mark type are left alone.
    """
    if run.type != "text" or run.has_mark("code") or run.has_mark(mark.type):
        return run
    return text_node(run.text or "", (mark, *run.marks))


def _merge_runs(runs: list[Node]) -> list[Node]:
    """Join adjacent text runs with identical marks; drop empty runs."""
    merged: list[Node] = []
    for run in runs:
        if run.type == "text" and not run.text:
            continue
        previous = merged[-1] if merged else None
        if (
            previous is not None
            and previous.type == "text"
            and run.type == "text"
            and previous.marks == run.marks
        ):
            merged[-1] = text_node((previous.text or "") + (run.text or ""), run.marks)
        else:
            merged.append(run)
    return merged


def parse_inline(text: str) -> list[Node]:
    """Parse inline markdown into ordered text runs.

    Total function: never raises. Empty input gives an empty list, and
    unmatched delimiters come back as literal characters.

    Args:
        text: One logical line or paragraph (may contain newlines)

    Returns:
        List of ``text`` (and ``image``) nodes

    Example:
        >>> [(run.text, [m.type for m in run.marks]) for run in parse_inline("***both***")]
        [('both', ['bold', 'italic'])]

    """
    if not text:
        return []
    return InlineParser(text).parse()

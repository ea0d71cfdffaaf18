"""Text processing utilities for notemark.

Example:
    >>> from notemark.utils.text import slugify
    >>> slugify("Project Ideas")
    'project-ideas'
"""

from __future__ import annotations

import re

_WHITESPACE_RUN = re.compile(r"\s+")

_DANGEROUS_SCHEMES = ("javascript:", "data:", "vbscript:")

# Browsers drop these anywhere in a URL before reading its scheme
_URL_IGNORED_CHARS = re.compile(r"[\x00-\x20\x7f]")


def slugify(text: str, separator: str = "-") -> str:
    """Convert a wiki-link target or heading text to an anchor slug.

    Lowercases and replaces each whitespace run with the separator.
    Punctuation is kept so that ``[[C++ notes]]`` and a ``# C++ notes``
    heading resolve to the same anchor.

    Args:
        text: Text to slugify
        separator: Character to use between words (default: '-')

    Returns:
        Lowercase slug

    Examples:
        >>> slugify("Weekly  Review")
        'weekly-review'
        >>> slugify("  Café Notes ")
        'café-notes'
        >>> slugify("")
        ''
    """
    if not text:
        return ""
    return _WHITESPACE_RUN.sub(separator, text.strip()).lower()


def is_dangerous_url(url: str) -> bool:
    """Check if URL uses a script-capable scheme.

    Examples:
        >>> is_dangerous_url("javascript:alert(1)")
        True
        >>> is_dangerous_url(" JavaScript:alert(1)")
        True
        >>> is_dangerous_url("java\\tscript:alert(1)")
        True
        >>> is_dangerous_url("https://example.com")
        False
    """
    lower = _URL_IGNORED_CHARS.sub("", url).lower()
    return any(lower.startswith(s) for s in _DANGEROUS_SCHEMES)

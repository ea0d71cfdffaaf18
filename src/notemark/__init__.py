"""
notemark: Markdown conversion engine for notes and journal entries

Turns freeform markdown (typed by a user, pasted, or returned by an AI
assistant) into three projections of the same parsed tree:

- a document tree in the rich-text editor's display model
- sanitized HTML for read-only rendering
- plain text for full-text search indexing

Conversion never raises: malformed markdown degrades to simpler structures.

Quick Start:
    >>> from notemark import convert, render, to_plain_text
    >>> doc = convert("# Plans\\n\\n- [ ] call **Sam**")
    >>> html = render(doc)
    >>> print(html)
    <h1 id="plans">Plans</h1>
    <ul class="task-list">
    <li class="task-item"><input type="checkbox" disabled /> call <strong>Sam</strong></li>
    </ul>

    >>> # Or use the high-level Converter class
    >>> from notemark import Converter, ConvertConfig
    >>> converter = Converter(ConvertConfig(default_language="text"))
    >>> html = converter("```\\nprint(1)\\n```")

Installation:
    pip install notemark              # Zero runtime dependencies
    pip install notemark[test]        # + pytest and hypothesis
"""

from notemark.config import (
    ConvertConfig,
    convert_config_context,
    get_convert_config,
    reset_convert_config,
    set_convert_config,
)
from notemark.errors import NotemarkError, TreeError
from notemark.lexer import LineClassifier
from notemark.nodes import Mark, Node
from notemark.parser import Parser, convert
from notemark.parsing import InlineParser, TableDecoder, decode_table, parse_inline
from notemark.renderers import HtmlRenderer, render, render_html
from notemark.serialization import from_dict, from_json, to_dict, to_json, validate
from notemark.text import extract_text, to_plain_text
from notemark.tokens import Line, LineKind

__version__ = "0.1.0"


class Converter:
    """High-level converter binding a ConvertConfig to every call.

    Usage:
        >>> converter = Converter()
        >>> converter("# Hello **World**")
        '<h1 id="hello-world">Hello <strong>World</strong></h1>\\n'

        >>> # Access the tree
        >>> doc = converter.convert("## Heading")
        >>> doc.content[0].attrs["level"]
        2

        >>> # Search projection
        >>> converter.plain_text("> *quoted*")
        'quoted'

    Thread Safety:
        Uses ContextVar for thread-local configuration. Safe to use multiple
        Converter instances concurrently from different threads.

    """

    __slots__ = ("_config",)

    def __init__(self, config: ConvertConfig | None = None) -> None:
        """Initialize converter.

        Args:
            config: Conversion settings (defaults when None)
        """
        self._config = config or ConvertConfig()

    @property
    def config(self) -> ConvertConfig:
        return self._config

    def __call__(self, source: str) -> str:
        """Convert and render markdown to HTML in one call.

        Args:
            source: Markdown source text

        Returns:
            Sanitized HTML string

        """
        return self.render(self.convert(source))

    def convert(self, source: str) -> Node:
        """Convert markdown into a document tree.

        Thread Safety:
            Sets config via ContextVar (thread-local) and restores the caller's
            config afterwards. Safe for concurrent use.

        """
        with convert_config_context(self._config):
            return Parser(source).parse()

    def render(self, doc: Node) -> str:
        """Render a document tree to HTML with this converter's settings."""
        with convert_config_context(self._config):
            return HtmlRenderer().render(doc)

    def plain_text(self, source: str) -> str:
        """Convert markdown to the plain-text search projection."""
        return extract_text(self.convert(source))


__all__ = [  # noqa: RUF022 (grouped by category)
    # Version
    "__version__",
    # Core API
    "convert",
    "parse_inline",
    "decode_table",
    "render",
    "render_html",
    "extract_text",
    "to_plain_text",
    # Tree
    "Node",
    "Mark",
    # Components
    "LineClassifier",
    "Line",
    "LineKind",
    "Parser",
    "InlineParser",
    "TableDecoder",
    "HtmlRenderer",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    "validate",
    # Configuration (ContextVar-based)
    "ConvertConfig",
    "get_convert_config",
    "set_convert_config",
    "reset_convert_config",
    "convert_config_context",
    # Errors
    "NotemarkError",
    "TreeError",
    # High-level
    "Converter",
]

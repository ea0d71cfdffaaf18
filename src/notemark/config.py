"""ContextVar-based conversion configuration for notemark.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per Converter call and read by the parser, the inline
parser, the table decoder and the HTML renderer.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and concurrent conversions never see each other's
    settings.

Usage:
    # Through the facade
    converter = Converter(ConvertConfig(default_language="text"))
    doc = converter.convert("```\\nx\\n```")

    # Or use the context manager
    with convert_config_context(ConvertConfig(concatenated_tables=False)):
        doc = convert(source)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ConvertConfig:
    """Immutable conversion configuration.

    Attributes:
        default_language: Code block language when the fence has none
        link_target: ``target`` attribute of markdown link marks
        wiki_link_target: ``target`` attribute of wiki-link marks
        concatenated_tables: Split ``||``-joined rows into separate table rows
        max_inline_depth: Nesting bound for recursive emphasis parsing
        heading_ids: Emit slug ``id`` attributes on rendered headings
        safe_urls: Drop javascript:/data:/vbscript: URLs when rendering HTML

    """

    default_language: str = "plaintext"
    link_target: str = "_blank"
    wiki_link_target: str = "_self"
    concatenated_tables: bool = True
    max_inline_depth: int = 32
    heading_ids: bool = True
    safe_urls: bool = True

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ConvertConfig":
        """Create ConvertConfig from dictionary.

        Only includes keys that are valid ConvertConfig fields; unknown keys
        are silently ignored, so settings blobs from the host application can
        be passed through unfiltered.

        Example:
            >>> config = ConvertConfig.from_dict({
            ...     "default_language": "text",
            ...     "theme": "ignored",
            ... })
            >>> config.default_language
            'text'

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ConvertConfig = ConvertConfig()

_convert_config: ContextVar[ConvertConfig] = ContextVar(
    "convert_config",
    default=_DEFAULT_CONFIG,
)


def get_convert_config() -> ConvertConfig:
    """Get current conversion configuration (thread-local)."""
    return _convert_config.get()


def set_convert_config(config: ConvertConfig) -> None:
    """Set conversion configuration for current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _convert_config.set(config)


def reset_convert_config() -> None:
    """Reset to default configuration."""
    _convert_config.set(_DEFAULT_CONFIG)


@contextmanager
def convert_config_context(config: ConvertConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with convert_config_context(ConvertConfig(heading_ids=False)):
        ...     html = render_html("# Title")
        >>> # Automatically reset to previous config

    """
    previous = _convert_config.get()
    _convert_config.set(config)
    try:
        yield
    finally:
        _convert_config.set(previous)


__all__ = [
    "ConvertConfig",
    "convert_config_context",
    "get_convert_config",
    "reset_convert_config",
    "set_convert_config",
]

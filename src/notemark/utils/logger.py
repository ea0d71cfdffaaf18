"""Minimal logging utilities for notemark.

Provides a simple get_logger function that wraps the standard library logging.
The library never installs handlers; applications decide where records go.

Example:
    >>> from notemark.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Converting note")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "notemark." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("tables")
        >>> logger.name
        'notemark.tables'
    """
    if not (name == "notemark" or name.startswith("notemark.")):
        name = f"notemark.{name}"
    return logging.getLogger(name)

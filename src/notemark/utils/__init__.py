"""Utility modules for notemark.

Provides:
- text: slugify for anchors, is_dangerous_url for link sanitizing
- logger: get_logger for logging
"""

from notemark.utils.logger import get_logger
from notemark.utils.text import is_dangerous_url, slugify

__all__ = [
    "get_logger",
    "is_dangerous_url",
    "slugify",
]

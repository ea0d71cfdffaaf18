"""Span-level parsing for notemark.

- inline: runs of text with marks from one logical line or paragraph
- table: pipe tables (standard and ``||``-concatenated) into table nodes

"""

from notemark.parsing.inline import InlineParser, parse_inline
from notemark.parsing.table import TableDecoder, decode_table

__all__ = ["InlineParser", "TableDecoder", "decode_table", "parse_inline"]

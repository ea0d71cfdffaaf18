"""Table decoding for notemark.

Accepts two layouts:

Standard (one row per line):
| Header 1 | Header 2 |   <- header row(s)
|----------|----------|   <- separator row
| Cell 1   | Cell 2   |   <- body rows

Concatenated (rows joined by ``||`` on one line), as produced by some AI
assistants when they serialize a table into a single line:
| Header 1 | Header 2 || --- | --- || Cell 1 | Cell 2 |

Rows before the first separator are header rows and rows after it are body
rows. Without a separator, the first row is the only header row.
"""

from __future__ import annotations

from notemark.config import get_convert_config
from notemark.nodes import Node, paragraph
from notemark.parsing.inline import parse_inline

_SEPARATOR_CHARS = frozenset("|-: \t")

_CELL_ATTRS = {"colspan": 1, "rowspan": 1}


class TableDecoder:
    """Decode candidate table lines into a ``table`` node.

    Usage:
            >>> table = TableDecoder().decode(["| a | b |", "|---|---|", "| 1 | 2 |"])
            >>> [row.content[0].type for row in table.content]
            ['tableHeaderCell', 'tableCell']

    """

    __slots__ = ("_concatenated",)

    def __init__(self, concatenated: bool | None = None) -> None:
        if concatenated is None:
            concatenated = get_convert_config().concatenated_tables
        self._concatenated = concatenated

    def decode(self, lines: list[str]) -> Node | None:
        """Decode lines into a table, or None if they are not one.

        Returns None below two rows or when every row is empty; the caller
        falls back to paragraphs.
        """
        rows = self._split_rows(lines)
        if len(rows) < 2:
            return None

        separator_index = next(
            (i for i, row in enumerate(rows) if self._is_separator(row)), None
        )
        if separator_index is None:
            header_rows, body_rows = rows[:1], rows[1:]
        else:
            header_rows, body_rows = rows[:separator_index], rows[separator_index + 1 :]

        table_rows: list[Node] = []
        for row, cell_type in [
            *((r, "tableHeaderCell") for r in header_rows),
            *((r, "tableCell") for r in body_rows),
        ]:
            cells = self._parse_table_row(row)
            if any(cells):
                table_rows.append(self._build_row(cells, cell_type))

        if not table_rows:
            return None
        return Node(type="table", content=tuple(table_rows))

    def _split_rows(self, lines: list[str]) -> list[str]:
        """Turn raw lines into one string per logical row."""
        rows: list[str] = []
        for line in lines:
            line = line.strip()
            if not line:
                continue
            if self._concatenated and "||" in line:
                rows.extend(
                    fragment
                    for fragment in (_repair_fragment(f) for f in line.split("||"))
                    if len(fragment) > 2
                )
            else:
                rows.append(line)
        return rows

    def _is_separator(self, row: str) -> bool:
        """Separator rows hold only pipes, dashes, colons and whitespace."""
        return "-" in row and all(c in _SEPARATOR_CHARS for c in row)

    def _parse_table_row(self, line: str) -> list[str]:
        """Split a row into trimmed cell strings.

        One leading and one trailing pipe are removed; ``\\|`` is a literal
        pipe inside a cell.
        """
        line = line.strip()
        if line.startswith("|"):
            line = line[1:]
        if line.endswith("|") and not line.endswith("\\|"):
            line = line[:-1]

        cells: list[str] = []
        current_cell: list[str] = []
        i = 0
        while i < len(line):
            if line[i] == "\\" and i + 1 < len(line) and line[i + 1] == "|":
                current_cell.append("|")
                i += 2
            elif line[i] == "|":
                cells.append("".join(current_cell).strip())
                current_cell = []
                i += 1
            else:
                current_cell.append(line[i])
                i += 1
        cells.append("".join(current_cell).strip())
        return cells

    def _build_row(self, cells: list[str], cell_type: str) -> Node:
        return Node(
            type="tableRow",
            content=tuple(
                Node(
                    type=cell_type,
                    attrs=dict(_CELL_ATTRS),
                    content=(paragraph(parse_inline(cell)),),
                )
                for cell in cells
            ),
        )


def _repair_fragment(fragment: str) -> str:
    """Make a ``||``-split fragment start and end with a single pipe."""
    fragment = fragment.strip()
    if not fragment.startswith("|"):
        fragment = "|" + fragment
    if not fragment.endswith("|"):
        fragment = fragment + "|"
    return fragment


def decode_table(lines: list[str]) -> Node | None:
    """Decode contiguous table lines into a ``table`` node.

    Args:
        lines: Candidate lines (standard or ``||``-concatenated rows)

    Returns:
        ``table`` node, or None when fewer than two rows are present

    Example:
        >>> table = decode_table(["| a | b |", "|---|---|", "| c | d || e | f |"])
        >>> len(table.content)
        3

    """
    return TableDecoder().decode(lines)

"""Table parser: a contiguous run of ``|``-rows → Table."""

from __future__ import annotations

import logging
import re
from typing import Sequence

from .errors import IonParseError, IonStructuralError
from .grammar import parse_value
from .model import Table
from .options import DEFAULT_MAX_DEPTH
from .scanner import LineKind, LogicalLine
from .values import Cell, Empty

logger = logging.getLogger(__name__)

_SEPARATOR_CELL_RE = re.compile(r"^[-\s]*-[-\s]*$")


def is_separator(row: LogicalLine) -> bool:
    """True if every cell of *row* is made only of dashes and whitespace."""
    return bool(row.cells) and all(_SEPARATOR_CELL_RE.match(c.text) for c in row.cells)


def build_table(rows: Sequence[LogicalLine], *, max_depth: int = DEFAULT_MAX_DEPTH) -> Table:
    """Build a Table from header, separator and data rows.

    The header row names the columns; the second row must be a dash
    separator and is discarded; every later row must have exactly as many
    cells as the header.
    """
    if not rows:
        raise ValueError("build_table needs at least one row")
    for row in rows:
        if row.kind is not LineKind.ROW:
            raise ValueError(f"line {row.line} is not a table row")

    header = rows[0]
    columns = _columns(header)

    if len(rows) < 2:
        raise IonStructuralError("table header is not followed by a separator row", header.line)
    separator = rows[1]
    if not is_separator(separator):
        raise IonStructuralError(
            "table header must be followed by a separator row of dashes", separator.line
        )
    if len(separator.cells) != len(columns):
        raise IonStructuralError(
            f"separator row has {len(separator.cells)} cells, header has {len(columns)}",
            separator.line,
        )

    data: list[tuple[Cell, ...]] = []
    for number, row in enumerate(rows[2:], start=1):
        if len(row.cells) != len(columns):
            raise IonStructuralError(
                f"table row {number} has {len(row.cells)} cells, expected {len(columns)}",
                row.line,
            )
        data.append(tuple(_cell(row, i, max_depth) for i in range(len(columns))))

    logger.debug("table at line %d: %d columns, %d rows", header.line, len(columns), len(data))
    return Table(columns=columns, rows=tuple(data), line=header.line)


def _columns(header: LogicalLine) -> tuple[str, ...]:
    names: list[str] = []
    for cell in header.cells:
        if not cell.text:
            raise IonStructuralError("empty column name in table header", header.line, cell.column)
        if cell.text in names:
            raise IonStructuralError(f"duplicate column name {cell.text!r}", header.line, cell.column)
        names.append(cell.text)
    if not names:
        raise IonStructuralError("table header has no columns", header.line)
    return tuple(names)


def _cell(row: LogicalLine, index: int, max_depth: int) -> Cell:
    cell = row.cells[index]
    if not cell.text:
        return Empty
    try:
        return parse_value(cell.text, line=row.line, column=cell.column, max_depth=max_depth)
    except IonParseError as exc:
        if cell.escapes and exc.column is not None:
            exc.at_column(cell.source_column(exc.column))
        raise

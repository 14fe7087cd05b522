"""Data model for Ion sections, fields and tables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from .errors import MissingValueError
from .values import Cell, Value, to_python


# ---------------------------------------------------------------------------
# Field
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Field:
    key: str
    value: Value
    line: int = 0


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Table:
    """Column names plus rows of typed cells.

    Every row has exactly ``len(columns)`` cells; a blank cell is ``Empty``.
    """

    columns: tuple[str, ...]
    rows: tuple[tuple[Cell, ...], ...] = ()
    line: int = 0

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[tuple[Cell, ...]]:
        return iter(self.rows)

    def column_index(self, name: str) -> int:
        try:
            return self.columns.index(name)
        except ValueError:
            raise KeyError(name) from None

    def cell(self, row: int, column: int | str) -> Cell:
        """Return one cell; *column* is a position or a column name."""
        if isinstance(column, str):
            column = self.column_index(column)
        return self.rows[row][column]

    def column(self, name: str) -> list[Cell]:
        idx = self.column_index(name)
        return [row[idx] for row in self.rows]

    def records(self) -> list[dict[str, Cell]]:
        """Rows as ``{column: cell}`` dicts, in row order."""
        return [dict(zip(self.columns, row)) for row in self.rows]

    def to_python(self) -> dict:
        return {
            "columns": list(self.columns),
            "rows": [[to_python(c) for c in row] for row in self.rows],
        }


# ---------------------------------------------------------------------------
# Section
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Section:
    """One ``[A.B]`` block: its fields in source order and at most one table."""

    path: tuple[str, ...]
    fields: tuple[Field, ...] = ()
    table: Table | None = None
    line: int = 0

    @property
    def name(self) -> str:
        return ".".join(self.path)

    def __iter__(self) -> Iterator[Field]:
        return iter(self.fields)

    def __contains__(self, key: object) -> bool:
        return any(f.key == key for f in self.fields)

    def keys(self) -> list[str]:
        return [f.key for f in self.fields]

    def get(self, key: str, default: Value | None = None) -> Value | None:
        for f in self.fields:
            if f.key == key:
                return f.value
        return default

    def fetch(self, key: str) -> Value:
        value = self.get(key)
        if value is None:
            raise MissingValueError(key, self.name)
        return value

    def as_dict(self) -> dict[str, Value]:
        return {f.key: f.value for f in self.fields}

    def is_under(self, prefix: str | Sequence[str]) -> bool:
        """True if this section's path starts with *prefix* (segment-wise)."""
        segments = tuple(prefix.split(".")) if isinstance(prefix, str) else tuple(prefix)
        return self.path[: len(segments)] == segments

    def to_python(self) -> dict:
        return {
            "path": self.name,
            "fields": {f.key: to_python(f.value) for f in self.fields},
            "table": self.table.to_python() if self.table is not None else None,
        }

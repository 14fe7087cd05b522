"""Scanner: turns raw Ion text into tagged logical lines.

Comments are stripped first (``#`` or ``//`` outside a quoted string), then
each physical line is classified by its first significant character:

- ``[`` → section header
- ``|`` → table row
- anything else → assignment

An assignment whose brackets/braces are still open at the end of its line
swallows the following physical lines until they balance, so multi-line
arrays and dictionaries reach the value grammar as one span.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from .errors import IonSyntaxError

KEY_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_-]*$")

_OPENERS = "[{"
_CLOSERS = "]}"


# ---------------------------------------------------------------------------
# LineKind / LogicalLine
# ---------------------------------------------------------------------------

class LineKind(Enum):
    HEADER = auto()
    ASSIGNMENT = auto()
    ROW = auto()
    BLANK = auto()


@dataclass(frozen=True, slots=True)
class RowCell:
    """One trimmed table cell.

    ``column`` is where ``text`` starts in the source line. ``escapes`` holds
    the offsets in ``text`` of pipes that were written as ``\\|``.
    """

    text: str
    column: int
    escapes: tuple[int, ...] = ()

    def source_column(self, column: int) -> int:
        """Map a column computed over ``text`` back to the source line."""
        offset = column - self.column
        return column + sum(1 for e in self.escapes if e < offset)


@dataclass(frozen=True, slots=True)
class LogicalLine:
    kind: LineKind
    line: int
    text: str = ""
    cells: tuple[RowCell, ...] = ()


# ---------------------------------------------------------------------------
# Comment handling
# ---------------------------------------------------------------------------

def strip_comment(line: str) -> str:
    """Cut *line* at the first ``#`` or ``//`` that is not inside a string."""
    in_string = False
    i = 0
    while i < len(line):
        ch = line[i]
        if in_string:
            if ch == "\\":
                i += 2
                continue
            if ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "#":
            return line[:i]
        elif ch == "/" and line.startswith("//", i):
            return line[:i]
        i += 1
    return line


def _track_brackets(line: str, line_no: int, open_at: list[tuple[int, int]]) -> None:
    """Push/pop the ``(line, column)`` of each bracket in *line* (strings skipped)."""
    in_string = False
    i = 0
    while i < len(line):
        ch = line[i]
        if in_string:
            if ch == "\\":
                i += 2
                continue
            if ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch in _OPENERS:
            open_at.append((line_no, i + 1))
        elif ch in _CLOSERS:
            if not open_at:
                raise IonSyntaxError(f"unbalanced {ch!r}", line_no, i + 1)
            open_at.pop()
        i += 1


# ---------------------------------------------------------------------------
# Headers and rows
# ---------------------------------------------------------------------------

def parse_header(line: str, line_no: int) -> tuple[str, ...]:
    """Parse ``[A.B.C]`` into ``("A", "B", "C")``."""
    start = len(line) - len(line.lstrip())
    body = line.strip()
    if not body.endswith("]"):
        raise IonSyntaxError("section header is missing its closing ']'", line_no, start + 1)
    inner = body[1:-1]
    if not inner.strip():
        raise IonSyntaxError("empty section name", line_no, start + 1)
    path: list[str] = []
    for segment in inner.split("."):
        name = segment.strip()
        if not KEY_RE.match(name):
            raise IonSyntaxError(
                f"invalid section path segment {name!r} in [{inner.strip()}]",
                line_no,
                start + 1,
            )
        path.append(name)
    return tuple(path)


def split_row(line: str) -> tuple[RowCell, ...]:
    """Split a ``| a | b |`` line into trimmed cells.

    ``\\|`` inside a cell is a literal pipe. The span before the leading pipe
    is dropped, as is an empty span after the trailing pipe.
    """
    spans: list[tuple[str, int, list[int]]] = []
    buf: list[str] = []
    escapes: list[int] = []
    buf_start = 0
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\" and i + 1 < len(line) and line[i + 1] == "|":
            escapes.append(len(buf))
            buf.append("|")
            i += 2
            continue
        if ch == "|":
            spans.append(("".join(buf), buf_start, escapes))
            buf = []
            escapes = []
            buf_start = i + 1
        else:
            buf.append(ch)
        i += 1
    spans.append(("".join(buf), buf_start, escapes))

    spans = spans[1:]
    if spans and not spans[-1][0].strip():
        spans = spans[:-1]

    cells: list[RowCell] = []
    for raw, offset, escaped in spans:
        lead = len(raw) - len(raw.lstrip())
        cells.append(RowCell(
            text=raw.strip(),
            column=offset + lead + 1,
            escapes=tuple(e - lead for e in escaped),
        ))
    return tuple(cells)


# ---------------------------------------------------------------------------
# scan
# ---------------------------------------------------------------------------

def scan(text: str) -> Iterator[LogicalLine]:
    """Yield the logical lines of *text* in source order."""
    physical = text.splitlines()
    i = 0
    while i < len(physical):
        line_no = i + 1
        raw = physical[i]
        line = strip_comment(raw)
        i += 1

        stripped = line.strip()
        if not stripped:
            if not raw.strip():
                yield LogicalLine(LineKind.BLANK, line_no)
            continue

        first = stripped[0]
        if first == "[":
            yield LogicalLine(LineKind.HEADER, line_no, text=line)
            continue
        if first == "|":
            yield LogicalLine(LineKind.ROW, line_no, text=line, cells=split_row(line.rstrip()))
            continue

        open_at: list[tuple[int, int]] = []
        _track_brackets(line, line_no, open_at)
        parts = [line.rstrip()]
        while open_at:
            if i >= len(physical):
                raise IonSyntaxError("unterminated bracket or brace at end of input", *open_at[0])
            cont = strip_comment(physical[i])
            _track_brackets(cont, i + 1, open_at)
            parts.append(cont.rstrip())
            i += 1
        yield LogicalLine(LineKind.ASSIGNMENT, line_no, text="\n".join(parts))

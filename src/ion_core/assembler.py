"""Section assembler: logical lines → Document.

Every section is parsed and validated; the optional ``section_filter`` only
decides which validated sections end up in the returned Document.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable

from .assignment import parse_assignment
from .document import Document, normalize_path
from .errors import IonParseError, IonStructuralError
from .model import Field, Section, Table
from .options import DEFAULT_OPTIONS, DUPLICATE_REJECT, ParserOptions
from .scanner import LineKind, LogicalLine, parse_header, scan
from .table import build_table

logger = logging.getLogger(__name__)

SectionFilter = Callable[[tuple[str, ...]], bool]


# ---------------------------------------------------------------------------
# Per-call state
# ---------------------------------------------------------------------------

@dataclass
class _PendingSection:
    path: tuple[str, ...]
    line: int
    fields: list[Field] = field(default_factory=list)
    positions: dict[str, int] = field(default_factory=dict)
    table: Table | None = None
    rows: list[LogicalLine] = field(default_factory=list)

    @property
    def name(self) -> str:
        return ".".join(self.path)


@dataclass
class _ParseContext:
    """Everything one ``parse`` call mutates; nothing is shared between calls."""

    options: ParserOptions
    section_filter: SectionFilter | None
    current: _PendingSection | None = None
    sections: list[Section] = field(default_factory=list)
    skipped: int = 0

    # -- Content --------------------------------------------------------

    def start_section(self, line: LogicalLine) -> None:
        self.finish_section()
        path = parse_header(line.text, line.line)
        self.current = _PendingSection(path=path, line=line.line)
        logger.debug("section [%s] at line %d", self.current.name, line.line)

    def add_row(self, line: LogicalLine) -> None:
        pending = self._require_section(line, "table row")
        if pending.table is not None and not pending.rows:
            raise IonStructuralError(
                "section already has a table; only one table block is allowed",
                line.line,
            )
        pending.rows.append(line)

    def add_assignment(self, line: LogicalLine) -> None:
        pending = self._require_section(line, "assignment")
        self.finish_table()
        item = parse_assignment(line.text, line=line.line, max_depth=self.options.max_depth)
        if item.key in pending.positions:
            if self.options.duplicate_fields == DUPLICATE_REJECT:
                first = pending.fields[pending.positions[item.key]].line
                raise IonStructuralError(
                    f"duplicate key {item.key!r} (first assigned on line {first})",
                    line.line,
                )
            logger.debug("key %r reassigned at line %d", item.key, line.line)
            pending.fields[pending.positions[item.key]] = item
            return
        pending.positions[item.key] = len(pending.fields)
        pending.fields.append(item)

    # -- Finalization ---------------------------------------------------

    def finish_table(self) -> None:
        pending = self.current
        if pending is None or not pending.rows:
            return
        pending.table = build_table(pending.rows, max_depth=self.options.max_depth)
        pending.rows = []

    def finish_section(self) -> None:
        pending = self.current
        if pending is None:
            return
        self.finish_table()
        self.current = None
        section = Section(
            path=pending.path,
            fields=tuple(pending.fields),
            table=pending.table,
            line=pending.line,
        )
        if self.section_filter is not None and not self.section_filter(section.path):
            logger.debug("section [%s] filtered out", section.name)
            self.skipped += 1
            return
        self.sections.append(section)

    def _require_section(self, line: LogicalLine, what: str) -> _PendingSection:
        if self.current is None:
            raise IonStructuralError(f"{what} before the first section header", line.line)
        return self.current


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def parse(
    text: str,
    section_filter: SectionFilter | None = None,
    *,
    options: ParserOptions | None = None,
) -> Document:
    """Parse Ion *text* into a Document.

    *section_filter* receives each section's path tuple after the section has
    been validated and returns whether to keep it. Errors anywhere in the
    text, including in sections the filter would drop, abort the parse.
    """
    ctx = _ParseContext(options=options or DEFAULT_OPTIONS, section_filter=section_filter)
    try:
        for line in scan(text):
            _dispatch(ctx, line)
        ctx.finish_section()
    except IonParseError as exc:
        if ctx.current is not None:
            exc.in_section(ctx.current.name)
        raise
    logger.debug("parsed %d sections (%d filtered out)", len(ctx.sections), ctx.skipped)
    return Document(sections=tuple(ctx.sections))


def _dispatch(ctx: _ParseContext, line: LogicalLine) -> None:
    if line.kind is LineKind.HEADER:
        ctx.start_section(line)
    elif line.kind is LineKind.ROW:
        ctx.add_row(line)
    elif line.kind is LineKind.ASSIGNMENT:
        ctx.add_assignment(line)
    elif line.kind is LineKind.BLANK:
        ctx.finish_table()


# ---------------------------------------------------------------------------
# Filter helpers
# ---------------------------------------------------------------------------

def select_sections(*names: str | Iterable[str]) -> SectionFilter:
    """Keep only sections whose path equals one of *names* (``"A.B"`` form)."""
    wanted = {normalize_path(n) for n in names}

    def accept(path: tuple[str, ...]) -> bool:
        return path in wanted

    return accept


def select_prefix(prefix: str | Iterable[str]) -> SectionFilter:
    """Keep sections at *prefix* or below it (``DEF`` keeps ``DEF.MEAL``)."""
    segments = normalize_path(prefix)

    def accept(path: tuple[str, ...]) -> bool:
        return path[: len(segments)] == segments

    return accept

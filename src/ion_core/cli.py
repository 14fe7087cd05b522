"""``ion-inspect`` — print the parsed structure of an Ion file.

Usage::

    ion-inspect hotel.ion
    ion-inspect hotel.ion --section CONTRACT --section DEF.MEAL
    ion-inspect hotel.ion --prefix DEF --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import IO, Sequence

from .assembler import SectionFilter, parse, select_prefix, select_sections
from .document import Document
from .errors import IonParseError
from .model import Section, Table
from .values import Cell, VArray, VBool, VDict, VFloat, VInteger, VString, _EmptyType


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def _fmt_inline(value: Cell) -> str:
    """Format a single value for compact one-line display."""
    if isinstance(value, VString):
        return json.dumps(value.value, ensure_ascii=False)
    if isinstance(value, (VInteger, VFloat, VBool)):
        return str(value)
    if isinstance(value, VArray):
        return "[" + ", ".join(_fmt_inline(v) for v in value.items) + "]"
    if isinstance(value, VDict):
        if not value.entries:
            return "{}"
        return "{ " + ", ".join(f"{k} = {_fmt_inline(v)}" for k, v in value.entries.items()) + " }"
    if isinstance(value, _EmptyType):
        return "Empty"
    return repr(value)


def _fmt_table(table: Table) -> list[str]:
    lines = [f"  table ({table.row_count} rows)"]
    rendered = [[_fmt_inline(c) for c in row] for row in table.rows]
    widths = [len(c) for c in table.columns]
    for row in rendered:
        widths = [max(w, len(c)) for w, c in zip(widths, row)]
    lines.append("    | " + " | ".join(c.ljust(w) for c, w in zip(table.columns, widths)) + " |")
    lines.append("    |" + "|".join("-" * (w + 2) for w in widths) + "|")
    for row in rendered:
        lines.append("    | " + " | ".join(c.ljust(w) for c, w in zip(row, widths)) + " |")
    return lines


def _fmt_section(section: Section) -> str:
    """Pretty-print one section: header, aligned fields, then its table."""
    lines = [f"[{section.name}]"]
    if section.fields:
        width = max(len(f.key) for f in section.fields)
        for f in section.fields:
            lines.append(f"  {f.key:<{width}} = {_fmt_inline(f.value)}")
    if section.table is not None:
        lines.extend(_fmt_table(section.table))
    if not section.fields and section.table is None:
        lines.append("  (empty)")
    return "\n".join(lines)


def _show_document(doc: Document, dest: IO[str]) -> None:
    if not len(doc):
        print("(no sections)", file=dest)
        return
    for i, section in enumerate(doc):
        if i:
            print(file=dest)
        print(_fmt_section(section), file=dest)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def _build_filter(sections: list[str], prefix: str | None) -> SectionFilter | None:
    if sections and prefix:
        by_name = select_sections(*sections)
        by_prefix = select_prefix(prefix)
        return lambda path: by_name(path) or by_prefix(path)
    if sections:
        return select_sections(*sections)
    if prefix:
        return select_prefix(prefix)
    return None


def main(argv: Sequence[str] | None = None, dest: IO[str] | None = None) -> int:
    """Parse an Ion file and print it (``ion-inspect`` / ``python -m ion_core.cli``)."""
    parser = argparse.ArgumentParser(prog="ion-inspect", description="Inspect an Ion document")
    parser.add_argument("file", type=Path, help="Path to the .ion file")
    parser.add_argument(
        "--section", action="append", default=[], metavar="NAME",
        help="Keep only this section (dotted path); may be repeated",
    )
    parser.add_argument("--prefix", default=None, metavar="PATH", help="Keep sections at or below PATH")
    parser.add_argument("--json", action="store_true", help="Print the document as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    dest = dest or sys.stdout
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        text = args.file.read_text(encoding="utf-8")
    except OSError as exc:
        print(f"error: cannot read '{args.file}': {exc}", file=sys.stderr)
        return 2

    try:
        doc = parse(text, _build_filter(args.section, args.prefix))
    except IonParseError as exc:
        print(f"error: {args.file}: {exc.kind}: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(doc.to_python(), indent=2, ensure_ascii=False), file=dest)
    else:
        _show_document(doc, dest)
    return 0


if __name__ == "__main__":
    sys.exit(main())

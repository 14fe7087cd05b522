"""Assignment parser: ``key = value`` → Field."""

from __future__ import annotations

from .errors import IonSyntaxError
from .grammar import parse_span
from .model import Field
from .options import DEFAULT_MAX_DEPTH
from .scanner import KEY_RE


def find_separator(text: str) -> int:
    """Return the index of the first ``=`` outside strings and brackets, or -1."""
    depth = 0
    in_string = False
    i = 0
    while i < len(text):
        ch = text[i]
        if in_string:
            if ch == "\\":
                i += 2
                continue
            if ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch in "[{":
            depth += 1
        elif ch in "]}":
            depth -= 1
        elif ch == "=" and depth == 0:
            return i
        i += 1
    return -1


def parse_assignment(text: str, *, line: int = 1, max_depth: int = DEFAULT_MAX_DEPTH) -> Field:
    """Parse one assignment line (possibly spanning several physical lines).

    *text* must start at the beginning of physical line *line* so error
    columns match the source.
    """
    indent = len(text) - len(text.lstrip())
    eq = find_separator(text)
    if eq == -1:
        raise IonSyntaxError(f"expected '=' in assignment {text.strip()!r}", line, indent + 1)

    key = text[:eq].strip()
    if not key:
        raise IonSyntaxError("assignment has an empty key", line, indent + 1)
    if not KEY_RE.match(key):
        raise IonSyntaxError(f"invalid key {key!r}", line, indent + 1)

    value = parse_span(text, eq + 1, len(text), line=line, column=1, max_depth=max_depth)
    return Field(key=key, value=value, line=line)

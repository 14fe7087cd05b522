"""Value grammar: one Ion value expression → Value.

Dispatch is on the first significant character::

    "..."        string (escapes: \\" and \\\\ only)
    [a, b, ...]  array
    { k = v }    dictionary (entries separated by commas or newlines)
    token        true / false / integer / float / bare string

A bare token is tried as boolean, then integer, then float; whatever fails
all three is kept as a bare string (``SGL``, ``Room Only``, ``1a``).
"""

from __future__ import annotations

import math
import re

from .errors import IonParseError, IonRangeError, IonStructuralError, IonSyntaxError
from .options import DEFAULT_MAX_DEPTH
from .scanner import KEY_RE
from .values import Value, VArray, VBool, VDict, VFloat, VInteger, VString

_INT_RE = re.compile(r"^-?[0-9]+$")
_FLOAT_RE = re.compile(r"^-?[0-9]+\.[0-9]*(?:[eE][-+]?[0-9]+)?$")

INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1

_KEY_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_-")
_INLINE_WS = " \t"
_ANY_WS = " \t\r\n"


# ---------------------------------------------------------------------------
# Cursor
# ---------------------------------------------------------------------------

class _Cursor:
    """Position over ``text[pos:end]`` plus the current nesting depth.

    ``line``/``column`` locate ``text[0]`` in the document.
    """

    __slots__ = ("text", "pos", "end", "line", "column", "depth", "max_depth")

    def __init__(self, text: str, pos: int, end: int, line: int, column: int, max_depth: int) -> None:
        self.text = text
        self.pos = pos
        self.end = end
        self.line = line
        self.column = column
        self.depth = 0
        self.max_depth = max_depth

    def peek(self) -> str | None:
        if self.pos < self.end:
            return self.text[self.pos]
        return None

    def skip(self, chars: str) -> None:
        while self.pos < self.end and self.text[self.pos] in chars:
            self.pos += 1

    def location(self, pos: int) -> tuple[int, int]:
        nl = self.text.rfind("\n", 0, pos)
        if nl == -1:
            return self.line, self.column + pos
        return self.line + self.text.count("\n", 0, pos), pos - nl

    def error(self, cls: type[IonParseError], message: str, pos: int | None = None) -> IonParseError:
        line, column = self.location(self.pos if pos is None else pos)
        return cls(message, line, column)

    def enter(self, pos: int) -> None:
        self.depth += 1
        if self.depth > self.max_depth:
            raise self.error(IonSyntaxError, f"nesting too deep (limit is {self.max_depth})", pos)

    def leave(self) -> None:
        self.depth -= 1


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def parse_value(
    text: str,
    *,
    line: int = 1,
    column: int = 1,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Value:
    """Parse *text* as exactly one value.

    ``line`` and ``column`` give the document position of ``text[0]`` so
    that errors point into the original source.
    """
    return parse_span(text, 0, len(text), line=line, column=column, max_depth=max_depth)


def parse_span(
    text: str,
    start: int,
    end: int,
    *,
    line: int = 1,
    column: int = 1,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Value:
    """Parse ``text[start:end]`` as one value; the whole span must be consumed."""
    cur = _Cursor(text, start, end, line, column, max_depth)
    cur.skip(_ANY_WS)
    if cur.peek() is None:
        raise cur.error(IonSyntaxError, "expected a value")
    try:
        value = _value(cur)
    except RecursionError:
        raise cur.error(IonSyntaxError, "nesting too deep for the interpreter stack") from None
    cur.skip(_ANY_WS)
    if cur.peek() is not None:
        raise cur.error(IonSyntaxError, f"unexpected trailing characters {cur.text[cur.pos:cur.end].strip()!r}")
    return value


def classify_token(token: str) -> Value:
    """Type a bare token: boolean, then integer, then float, else string.

    Raises ``ValueError`` for a numeric literal that does not fit the
    64-bit integer range or overflows a float.
    """
    if token == "true":
        return VBool(True)
    if token == "false":
        return VBool(False)
    if _INT_RE.match(token):
        number = int(token)
        if number < INT_MIN or number > INT_MAX:
            raise ValueError(f"integer {token} is outside the 64-bit signed range")
        return VInteger(number)
    if _FLOAT_RE.match(token):
        number = float(token)
        if not math.isfinite(number):
            raise ValueError(f"float {token} is out of range")
        return VFloat(number)
    return VString(token)


# ---------------------------------------------------------------------------
# Recursive descent
# ---------------------------------------------------------------------------

def _value(cur: _Cursor) -> Value:
    cur.skip(_ANY_WS)
    ch = cur.peek()
    if ch is None:
        raise cur.error(IonSyntaxError, "expected a value")
    if ch == '"':
        return _string(cur)
    if ch == "[":
        return _array(cur)
    if ch == "{":
        return _dictionary(cur)
    if ch in ",]}=":
        raise cur.error(IonSyntaxError, f"unexpected {ch!r}, expected a value")
    return _token(cur)


def _string(cur: _Cursor) -> VString:
    opening = cur.pos
    cur.pos += 1
    chars: list[str] = []
    while True:
        ch = cur.peek()
        if ch is None or ch == "\n":
            raise cur.error(IonSyntaxError, "unterminated string", opening)
        if ch == '"':
            cur.pos += 1
            return VString("".join(chars))
        if ch == "\\":
            nxt = cur.text[cur.pos + 1] if cur.pos + 1 < cur.end else ""
            if nxt not in ('"', "\\"):
                raise cur.error(IonSyntaxError, f"invalid escape sequence {ch + nxt!r}")
            chars.append(nxt)
            cur.pos += 2
            continue
        chars.append(ch)
        cur.pos += 1


def _array(cur: _Cursor) -> VArray:
    opening = cur.pos
    cur.enter(opening)
    cur.pos += 1
    items: list[Value] = []
    while True:
        cur.skip(_ANY_WS)
        ch = cur.peek()
        if ch is None:
            raise cur.error(IonSyntaxError, "unterminated array", opening)
        if ch == "]":
            cur.pos += 1
            break
        items.append(_value(cur))
        cur.skip(_ANY_WS)
        ch = cur.peek()
        if ch == ",":
            cur.pos += 1
        elif ch is None:
            raise cur.error(IonSyntaxError, "unterminated array", opening)
        elif ch != "]":
            raise cur.error(IonSyntaxError, f"expected ',' or ']' in array, found {ch!r}")
    cur.leave()
    return VArray(tuple(items))


def _dictionary(cur: _Cursor) -> VDict:
    opening = cur.pos
    cur.enter(opening)
    cur.pos += 1
    entries: dict[str, Value] = {}
    while True:
        cur.skip(_ANY_WS)
        ch = cur.peek()
        if ch is None:
            raise cur.error(IonSyntaxError, "unterminated dictionary", opening)
        if ch == "}":
            cur.pos += 1
            break

        key_pos = cur.pos
        while cur.peek() is not None and cur.peek() in _KEY_CHARS:
            cur.pos += 1
        key = cur.text[key_pos:cur.pos]
        if not KEY_RE.match(key):
            raise cur.error(IonSyntaxError, f"expected a dictionary key, found {cur.text[key_pos:cur.pos + 1]!r}", key_pos)
        cur.skip(_INLINE_WS)
        if cur.peek() != "=":
            raise cur.error(IonSyntaxError, f"expected '=' after key {key!r}")
        cur.pos += 1
        value = _value(cur)
        if key in entries:
            raise cur.error(IonStructuralError, f"duplicate key {key!r} in dictionary", key_pos)
        entries[key] = value

        cur.skip(_INLINE_WS + "\r")
        ch = cur.peek()
        if ch in (",", "\n"):
            cur.pos += 1
        elif ch is None:
            raise cur.error(IonSyntaxError, "unterminated dictionary", opening)
        elif ch != "}":
            raise cur.error(IonSyntaxError, f"expected ',', newline or '}}' in dictionary, found {ch!r}")
    cur.leave()
    return VDict(entries)


def _token(cur: _Cursor) -> Value:
    start = cur.pos
    stops = "\n" if cur.depth == 0 else "\n,]}"
    while cur.pos < cur.end and cur.text[cur.pos] not in stops:
        cur.pos += 1
    token = cur.text[start:cur.pos].rstrip()
    try:
        return classify_token(token)
    except ValueError as exc:
        raise cur.error(IonRangeError, str(exc), start) from None

"""Exception hierarchy for Ion Core."""

from __future__ import annotations


class IonError(Exception):
    """Base class for every error raised by ion_core."""


class IonParseError(IonError):
    """A document could not be parsed.

    ``line`` and ``column`` are 1-based and point at the earliest offending
    character; ``section`` is the dotted path of the enclosing section, if
    the error occurred after a header.
    """

    kind = "parse error"

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        section: str | None = None,
    ) -> None:
        self.message = message
        self.line = line
        self.column = column
        self.section = section
        super().__init__(self._render())

    def _render(self) -> str:
        where = ""
        if self.line is not None:
            where = f"line {self.line}"
            if self.column is not None:
                where += f", column {self.column}"
            where += ": "
        text = f"{where}{self.message}"
        if self.section is not None:
            text += f" (in section [{self.section}])"
        return text

    def in_section(self, section: str) -> "IonParseError":
        """Attach *section* if the error does not name one yet."""
        if self.section is None:
            self.section = section
            self.args = (self._render(),)
        return self

    def at_column(self, column: int) -> "IonParseError":
        """Move the reported column, keeping line and message."""
        self.column = column
        self.args = (self._render(),)
        return self


class IonSyntaxError(IonParseError):
    """Malformed token: bad string, escape, bracket, literal or assignment."""

    kind = "syntax error"


class IonStructuralError(IonParseError):
    """Well-formed tokens in an invalid arrangement (tables, duplicates, ...)."""

    kind = "structural error"


class IonRangeError(IonParseError):
    """Numeric literal outside the representable range."""

    kind = "range error"


class MissingSectionError(IonError, KeyError):
    """Raised by ``Document.fetch`` when no section has the requested path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(path)

    def __str__(self) -> str:
        return f"missing section [{self.path}]"


class MissingValueError(IonError, KeyError):
    """Raised by ``Section.fetch`` when the section has no such field."""

    def __init__(self, key: str, section: str | None = None) -> None:
        self.key = key
        self.section = section
        super().__init__(key)

    def __str__(self) -> str:
        if self.section is None:
            return f"missing value {self.key!r}"
        return f"missing value {self.key!r} in section [{self.section}]"

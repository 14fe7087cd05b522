"""Ion Core — parser and data model for Ion documents."""

from .assembler import parse, select_prefix, select_sections
from .document import Document
from .errors import (
    IonError,
    IonParseError,
    IonRangeError,
    IonStructuralError,
    IonSyntaxError,
    MissingSectionError,
    MissingValueError,
)
from .grammar import parse_value
from .model import Field, Section, Table
from .options import ParserOptions
from .values import (
    Cell,
    Empty,
    Value,
    VArray,
    VBool,
    VDict,
    VFloat,
    VInteger,
    VString,
    _EmptyType,
    to_python,
    type_name,
)

__all__ = [
    "parse",
    "parse_value",
    "select_prefix",
    "select_sections",
    "Document",
    "Section",
    "Field",
    "Table",
    "ParserOptions",
    "Cell",
    "Empty",
    "Value",
    "VArray",
    "VBool",
    "VDict",
    "VFloat",
    "VInteger",
    "VString",
    "to_python",
    "type_name",
    "IonError",
    "IonParseError",
    "IonRangeError",
    "IonStructuralError",
    "IonSyntaxError",
    "MissingSectionError",
    "MissingValueError",
]

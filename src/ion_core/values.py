"""Value types for Ion documents."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Union


@dataclass(frozen=True, slots=True)
class VString:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class VInteger:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class VFloat:
    value: float

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True, slots=True)
class VBool:
    value: bool

    def __str__(self) -> str:
        return str(self.value).lower()


@dataclass(frozen=True, slots=True)
class VArray:
    items: tuple["Value", ...]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __str__(self) -> str:
        return "[" + ", ".join(str(v) for v in self.items) + "]"


@dataclass(frozen=True, slots=True)
class VDict:
    """Dictionary value. *entries* is copied into a read-only view, in source order."""

    entries: Mapping[str, "Value"]

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def __hash__(self) -> int:
        return hash(frozenset(self.entries.items()))

    def get(self, key: str, default: "Value | None" = None) -> "Value | None":
        return self.entries.get(key, default)

    def __len__(self) -> int:
        return len(self.entries)

    def __str__(self) -> str:
        inner = ", ".join(f"{k} = {v}" for k, v in self.entries.items())
        return "{ " + inner + " }" if inner else "{}"


class _EmptyType:
    """Singleton for a table cell left blank in the source."""

    _instance: "_EmptyType | None" = None

    def __new__(cls) -> "_EmptyType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Empty"

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return ""


Empty = _EmptyType()

Value = Union[VString, VInteger, VFloat, VBool, VArray, VDict]
Cell = Union[VString, VInteger, VFloat, VBool, VArray, VDict, _EmptyType]


def type_name(value: Cell) -> str:
    """Return the Ion type name of *value* (``"empty"`` for a blank cell)."""
    if isinstance(value, VString):
        return "string"
    if isinstance(value, VInteger):
        return "integer"
    if isinstance(value, VFloat):
        return "float"
    if isinstance(value, VBool):
        return "boolean"
    if isinstance(value, VArray):
        return "array"
    if isinstance(value, VDict):
        return "dictionary"
    if isinstance(value, _EmptyType):
        return "empty"
    raise TypeError(f"not an Ion value: {value!r}")


def to_python(value: Cell):
    """Convert *value* to plain builtins.

    Arrays become lists, dictionaries become dicts and ``Empty`` becomes
    ``None``.
    """
    if isinstance(value, (VString, VInteger, VFloat, VBool)):
        return value.value
    if isinstance(value, VArray):
        return [to_python(v) for v in value.items]
    if isinstance(value, VDict):
        return {k: to_python(v) for k, v in value.entries.items()}
    if isinstance(value, _EmptyType):
        return None
    raise TypeError(f"not an Ion value: {value!r}")

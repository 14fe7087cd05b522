"""Document — the final output of an Ion parse."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from .errors import MissingSectionError
from .model import Section

SectionPath = str | Sequence[str]


def normalize_path(path: SectionPath) -> tuple[str, ...]:
    """Accept ``"A.B"`` or ``("A", "B")`` and return the segment tuple."""
    if isinstance(path, str):
        return tuple(segment.strip() for segment in path.split("."))
    return tuple(path)


@dataclass(frozen=True, slots=True)
class Document:
    """Sections in source order, after filtering.

    Sections sharing a path are kept as separate entries; ``get`` returns
    the first one and ``get_all`` returns every one.
    """

    sections: tuple[Section, ...] = ()

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, tuple, list)):
            return False
        return self.get(path) is not None

    # -- Lookup ---------------------------------------------------------

    def get(self, path: SectionPath) -> Section | None:
        wanted = normalize_path(path)
        for section in self.sections:
            if section.path == wanted:
                return section
        return None

    def get_all(self, path: SectionPath) -> list[Section]:
        wanted = normalize_path(path)
        return [s for s in self.sections if s.path == wanted]

    def fetch(self, path: SectionPath) -> Section:
        section = self.get(path)
        if section is None:
            raise MissingSectionError(".".join(normalize_path(path)))
        return section

    def paths(self) -> list[tuple[str, ...]]:
        return [s.path for s in self.sections]

    # -- Export ---------------------------------------------------------

    def to_python(self) -> list[dict]:
        """Plain-builtin view of the document (used for JSON output)."""
        return [s.to_python() for s in self.sections]

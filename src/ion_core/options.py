"""Parser configuration."""

from __future__ import annotations

import sys
from dataclasses import dataclass

DEFAULT_MAX_DEPTH = 64

DUPLICATE_REJECT = "reject"
DUPLICATE_REPLACE = "replace"
_DUPLICATE_POLICIES = (DUPLICATE_REJECT, DUPLICATE_REPLACE)


@dataclass(frozen=True, slots=True)
class ParserOptions:
    """Knobs for a single ``parse`` call.

    ``max_depth`` caps array/dictionary nesting. ``duplicate_fields`` decides
    what happens when one section assigns the same key twice: ``"reject"``
    raises a structural error, ``"replace"`` keeps the later value.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    duplicate_fields: str = DUPLICATE_REJECT

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")
        # each nesting level costs two interpreter frames
        ceiling = sys.getrecursionlimit() // 3
        if self.max_depth > ceiling:
            raise ValueError(f"max_depth must be at most {ceiling}, got {self.max_depth}")
        if self.duplicate_fields not in _DUPLICATE_POLICIES:
            raise ValueError(
                f"duplicate_fields must be one of {_DUPLICATE_POLICIES}, "
                f"got {self.duplicate_fields!r}"
            )


DEFAULT_OPTIONS = ParserOptions()

"""
Per-invocation accumulator for the expander.

One ExpansionState is created for each module being expanded. The classifier
and the defaulter append fragments and set category flags; the assembler
consumes it exactly once. Any use after consumption raises StateError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Tuple

from ..errors import StateError

# Exact item names the expander recognises.
EVENT_ENUM = "Event"
STORAGE_STRUCT = "Storage"
CONSTRUCTOR_FN = "constructor"
DOJO_INIT_FN = "dojo_init"


class Category(Enum):
    CONSTRUCTOR = CONSTRUCTOR_FN
    INIT = DOJO_INIT_FN
    EVENT = EVENT_ENUM
    STORAGE = STORAGE_STRUCT

    @property
    def flag(self) -> str:
        return _FLAGS[self]


_FLAGS = {
    Category.CONSTRUCTOR: "has_constructor",
    Category.INIT: "has_init",
    Category.EVENT: "has_event",
    Category.STORAGE: "has_storage",
}


@dataclass
class ExpansionState:
    has_event: bool = False
    has_storage: bool = False
    has_constructor: bool = False
    has_init: bool = False
    fragments: List[str] = field(default_factory=list)
    consumed: bool = False

    def _check_open(self) -> None:
        if self.consumed:
            raise StateError("ExpansionState has already been consumed")

    def has(self, category: Category) -> bool:
        return getattr(self, category.flag)

    def mark(self, category: Category) -> None:
        self._check_open()
        setattr(self, category.flag, True)

    def missing(self) -> Tuple[Category, ...]:
        """Categories not seen yet, in default order (constructor, init, event, storage)."""
        return tuple(c for c in Category if not self.has(c))

    def append(self, fragment: str) -> None:
        self._check_open()
        self.fragments.append(fragment)

    def extend(self, fragments: Iterable[str]) -> None:
        self._check_open()
        self.fragments.extend(fragments)

    def consume(self) -> Tuple[str, ...]:
        self._check_open()
        self.consumed = True
        return tuple(self.fragments)


__all__ = [
    "Category",
    "ExpansionState",
    "EVENT_ENUM",
    "STORAGE_STRUCT",
    "CONSTRUCTOR_FN",
    "DOJO_INIT_FN",
]

"""Node attributes stored as a small bitmap."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable


class Attribute(Enum):
    # Not present in user source.
    GENERATED = 1 << 0


@dataclass
class Attributes:
    """A set of attributes."""

    bitmap: int = 0

    def add(self, attr: Attribute) -> None:
        self.bitmap |= 1 << attr.value

    def with_attribute(self, attr: Attribute) -> Attributes:
        result = replace(self)
        result.add(attr)
        return result

    def has(self, attr: Attribute) -> bool:
        return self.bitmap & (1 << attr.value) != 0

    @classmethod
    def from_iterable(cls, attrs: Iterable[Attribute]) -> Attributes:
        result = cls()
        for attr in attrs:
            result.add(attr)
        return result
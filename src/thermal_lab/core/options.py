from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class OptionalValue(Generic[T]):
    """
    A record field that is either present with a value or absent, in which case the
    consumer supplies its own default through ``resolve``.

    Usage:
        cooling = OptionalValue.of(0.3)
        cooling.resolve(0.15)   # -> 0.3
        OptionalValue.absent().resolve(0.15)   # -> 0.15
    """
    present: bool = False
    value: Any = None

    @classmethod
    def of(cls, value: T) -> "OptionalValue[T]":
        return cls(True, value)

    @classmethod
    def absent(cls) -> "OptionalValue[T]":
        return cls(False, None)

    @classmethod
    def from_raw(cls, value: T | None) -> "OptionalValue[T]":
        # None marks a field missing from the collaborator's record
        return cls.absent() if value is None else cls.of(value)

    def resolve(self, default: T) -> T:
        return self.value if self.present else default

    def __bool__(self):
        return self.present

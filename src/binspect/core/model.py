"""Filters, matches and the errors raised while validating them."""

from __future__ import annotations

from dataclasses import dataclass

# Address of an Entry that does not refer to a match.
NO_ADDRESS = -1


class InspectError(Exception):
    """Base class for every configuration error reported by binspect."""


class BadRange(InspectError, ValueError):
    """Raised when a filter's low bound is above its high bound."""

    def __init__(self, low: int | float, high: int | float) -> None:
        super().__init__(f"Low range > high ({low} > {high})")
        self.low = low
        self.high = high


class UnknownType(InspectError, ValueError):
    """Raised when a filter names a type outside the supported set."""

    def __init__(self, type: str) -> None:  # noqa: A002 - mirrors Filter.type
        super().__init__(f"Unknown type: {type}")
        self.type = type


@dataclass(frozen=True)
class Range:
    """Acceptance window for one filter.

    For integer types `low`/`high` bound the value, for float types they bound the
    base-10 exponent of the magnitude, and for string types the length in characters.
    `min_abs` rejects values with 0 < |v| < min_abs; None disables it.
    """

    low: int | float
    high: int | float
    min_abs: int | float | None = None

    def is_empty(self) -> bool:
        return self.low > self.high


@dataclass(frozen=True)
class Filter:
    type: str
    range: Range


@dataclass(frozen=True)
class Entry:
    """One match: where it starts, what it decoded to, and which type found it."""

    address: int
    value: str
    type: str

    @property
    def row(self) -> int:
        return self.address >> 4

    @property
    def found(self) -> bool:
        return self.address != NO_ADDRESS


Spec = list[Filter]
Report = list[Entry]

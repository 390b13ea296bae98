from __future__ import annotations

import math
import struct
from collections.abc import Callable, Iterator

from binspect.core.endian import Endian, native_endian, struct_prefix
from binspect.core.model import Entry, Range
from binspect.core.value_types import ValueKind, ValueType

Number = int | float


def _power_of_ten(exponent: Number) -> float:
    try:
        return 10.0**exponent
    except OverflowError:
        return math.inf


def make_acceptor(vtype: ValueType, rng: Range) -> Callable[[Number], bool]:
    """Build the acceptance test for values of `vtype` under `rng`.

    Integers must lie in [low, high]. Floats must be finite, non-zero and within
    10**low <= |v| <= 10**high. When `rng.min_abs` is set, values with
    0 < |v| < min_abs are rejected; zero is never rejected by the floor alone.
    """
    floor = rng.min_abs

    def above_floor(value: Number) -> bool:
        return floor is None or value == 0 or abs(value) >= floor

    if vtype.kind is ValueKind.FLOAT:
        smallest = _power_of_ten(rng.low)
        largest = _power_of_ten(rng.high)

        def accept_float(value: Number) -> bool:
            return (
                math.isfinite(value)
                and value != 0
                and smallest <= abs(value) <= largest
                and above_floor(value)
            )

        return accept_float

    low, high = rng.low, rng.high

    def accept_int(value: Number) -> bool:
        return low <= value <= high and above_floor(value)

    return accept_int


def format_number(value: Number, vtype: ValueType) -> str:
    """Canonical text for a decoded number: base 10 for ints, %f for floats."""
    if vtype.kind is ValueKind.FLOAT:
        return f"{value:f}"
    return str(value)


def scan_numbers(
    data: bytes,
    vtype: ValueType,
    rng: Range,
    *,
    start: int = 0,
    endian: Endian | None = None,
) -> Iterator[Entry]:
    """Yield every offset whose bytes decode to an acceptable value of `vtype`.

    The window advances one byte at a time whatever the width of the type, so
    matches may overlap. Scanning stops when fewer than `vtype.width` bytes remain.
    """
    unpack_from = struct.Struct(struct_prefix(endian or native_endian()) + vtype.fmt).unpack_from
    accept = make_acceptor(vtype, rng)
    last = len(data) - vtype.width
    for offset in range(max(0, start), last + 1):
        (value,) = unpack_from(data, offset)
        if accept(value):
            yield Entry(offset, format_number(value, vtype), vtype.tag)

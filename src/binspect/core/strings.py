from __future__ import annotations

import math
from collections.abc import Callable, Iterator
from enum import Enum

from binspect.core.endian import Endian, decode_unit, native_endian
from binspect.core.model import Entry, Range
from binspect.core.value_types import Charset, ValueType

PRINTABLE_MIN = 0x20
PRINTABLE_MAX = 0x7E
# Latin-1 printable block above the C1 controls (NBSP through ÿ)
LATIN1_MIN = 0xA0
LATIN1_MAX = 0xFF

# NUL, tab, newline, carriage return
TERMINATORS = frozenset({0x00, 0x09, 0x0A, 0x0D})


def is_printable(c: int, charset: Charset) -> bool:
    if PRINTABLE_MIN <= c <= PRINTABLE_MAX:
        return True
    return charset is Charset.LATIN1 and LATIN1_MIN <= c <= LATIN1_MAX


def is_terminator(unit: int) -> bool:
    """A code unit ends a string when its low byte is a terminator."""
    return (unit & 0xFF) in TERMINATORS


class _State(Enum):
    EMPTY = "empty"  # no candidate in progress; the next unit read starts one
    BUILDING = "building"  # accumulating characters
    RESTART = "restart"  # drop the candidate, resume one byte past the last unit read
    EMIT = "emit"  # candidate complete


def _bound(value: int | float, rounding: Callable[[float], int]) -> int | float:
    return rounding(value) if math.isfinite(value) else value


def length_window(rng: Range) -> tuple[int | float, int | float]:
    """Whole-number string lengths allowed by `rng`, as an inclusive (low, high) pair."""
    return _bound(rng.low, math.ceil), _bound(rng.high, math.floor)


def scan_strings(
    data: bytes,
    vtype: ValueType,
    rng: Range,
    *,
    start: int = 0,
    endian: Endian | None = None,
) -> Iterator[Entry]:
    """Yield terminated runs of printable code units whose length is within `rng`.

    A code unit is a character when its high byte is zero and its low byte is
    printable in `vtype.charset`. A run ends at a unit whose low byte is NUL, tab,
    newline or carriage return. Runs that are too short are dropped, and runs that
    grow past `rng.high` or hit a non-character are skipped to the end of their
    printable stretch. Scanning then resumes one byte past the start of the last
    unit read, so text that is out of phase with the code-unit width is still found.
    A run cut off by the end of `data` is not reported.

    Raises:
        TypeError: If `vtype` is not a string type.
    """
    if vtype.charset is None:
        raise TypeError(f"{vtype.tag} is not a string type")
    charset = vtype.charset
    width = vtype.width
    order = endian or native_endian()
    size = len(data)
    low, high = length_window(rng)

    def is_char(unit: int) -> bool:
        return unit <= 0xFF and is_printable(unit, charset)

    chars = bytearray()
    cursor = max(0, start)
    candidate = cursor
    state = _State.EMPTY

    while True:
        if state is _State.EMIT:
            yield Entry(candidate, chars.decode("latin-1"), vtype.tag)
            chars.clear()
            state = _State.EMPTY
            continue
        if state is _State.RESTART:
            chars.clear()
            cursor -= width - 1
            state = _State.EMPTY
            continue

        if cursor + width > size:
            return
        if state is _State.EMPTY:
            candidate = cursor
        unit = decode_unit(data, cursor, width, order)
        cursor += width

        if is_terminator(unit):
            state = _State.EMIT if low <= len(chars) <= high else _State.RESTART
        elif is_char(unit) and len(chars) < high:
            chars.append(unit)
            state = _State.BUILDING
        else:
            # Over-long or contaminated; skip what is left of the printable stretch.
            while is_char(unit):
                if cursor + width > size:
                    return
                unit = decode_unit(data, cursor, width, order)
                cursor += width
            state = _State.RESTART

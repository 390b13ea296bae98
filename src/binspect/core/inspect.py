from __future__ import annotations

from collections.abc import Iterable, Iterator

from binspect.core.endian import Endian, native_endian
from binspect.core.model import BadRange, Entry, Filter, Report, Spec
from binspect.core.numbers import scan_numbers
from binspect.core.strings import scan_strings
from binspect.core.value_types import ValueKind, ValueType, lookup_type


def validate_filter(flt: Filter) -> ValueType:
    """Resolve the filter's type and check its range.

    Raises:
        UnknownType: If the type tag is not recognized.
        BadRange: If the range's low bound is above its high bound.
    """
    vtype = lookup_type(flt.type)
    if flt.range.is_empty():
        raise BadRange(flt.range.low, flt.range.high)
    return vtype


def scan(
    data: bytes, vtype: ValueType, flt: Filter, *, start: int = 0, endian: Endian
) -> Iterator[Entry]:
    """Run the scanner for `vtype`, tagging matches with the filter's type."""
    if vtype.is_string:
        return scan_strings(data, vtype, flt.range, start=start, endian=endian)
    if vtype.kind in (ValueKind.INT, ValueKind.FLOAT):
        return scan_numbers(data, vtype, flt.range, start=start, endian=endian)
    raise AssertionError(f"unhandled value kind: {vtype.kind}")


def sort_report(entries: Iterable[Entry]) -> Report:
    """Order entries by 16-byte row, then type tag, then address (stable)."""
    return sorted(entries, key=lambda e: (e.row, e.type, e.address))


def inspect(data: bytes, spec: Spec, *, endian: Endian | None = None) -> Report:
    """Return all matches for all filters in `spec`, ordered for display.

    Every filter is validated before any scanning starts, so an invalid spec
    produces an exception and no report.
    """
    order = endian or native_endian()
    plan = [(validate_filter(flt), flt) for flt in spec]
    found: list[Entry] = []
    for vtype, flt in plan:
        found.extend(scan(data, vtype, flt, endian=order))
    return sort_report(found)

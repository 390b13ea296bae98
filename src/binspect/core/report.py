"""Dense, hex-dump style rendering of a Report.

Each line covers one 16-byte row of the input and one (type, value) pair:

    0000004    3              i32 -256
                4             i32 -1
                    89abcdef  i32 0

The row prefix is the address without its last hex digit and is blanked when it
repeats the previous line's. The grid that follows has one column per byte of the
row; a match is marked by writing the last hex digit of its address in its column.
Repeats of the same type and value within a row mark extra columns on one line.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from binspect.core.model import NO_ADDRESS, Entry

ADDRESS_WIDTH = 8
BYTES_PER_ROW = 16
GRID_WIDTH = BYTES_PER_ROW + 2  # two columns of padding before the type
TYPE_WIDTH = 4


@dataclass
class ReportLine:
    prefix: str
    type: str
    value: str
    grid: list[str] = field(default_factory=lambda: [" "] * GRID_WIDTH)

    def mark(self, address: int, digit: str) -> None:
        self.grid[address & (BYTES_PER_ROW - 1)] = digit

    def marked_columns(self) -> list[int]:
        return [i for i, c in enumerate(self.grid[:BYTES_PER_ROW]) if c != " "]

    @property
    def text(self) -> str:
        return f"{self.prefix} {''.join(self.grid)}{self.type:<{TYPE_WIDTH}}{self.value}"


def _hex_address(address: int) -> str:
    return f"{address:0{ADDRESS_WIDTH}x}"


def build_lines(report: Iterable[Entry]) -> list[ReportLine]:
    """Fold an ordered report into display lines, merging same-row repeats."""
    lines: list[ReportLine] = []
    last = Entry(NO_ADDRESS, "", "")
    for entry in report:
        digits = _hex_address(entry.address)
        same_row = last.found and entry.row == last.row
        if same_row and entry.type == last.type and entry.value == last.value:
            lines[-1].mark(entry.address, digits[-1])
            continue
        prefix = " " * (len(digits) - 1) if same_row else digits[:-1]
        line = ReportLine(prefix, entry.type, entry.value)
        line.mark(entry.address, digits[-1])
        lines.append(line)
        last = entry
    return lines


def format_report(report: Iterable[Entry]) -> list[str]:
    """Render `report` (already in display order) as printable lines."""
    return [line.text for line in build_lines(report)]

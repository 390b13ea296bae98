from __future__ import annotations

from rich.style import Style
from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from binspect.core.report import TYPE_WIDTH, ReportLine
from binspect.core.value_types import VALUE_TYPES, ValueKind
from binspect.ui.palette import PALETTE

_KIND_COLORS = {
    ValueKind.INT: PALETTE.type_int_fg,
    ValueKind.FLOAT: PALETTE.type_float_fg,
    ValueKind.STRING: PALETTE.type_string_fg,
}

_MARK_STYLE = Style(color=PALETTE.grid_mark_fg, bgcolor=PALETTE.grid_mark_bg, bold=True)


def type_color(tag: str) -> str:
    vtype = VALUE_TYPES.get(tag)
    return _KIND_COLORS[vtype.kind] if vtype else PALETTE.value_fg


def render_line(line: ReportLine) -> Text:
    """Style one report line; the plain text is identical to `line.text`."""
    text = Text(no_wrap=True)
    text.append(line.prefix, style=PALETTE.row_prefix_fg)
    text.append(" ")
    for c in line.grid:
        text.append(c, style=_MARK_STYLE if c != " " else "")
    text.append(f"{line.type:<{TYPE_WIDTH}}", style=type_color(line.type))
    text.append(line.value, style=PALETTE.value_fg)
    return text


class ReportView(Widget):
    """Read-only, row-scrolled view of formatted report lines.

    Renders only the lines that fit the widget height.
    """

    can_focus = True

    BINDINGS = [
        ("up", "row_up", "Up"),
        ("down", "row_down", "Down"),
        ("k", "row_up", "Up"),
        ("j", "row_down", "Down"),
        ("pageup", "page_up", "PgUp"),
        ("pagedown", "page_down", "PgDn"),
        ("g", "go_start", "Start"),
        ("G", "go_end", "End"),
    ]

    top_row: int = reactive(0)

    def __init__(self, lines: list[ReportLine] | None = None) -> None:
        super().__init__()
        self._lines: list[ReportLine] = list(lines or [])

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def set_lines(self, lines: list[ReportLine]) -> None:
        self._lines = list(lines)
        self.set_top_row(0)

    # ---- Scrolling helpers ----
    def visible_rows(self) -> int:
        # Fallback to 16 rows if height is unknown yet.
        h = self.size.height or 0
        return max(16, h)

    def set_top_row(self, row: int) -> None:
        max_top = max(0, self.line_count - 1)
        self.top_row = max(0, min(row, max_top))
        self.refresh()

    def scroll_by(self, delta_rows: int) -> None:
        self.set_top_row(self.top_row + delta_rows)

    def action_row_up(self) -> None:
        self.scroll_by(-1)

    def action_row_down(self) -> None:
        self.scroll_by(1)

    def action_page_up(self) -> None:
        self.scroll_by(-self.visible_rows())

    def action_page_down(self) -> None:
        self.scroll_by(self.visible_rows())

    def action_go_start(self) -> None:
        self.set_top_row(0)

    def action_go_end(self) -> None:
        self.set_top_row(self.line_count - self.visible_rows())

    def render(self) -> Text:  # type: ignore[override]
        shown = self._lines[self.top_row : self.top_row + self.visible_rows()]
        if not shown:
            return Text("No matches", style=PALETTE.status_fg)
        return Text("\n").join(render_line(line) for line in shown)

from __future__ import annotations

import os

from rich.text import Text
from textual.app import App, ComposeResult
from textual.widgets import Footer, Header, Static

from binspect.core.config import spec_to_args
from binspect.core.endian import Endian
from binspect.core.inspect import inspect
from binspect.core.io import MappedFile
from binspect.core.model import InspectError, Report, Spec
from binspect.core.report import ReportLine, build_lines
from binspect.ui.palette import PALETTE
from binspect.widgets.report_view import ReportView


class ReportApp(App):
    """Textual shell for browsing an inspection report."""

    CSS = f"""
    ReportView {{
        height: 1fr;
        border: solid {PALETTE.panel_border};
    }}
    ReportView:focus {{
        border: solid {PALETTE.accent};
    }}
    #status {{
        height: 1;
    }}
    Footer {{
        background: {PALETTE.footer_bg};
        color: {PALETTE.footer_fg};
    }}
    """

    BINDINGS = [("q", "quit", "Quit"), ("r", "reload", "Reload")]

    def __init__(self, path: str, spec: Spec, *, endian: Endian | None = None) -> None:
        super().__init__()
        self._path = path
        self._spec = list(spec)
        self._endian = endian
        self.title = f"binspect: {os.path.basename(path)}"
        self.status = Static(id="status")
        self.report: Report = []
        self.report_view: ReportView | None = None

    def load_report(self) -> list[ReportLine]:
        """Scan the file and return the display lines.

        Raises:
            OSError: If the file does not exist or cannot be read.
            InspectError: If the spec is invalid.
        """
        with MappedFile(self._path) as mapped:
            self.report = inspect(mapped.data, self._spec, endian=self._endian)
        return build_lines(self.report)

    def compose(self) -> ComposeResult:  # noqa: D401 - Textual API
        # Scan in compose so errors are shown in the UI
        try:
            lines = self.load_report()
        except (OSError, InspectError) as exc:
            yield Static(Text(f"Error: {exc}", style=f"bold {PALETTE.error_fg}"))
            return

        self.report_view = ReportView(lines)
        yield Header(show_clock=False, id="header")
        yield self.report_view
        yield self.status
        yield Footer(id="footer")

    def on_mount(self) -> None:
        if self.report_view is not None:
            self.update_status()
            self.set_focus(self.report_view)

    def status_text(self) -> str:
        lines = self.report_view.line_count if self.report_view is not None else 0
        return f"{len(self.report)} matches, {lines} lines  |  {spec_to_args(self._spec).strip()}"

    def update_status(self) -> None:
        self.status.update(Text(self.status_text(), style=PALETTE.status_fg))

    def action_reload(self) -> None:
        """Rescan the file, keeping the current view if that fails."""
        if self.report_view is None:
            return
        try:
            lines = self.load_report()
        except (OSError, InspectError) as exc:
            self.status.update(Text(f"Reload failed: {exc}", style=PALETTE.error_fg))
            return
        self.report_view.set_lines(lines)
        self.update_status()

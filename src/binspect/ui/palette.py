from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Palette:
    footer_bg: str
    footer_fg: str
    accent: str
    panel_border: str
    row_prefix_fg: str
    grid_mark_fg: str
    grid_mark_bg: str
    type_int_fg: str
    type_float_fg: str
    type_string_fg: str
    value_fg: str
    status_fg: str
    error_fg: str


DEFAULT = Palette(
    footer_bg="#1f2430",
    footer_fg="#d8dee9",
    accent="#5ea1ff",
    panel_border="#3b4252",
    row_prefix_fg="#8892a0",
    grid_mark_fg="#ffa657",
    grid_mark_bg="#1f2430",
    type_int_fg="#9cdcfe",
    type_float_fg="#b3ecff",
    type_string_fg="#d7ba7d",
    value_fg="#ffffff",
    status_fg="#6b7280",
    error_fg="#ff5555",
)

# Selected palette for now
PALETTE = DEFAULT

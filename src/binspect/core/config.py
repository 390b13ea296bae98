"""Range syntax, default filter tables and the optional YAML configuration file."""

from __future__ import annotations

import math
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from binspect.core.model import Filter, InspectError, Range, Spec
from binspect.core.value_types import VALUE_TYPES, lookup_type


class BadFormat(InspectError, ValueError):
    """Raised when range text is not <low>:<high>[:<min>]."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Range format should be <low>:<high> ({text})")
        self.text = text


class ConfigError(InspectError):
    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


# Ranges used when a filter is requested without one. Float ranges are exponents.
DEFAULT_RANGES: dict[str, Range] = {
    "f64": Range(-6, 6),
    "f32": Range(-6, 6),
    "i64": Range(-1000, 1000),
    "i32": Range(-1000, 1000),
    "i16": Range(-1000, 1000),
    "s16": Range(3, 64),
    "s8": Range(3, 64),
    "a16": Range(3, 64),
    "a8": Range(3, 64),
}

# Types scanned when no filter is requested.
DEFAULT_SPEC_TYPES: tuple[str, ...] = ("f64", "i32", "s8")

DEFAULT_SPEC: tuple[Filter, ...] = tuple(Filter(t, DEFAULT_RANGES[t]) for t in DEFAULT_SPEC_TYPES)

_C_OCTAL = re.compile(r"^[+-]?0[0-7]+$")


def parse_number(text: str) -> int | float:
    """Parse one range bound.

    Integers take C-style prefixes (0x, 0b, 0o or a leading 0 for octal); anything
    else is tried as a float. Digit separators (_ and ') and an L suffix are ignored.

    Raises:
        ValueError: If `text` is not a number, or is NaN.
    """
    cleaned = text.strip().replace("_", "").replace("'", "")
    if cleaned[-1:] in ("L", "l"):
        cleaned = cleaned[:-1]
    if _C_OCTAL.match(cleaned):
        return int(cleaned, 8)
    try:
        return int(cleaned, 0)
    except ValueError:
        pass
    value = float(cleaned)
    if math.isnan(value):
        raise ValueError(f"not a usable bound: {text!r}")
    return value


def parse_range(text: str) -> Range:
    """Parse `<low>:<high>[:<min>]` into a Range.

    Raises:
        BadFormat: If either bound is missing or any part is not a number.
    """
    parts = text.split(":")
    if len(parts) not in (2, 3) or not parts[0].strip() or not parts[1].strip():
        raise BadFormat(text)
    try:
        low = parse_number(parts[0])
        high = parse_number(parts[1])
        min_abs = parse_number(parts[2]) if len(parts) == 3 and parts[2].strip() else None
    except ValueError:
        raise BadFormat(text) from None
    return Range(low, high, min_abs)


def _format_bound(value: int | float) -> str:
    return str(value) if isinstance(value, int) else repr(value)


def format_range(rng: Range) -> str:
    text = f"{_format_bound(rng.low)}:{_format_bound(rng.high)}"
    if rng.min_abs is not None:
        text += f":{_format_bound(rng.min_abs)}"
    return text


def spec_to_args(spec: Spec | tuple[Filter, ...]) -> str:
    """Render `spec` as the command-line flags that would request it."""
    return "".join(f"--{flt.type}={format_range(flt.range)} " for flt in spec)


@dataclass
class FilterConfig:
    """Default ranges per type plus the spec used when no filter is requested."""

    ranges: dict[str, Range] = field(default_factory=lambda: dict(DEFAULT_RANGES))
    spec: list[Filter] = field(default_factory=lambda: list(DEFAULT_SPEC))

    def default_range(self, tag: str) -> Range:
        lookup_type(tag)
        return self.ranges[tag]


def get_user_config_path() -> Path:
    """Get platform-appropriate user config file path."""
    if os.name == "nt":  # Windows
        base = os.environ.get("APPDATA", os.path.expanduser("~"))
        return Path(base) / "binspect" / "config.yaml"
    else:  # macOS, Linux
        return Path.home() / ".config" / "binspect" / "config.yaml"


def _range_from_yaml(value: Any) -> Range:
    """Accept "low:high[:min]" text, a [low, high, min?] list or a mapping."""
    if isinstance(value, str):
        return parse_range(value)
    if isinstance(value, list) and len(value) in (2, 3):
        return parse_range(":".join(str(v) for v in value))
    if isinstance(value, dict) and "low" in value and "high" in value:
        parts = [str(value["low"]), str(value["high"])]
        if value.get("min_abs") is not None:
            parts.append(str(value["min_abs"]))
        return parse_range(":".join(parts))
    # Unquoted a:b is read by YAML as a base-60 integer
    raise BadFormat(f"{value!r}; quote range text in YAML")


def parse_config(text: str) -> FilterConfig:
    """Build a FilterConfig from YAML text.

    Raises:
        ConfigError: Listing every problem found in the document.
    """
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError([f"Invalid YAML: {exc}"]) from exc
    if not isinstance(data, dict):
        raise ConfigError(["Config must be a mapping with 'ranges' and/or 'spec'"])

    errors: list[str] = []
    ranges = dict(DEFAULT_RANGES)
    raw_ranges = data.get("ranges") or {}
    if not isinstance(raw_ranges, dict):
        errors.append("'ranges' must map type names to ranges")
        raw_ranges = {}
    for tag, value in raw_ranges.items():
        if tag not in VALUE_TYPES:
            errors.append(f"ranges: unknown type '{tag}'")
            continue
        try:
            ranges[tag] = _range_from_yaml(value)
        except BadFormat as exc:
            errors.append(f"ranges.{tag}: {exc}")

    spec = [Filter(t, ranges[t]) for t in DEFAULT_SPEC_TYPES]
    raw_spec = data.get("spec")
    if raw_spec is not None:
        if not isinstance(raw_spec, list):
            errors.append("'spec' must be a list of filters")
            raw_spec = []
        spec = []
        for i, item in enumerate(raw_spec):
            if isinstance(item, str):
                tag, value = item, None
            elif isinstance(item, dict):
                tag, value = item.get("type"), item.get("range")
            else:
                errors.append(f"spec[{i}]: expected a type name or {{type, range}}")
                continue
            if tag not in VALUE_TYPES:
                errors.append(f"spec[{i}]: unknown type '{tag}'")
                continue
            try:
                rng = ranges[tag] if value is None else _range_from_yaml(value)
            except BadFormat as exc:
                errors.append(f"spec[{i}]: {exc}")
                continue
            spec.append(Filter(tag, rng))

    if errors:
        raise ConfigError(errors)
    return FilterConfig(ranges=ranges, spec=spec)


def load_config(path: Path | None = None) -> FilterConfig:
    """Load the configuration at `path`, or the user config file if present.

    An explicit `path` must exist; the user config file is optional.
    """
    if path is None:
        path = get_user_config_path()
        if not path.exists():
            return FilterConfig()
    elif not path.exists():
        raise ConfigError([f"Config file not found: {path}"])
    return parse_config(path.read_text(encoding="utf-8"))

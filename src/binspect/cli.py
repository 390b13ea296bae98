from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from binspect.core.config import (
    FilterConfig,
    format_range,
    load_config,
    parse_range,
    spec_to_args,
)
from binspect.core.endian import normalize_endian
from binspect.core.inspect import inspect
from binspect.core.io import MappedFile
from binspect.core.model import Filter, InspectError, Spec
from binspect.core.report import format_report


class MissingFile(InspectError):
    def __init__(self) -> None:
        super().__init__("A file name to inspect was not given.")


# (short flag, type tag, help)
FILTER_FLAGS: tuple[tuple[str, str, str], ...] = (
    ("-d", "f64", "show double-precision floats"),
    ("-f", "f32", "show single-precision floats"),
    ("-l", "i64", "show 64-bit integers"),
    ("-i", "i32", "show 32-bit integers"),
    ("-s", "i16", "show 16-bit integers"),
    ("-Z", "s16", "show 2-byte Latin-1 strings"),
    ("-z", "s8", "show 1-byte Latin-1 strings"),
    ("-A", "a16", "show 2-byte ASCII strings"),
    ("-a", "a8", "show 1-byte ASCII strings"),
)

_BARE_FLAGS = {opt: tag for short, tag, _ in FILTER_FLAGS for opt in (short, f"--{tag}")}


class _FilterAction(argparse.Action):
    """Append (type tag, range text or None) to the shared filter list in order."""

    def __init__(self, option_strings, dest, type_tag: str, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(option_strings, dest, nargs="?", **kwargs)
        self.type_tag = type_tag

    def __call__(self, parser, namespace, values, option_string=None) -> None:  # type: ignore[no-untyped-def]
        filters = list(getattr(namespace, self.dest, None) or [])
        filters.append((self.type_tag, values or None))
        setattr(namespace, self.dest, filters)


def _attach_empty(argv: list[str]) -> list[str]:
    """Give bare filter flags an empty attached range.

    A range is only taken when attached (-d-3:9, --f64=-3:9), so a bare flag
    must not swallow the following argument.
    """
    out: list[str] = []
    for i, arg in enumerate(argv):
        if arg == "--":
            return out + argv[i:]
        tag = _BARE_FLAGS.get(arg)
        out.append(f"--{tag}=" if tag else arg)
    return out


def build_parser(config: FilterConfig | None = None) -> argparse.ArgumentParser:
    config = config or FilterConfig()
    parser = argparse.ArgumentParser(
        prog="binspect",
        description="Show where the bytes of a file decode to numbers or strings in range.",
        epilog=(
            "Range is given as <low>:<high>[:<min>]. For floats <low> and <high> are "
            "base-10 exponents of the magnitude, for strings they are lengths. "
            "With no filter options, the behavior is the same as "
            + spec_to_args(config.spec).strip()
        ),
        allow_abbrev=False,
    )
    parser.add_argument("path", nargs="?", help="Path to binary file")
    for short, tag, text in FILTER_FLAGS:
        parser.add_argument(
            short,
            f"--{tag}",
            action=_FilterAction,
            type_tag=tag,
            dest="filters",
            metavar="RANGE",
            help=f"{text} (default {format_range(config.ranges[tag])})",
        )
    parser.add_argument("--config", help="YAML file with default ranges and spec")
    parser.add_argument(
        "--endian",
        choices=("little", "big", "native"),
        default="native",
        help="byte order of numbers and 16-bit characters (default: native)",
    )
    parser.add_argument("--tui", action="store_true", help="browse the report in a terminal UI")
    return parser


def _load_config(argv: list[str]) -> FilterConfig:
    pre = argparse.ArgumentParser(add_help=False, allow_abbrev=False)
    pre.add_argument("--config")
    known, _ = pre.parse_known_args(argv)
    return load_config(Path(known.config) if known.config else None)


def parse_args(
    argv: list[str], config: FilterConfig | None = None
) -> tuple[str, Spec, argparse.Namespace]:
    """Parse the command line.

    Returns:
        The file to inspect, the filters to apply and the parsed options.

    Raises:
        MissingFile: If no file was given.
        BadFormat: If a range is malformed.
        ConfigError: If the configuration file is invalid.
    """
    if config is None:
        config = _load_config(argv)
    args = build_parser(config).parse_args(_attach_empty(argv))
    spec: Spec = [
        Filter(tag, parse_range(text) if text else config.default_range(tag))
        for tag, text in args.filters or []
    ]
    if not args.path:
        raise MissingFile()
    return args.path, spec or list(config.spec), args


def _usage(argv: list[str]) -> str:
    try:
        config = _load_config(argv)
    except InspectError:
        config = FilterConfig()
    return build_parser(config).format_help()


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    try:
        path, spec, args = parse_args(argv)
    except SystemExit as exc:  # --help, or an option argparse rejects
        return int(exc.code or 0)
    except InspectError as exc:
        print(f"Error: {exc}\n\n{_usage(argv)}", file=sys.stderr)
        return 1

    if not os.path.exists(path):
        print(f"binspect: file not found: {path}", file=sys.stderr)
        return 2

    endian = normalize_endian(args.endian)
    if args.tui:
        from binspect.app import ReportApp

        ReportApp(path, spec, endian=endian).run()
        return 0

    try:
        with MappedFile(path) as mapped:
            lines = format_report(inspect(mapped.data, spec, endian=endian))
    except InspectError as exc:
        print(f"Error: {exc}\n\n{_usage(argv)}", file=sys.stderr)
        return 1
    except OSError as exc:  # a directory, or no permission to read
        print(f"binspect: cannot read {path}: {exc}", file=sys.stderr)
        return 2

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

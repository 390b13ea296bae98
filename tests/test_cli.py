from __future__ import annotations

from pathlib import Path

import pytest

from binspect.cli import FILTER_FLAGS, MissingFile, main, parse_args
from binspect.core.config import DEFAULT_SPEC, BadFormat, FilterConfig
from binspect.core.model import Filter, Range
from binspect.core.value_types import TYPE_TAGS


@pytest.fixture(autouse=True)
def _no_user_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


def spec_of(*argv: str) -> list[Filter]:
    path, spec, _ = parse_args(list(argv), FilterConfig())
    assert path == "file"
    return spec


def test_missing_file() -> None:
    with pytest.raises(MissingFile):
        parse_args([], FilterConfig())
    with pytest.raises(MissingFile):
        parse_args(["-d"], FilterConfig())


def test_default_spec() -> None:
    assert spec_of("file") == list(DEFAULT_SPEC)


@pytest.mark.parametrize("flag", ["-d", "--f64"])
def test_flag_without_range_uses_default(flag: str) -> None:
    assert spec_of(flag, "file") == [Filter("f64", Range(-6, 6))]


@pytest.mark.parametrize("flag", ["-d-3:9", "--f64=-3:9"])
def test_flag_with_attached_range(flag: str) -> None:
    assert spec_of("file", flag) == [Filter("f64", Range(-3, 9))]


@pytest.mark.parametrize("short,tag", [(s, t) for s, t, _ in FILTER_FLAGS])
def test_every_flag(short: str, tag: str) -> None:
    assert spec_of(f"{short}1:2", "file") == [Filter(tag, Range(1, 2))]
    assert spec_of(f"--{tag}=1:2", "file") == [Filter(tag, Range(1, 2))]


def test_string_flag_range() -> None:
    assert spec_of("--s8=-3:9", "file") == [Filter("s8", Range(-3, 9))]


def test_bare_flag_does_not_take_the_file() -> None:
    assert spec_of("-i", "file", "-z") == [
        Filter("i32", Range(-1000, 1000)),
        Filter("s8", Range(3, 64)),
    ]


def test_filters_keep_command_line_order() -> None:
    assert [f.type for f in spec_of("-a", "-i0:1", "-d", "file")] == ["a8", "i32", "f64"]


def test_repeated_flag_adds_another_filter() -> None:
    assert spec_of("-i0:1", "-i5:6", "file") == [
        Filter("i32", Range(0, 1)),
        Filter("i32", Range(5, 6)),
    ]


def test_bad_range_format() -> None:
    with pytest.raises(BadFormat):
        parse_args(["--i32=0-25", "file"], FilterConfig())


def test_config_ranges_become_flag_defaults() -> None:
    cfg = FilterConfig(ranges={**FilterConfig().ranges, "i16": Range(0, 9)}, spec=[])
    _, spec, _ = parse_args(["-s", "file"], cfg)
    assert spec == [Filter("i16", Range(0, 9))]


def test_endian_option() -> None:
    _, _, args = parse_args(["file"], FilterConfig())
    assert args.endian == "native"
    _, _, args = parse_args(["--endian", "big", "file"], FilterConfig())
    assert args.endian == "big"


def test_main_prints_report(sample_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["-i10:1000", "--endian", "little", str(sample_path)])
    assert rc == 0
    assert capsys.readouterr().out.splitlines() == [
        "0000000         8         i32 432",
        "0000004        7          i32 255",
        "0000005    3              i32 256",
    ]


def test_main_no_matches_prints_nothing(
    sample_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["-i99:100", "--endian", "little", str(sample_path)]) == 0
    assert capsys.readouterr().out == ""


def test_main_without_file(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: A file name to inspect was not given.\n\n")
    assert "usage: binspect" in err


def test_main_bad_range(sample_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--i32=0-25", str(sample_path)]) == 1
    assert "Range format should be <low>:<high> (0-25)" in capsys.readouterr().err


def test_main_low_above_high(sample_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-i5:1", str(sample_path)]) == 1
    assert capsys.readouterr().err.startswith("Error: Low range > high (5 > 1)")


def test_main_missing_path(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    missing = tmp_path / "nope.bin"
    assert main([str(missing)]) == 2
    assert capsys.readouterr().err.strip() == f"binspect: file not found: {missing}"


def test_main_help(capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COLUMNS", "500")
    assert main(["--help"]) == 0
    out = capsys.readouterr().out
    assert "--f64=-6:6 --i32=-1000:1000 --s8=3:64" in out


def test_main_unknown_option(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--bogus", "file"]) == 2
    assert "unrecognized arguments" in capsys.readouterr().err


def test_main_with_config(
    tmp_path: Path, sample_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text('spec:\n  - {type: i32, range: "10:1000"}\n', encoding="utf-8")
    rc = main(["--config", str(cfg), "--endian", "little", str(sample_path)])
    assert rc == 0
    assert len(capsys.readouterr().out.splitlines()) == 3


def test_main_with_broken_config(
    tmp_path: Path, sample_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("spec: [q13]\n", encoding="utf-8")
    assert main(["--config", str(cfg), str(sample_path)]) == 1
    assert "spec[0]: unknown type 'q13'" in capsys.readouterr().err


def test_flags_cover_every_type() -> None:
    assert tuple(tag for _, tag, _ in FILTER_FLAGS) == TYPE_TAGS


def test_main_directory_path(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(tmp_path)]) == 2
    assert capsys.readouterr().err.startswith(f"binspect: cannot read {tmp_path}: ")

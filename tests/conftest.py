from __future__ import annotations

import struct
from pathlib import Path

import pytest

LATIN1_TEXT = "w\xe6e\xfeing w\xefll\xf8w"  # wæeþing wïlløw


def build_sample(*, wide: bool) -> bytes:
    """Sample file with numbers and strings at known offsets (little-endian).

    Narrow layout:
        0x00 f64 1.23        0x08 i32 432         0x0c i64 0x00ffeeffeeffeeff
        0x14 "moo"           0x18 "moo"           0x1c Latin-1 text (14 chars)
        0x2b "first\\tsecond\\nthird"             0x3e "third"
        0x44 i32 -1          0x48 three i32 zeros 0x54 i32 1
    The wide layout holds the same strings as 16-bit code units, with one pad
    byte before "first" so that the split strings sit at odd offsets.
    """
    out = bytearray()
    out += struct.pack("<d", 1.23)
    out += struct.pack("<i", 432)
    out += struct.pack("<q", 0x00FFEEFFEEFFEEFF)
    if wide:

        def enc(s: str) -> bytes:
            return s.encode("utf-16-le") + b"\x00\x00"

        out += enc("moo") + enc("moo") + enc(LATIN1_TEXT)
        out += b"\x00"
    else:

        def enc(s: str) -> bytes:
            return s.encode("latin-1") + b"\x00"

        out += enc("moo") + enc("moo") + enc(LATIN1_TEXT)
    out += enc("first\tsecond\nthird") + enc("third")
    out += struct.pack("<iiiii", -1, 0, 0, 0, 1)
    return bytes(out)


@pytest.fixture
def sample() -> bytes:
    return build_sample(wide=False)


@pytest.fixture
def sample_wide() -> bytes:
    return build_sample(wide=True)


@pytest.fixture
def sample_path(tmp_path: Path, sample: bytes) -> Path:
    p = tmp_path / "test_data"
    p.write_bytes(sample)
    return p

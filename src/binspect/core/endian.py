"""Byte order handling shared by the scanners."""

from __future__ import annotations

import sys
from typing import Literal

# Type alias for endianness
Endian = Literal["little", "big"]


def native_endian() -> Endian:
    """Byte order of the running interpreter's host."""
    return "little" if sys.byteorder == "little" else "big"


def normalize_endian(value: str | None) -> Endian:
    """Normalize an endian value from the command line or a config file.

    Args:
        value: 'little', 'big', 'native' (any case), or None for native order

    Returns:
        Normalized Endian value

    Raises:
        ValueError: If value is not one of the accepted names
    """
    if value is None:
        return native_endian()

    value_lower = value.lower()
    if value_lower == "native":
        return native_endian()
    if value_lower not in ("little", "big"):
        raise ValueError(f"Invalid endian '{value}'. Expected 'little' or 'big'.")

    return value_lower  # type: ignore[return-value]


def struct_prefix(endian: Endian) -> str:
    """struct format prefix selecting `endian` with standard sizes and no padding."""
    return "<" if endian == "little" else ">"


def decode_unit(data: bytes, offset: int, width: int, endian: Endian) -> int:
    """Decode one unsigned code unit of `width` bytes at `offset`."""
    if width == 1:
        return data[offset]
    return int.from_bytes(data[offset : offset + width], byteorder=endian)

"""The closed set of value types a filter can ask for."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from binspect.core.model import UnknownType


class ValueKind(Enum):
    """How the bytes under a window are interpreted."""

    FLOAT = "float"
    INT = "int"
    STRING = "string"


class Charset(Enum):
    """Which characters count as printable in a string."""

    ASCII = "ascii"
    LATIN1 = "latin-1"


@dataclass(frozen=True)
class ValueType:
    tag: str
    kind: ValueKind
    width: int  # bytes per value, or per code unit for strings
    fmt: str = ""  # struct format character for numbers
    charset: Charset | None = None

    @property
    def is_string(self) -> bool:
        return self.kind is ValueKind.STRING


VALUE_TYPES: dict[str, ValueType] = {
    "f64": ValueType("f64", ValueKind.FLOAT, 8, "d"),
    "f32": ValueType("f32", ValueKind.FLOAT, 4, "f"),
    "i64": ValueType("i64", ValueKind.INT, 8, "q"),
    "i32": ValueType("i32", ValueKind.INT, 4, "i"),
    "i16": ValueType("i16", ValueKind.INT, 2, "h"),
    "s16": ValueType("s16", ValueKind.STRING, 2, charset=Charset.LATIN1),
    "s8": ValueType("s8", ValueKind.STRING, 1, charset=Charset.LATIN1),
    "a16": ValueType("a16", ValueKind.STRING, 2, charset=Charset.ASCII),
    "a8": ValueType("a8", ValueKind.STRING, 1, charset=Charset.ASCII),
}

TYPE_TAGS: tuple[str, ...] = tuple(VALUE_TYPES)


def lookup_type(tag: str) -> ValueType:
    """Return the ValueType for `tag`.

    Raises:
        UnknownType: If `tag` is not one of TYPE_TAGS.
    """
    try:
        return VALUE_TYPES[tag]
    except KeyError:
        raise UnknownType(tag) from None

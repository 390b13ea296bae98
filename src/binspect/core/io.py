from __future__ import annotations

import os
from contextlib import suppress

try:
    import mmap as _mmap_mod  # type: ignore
except Exception:  # pragma: no cover - platform-specific
    _mmap_mod = None  # type: ignore


class MappedFile:
    """Read-only, randomly addressable view of a whole file.

    Prefers `mmap` so large files are paged in by the OS on demand; falls back to
    reading the file into memory when mapping is unavailable or the file is empty.
    `data` supports len(), indexing, slicing and the buffer protocol.
    """

    def __init__(self, path: str, *, use_mmap: bool = True) -> None:
        self._path = path
        try:
            st = os.stat(path)
        except FileNotFoundError:
            raise FileNotFoundError(f"File not found: {path}") from None

        self._size = int(st.st_size)
        self._fh = open(path, "rb", buffering=0)  # noqa: SIM115
        self._mmap = None
        self._data: bytes | None = None
        if use_mmap and _mmap_mod is not None and self._size > 0:
            try:
                self._mmap = _mmap_mod.mmap(
                    self._fh.fileno(),
                    length=0,
                    access=_mmap_mod.ACCESS_READ,
                )
            except (OSError, ValueError):
                # Fall back to a plain read if mmap fails.
                self._mmap = None
        if self._mmap is None:
            self._data = self._fh.read() if self._size > 0 else b""

    def close(self) -> None:
        if getattr(self, "_mmap", None) is not None:
            with suppress(Exception):
                self._mmap.close()  # type: ignore[union-attr]
            self._mmap = None
        with suppress(Exception):
            self._fh.close()

    def __enter__(self) -> MappedFile:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def data(self) -> bytes:
        """The file contents; valid until close()."""
        if self._mmap is not None:
            return self._mmap  # type: ignore[return-value]
        assert self._data is not None
        return self._data

    @property
    def size(self) -> int:
        """File size in bytes."""
        return self._size

    @property
    def path(self) -> str:
        """File path."""
        return self._path

    @property
    def is_mapped(self) -> bool:
        return self._mmap is not None

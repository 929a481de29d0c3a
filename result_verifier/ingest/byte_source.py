from __future__ import annotations

from pathlib import Path

import numpy as np


class ByteSource:
    """
    Read-only, finite, randomly addressable byte sequence of one file.

    Files are memory-mapped as ``uint8`` so large result files are never read
    into memory at once. Empty files cannot be mapped and are represented by a
    zero-length array instead.
    """

    def __init__(self, data: np.ndarray, filename: str):
        if data.dtype != np.uint8 or data.ndim != 1:
            raise ValueError(f"ByteSource expects a 1-D uint8 array, got {data.dtype} with ndim={data.ndim}")
        self._data = data
        self.filename = filename
        self.closed = False

    @classmethod
    def open(cls, file_path: str | Path) -> "ByteSource":
        path = Path(file_path).expanduser()
        if not path.is_file():
            raise FileNotFoundError(str(path))
        if path.stat().st_size == 0:
            data = np.zeros((0,), dtype=np.uint8)
        else:
            data = np.memmap(path, dtype=np.uint8, mode="r")
        return cls(data, str(file_path))

    @classmethod
    def from_bytes(cls, payload: bytes, filename: str = "<memory>") -> "ByteSource":
        return cls(np.frombuffer(payload, dtype=np.uint8), filename)

    def __enter__(self) -> "ByteSource":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        """Drop the mapping; the file is unmapped once no view of it remains."""
        self._data = np.zeros((0,), dtype=np.uint8)
        self.closed = True

    def __len__(self) -> int:
        return int(self._data.shape[0])

    def window(self, start: int, stop: int) -> np.ndarray:
        """Zero-copy view of bytes ``[start, stop)``."""
        return self._data[start:stop]

    def read(self, start: int, stop: int) -> bytes:
        return self._data[start:stop].tobytes()

    def text(self, encoding: str = "utf-8") -> str:
        """Whole content decoded; meant for small files such as schemas."""
        return self.read(0, len(self)).decode(encoding)

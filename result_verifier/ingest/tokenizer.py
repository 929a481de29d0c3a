from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

import numpy as np

from result_verifier.ingest.byte_source import ByteSource
from result_verifier.models.outcomes import Field, FieldOutcome, Signal


@dataclass(frozen=True)
class TokenizerConfig:
    """
    Delimiters and header policy for one result file.

    field_delimiter / record_delimiter:
      single characters that each encode to exactly one byte (no quoting, no escaping).
    skip_header:
      discard everything up to and including the first record delimiter.
    encoding:
      used to decode field bytes; undecodable bytes are kept as surrogates.
    block_size:
      bytes scanned per vectorized delimiter search.
    """
    field_delimiter: str = "\t"
    record_delimiter: str = "\n"
    skip_header: bool = False
    encoding: str = "utf-8"
    block_size: int = 1 << 20

    def __post_init__(self) -> None:
        for label, delim in (("field", self.field_delimiter), ("record", self.record_delimiter)):
            if len(delim.encode(self.encoding)) != 1:
                raise ValueError(f"{label} delimiter must be a single byte, got {delim!r}")
        if self.field_delimiter == self.record_delimiter:
            raise ValueError("field and record delimiters must differ")
        if self.block_size <= 0:
            raise ValueError("block_size must be > 0")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "TokenizerConfig":
        return cls(**d)


class FieldTokenizer:
    """
    Forward-only reader of delimited fields over one :class:`ByteSource`.

    Call :meth:`next_field` once per schema column, then :meth:`next_record`.
    Outcomes are :class:`Field` or a :class:`Signal`; nothing is raised for
    end of record / end of file. Single pass, no rewind.

    The record delimiter after the last record is optional: bytes left after
    the final delimiter (or an empty remainder after a trailing field
    delimiter) form the last field of that record.
    """

    def __init__(self, source: ByteSource, config: Optional[TokenizerConfig] = None):
        self.source = source
        self.config = config or TokenizerConfig()
        self._fd = self.config.field_delimiter.encode(self.config.encoding)[0]
        self._rd = self.config.record_delimiter.encode(self.config.encoding)[0]

        self._position = 0
        self._header_pending = self.config.skip_header
        self._end_of_record = False
        self._in_record = False
        self._records = 0

        # Delimiter offsets found in source[_window_lo:_window_hi].
        self._hits = np.zeros((0,), dtype=np.int64)
        self._window_lo = 0
        self._window_hi = 0

    @property
    def filename(self) -> str:
        return self.source.filename

    @property
    def records(self) -> int:
        """Number of completed records (calls to :meth:`next_record`)."""
        return self._records

    @property
    def at_end_of_record(self) -> bool:
        """True once the current record's delimiter has been consumed."""
        return self._end_of_record

    @property
    def line_number(self) -> int:
        """1-based line of the record currently being read."""
        return self._records + 1 + (1 if self.config.skip_header else 0)

    def next_field(self) -> FieldOutcome:
        if self._end_of_record:
            return Signal.END_OF_RECORD

        if self._header_pending:
            pos = self._position
            while True:
                d = self._next_delimiter(pos)
                if d is None:
                    self._position = len(self.source)
                    return Signal.END_OF_FILE
                pos = d + 1
                if self._byte_at(d) == self._rd:
                    break
            self._position = pos
            self._header_pending = False

        n = len(self.source)
        d = self._next_delimiter(self._position)
        if d is None:
            if self._position >= n and not self._in_record:
                self._position = n
                return Signal.END_OF_FILE
            # Last record without a record delimiter: the remainder is its final field.
            raw = self.source.read(self._position, n)
            self._end_of_record = True
            self._position = n
        else:
            raw = self.source.read(self._position, d)
            if self._byte_at(d) == self._rd:
                self._end_of_record = True
            self._position = d + 1
        self._in_record = True
        return Field(raw.decode(self.config.encoding, errors="surrogateescape"))

    def next_record(self) -> None:
        self._end_of_record = False
        self._in_record = False
        self._records += 1

    # -------------------------
    # Internals
    # -------------------------
    def _byte_at(self, offset: int) -> int:
        return int(self.source.window(offset, offset + 1)[0])

    def _load_window(self, start: int) -> None:
        stop = min(start + self.config.block_size, len(self.source))
        block = self.source.window(start, stop)
        mask = (block == self._fd) | (block == self._rd)
        self._hits = np.flatnonzero(mask).astype(np.int64) + start
        self._window_lo = start
        self._window_hi = stop

    def _next_delimiter(self, start: int) -> Optional[int]:
        n = len(self.source)
        while start < n:
            if not (self._window_lo <= start < self._window_hi):
                self._load_window(start)
            i = int(np.searchsorted(self._hits, start))
            if i < self._hits.size:
                return int(self._hits[i])
            start = self._window_hi
        return None

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Side(Enum):
    """Which of the two compared files a value (or a fault) belongs to."""

    CANDIDATE = "candidate"
    REFERENCE = "reference"


class Signal(Enum):
    """
    Control outcomes of :meth:`FieldTokenizer.next_field`.

    END_OF_RECORD:
      a field was requested after the current record already ended.
    END_OF_FILE:
      no field is left in the byte source.

    Neither is an error by itself; the record comparator decides what an
    asymmetric signal means.
    """
    END_OF_RECORD = "end of record"
    END_OF_FILE = "end of file"


@dataclass(frozen=True)
class Field:
    """One raw field of one record. Ephemeral: not retained past a comparison."""
    text: str


FieldOutcome = Union[Field, Signal]

"""Result verifier exception hierarchy.

Every error derives from :class:`VerificationError`, itself a ``ValueError``.

Errors raised inside the comparison engine do not know where they happened;
the record comparator attaches ``source`` / ``line`` / ``column`` with
:meth:`VerificationError.located` before they reach the file-pair boundary.
"""

from __future__ import annotations

from typing import Optional

from result_verifier.models.outcomes import Side


class VerificationError(ValueError):
    """Base exception for all verification errors."""

    kind = "error"

    def __init__(
        self,
        message: str,
        *,
        source: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[str] = None,
    ) -> None:
        self.message = message
        self.source = source
        self.line = line
        self.column = column
        super().__init__(message)

    def __str__(self) -> str:
        prefix = ""
        if self.source is not None:
            prefix = self.source
            if self.line is not None:
                prefix += f":{self.line}"
            prefix += "\t"
        if self.column is not None:
            prefix += f"{self.column}: "
        return prefix + self.message

    def located(
        self,
        source: Optional[str],
        line: Optional[int],
        column: Optional[str] = None,
    ) -> "VerificationError":
        """Attach a location to this error and return it, for ``raise err.located(...)``."""
        self.source = source
        self.line = line
        self.column = column
        return self


class SchemaDefinitionError(VerificationError):
    """Malformed schema definition text."""

    kind = "schema"


class FieldValueError(VerificationError):
    """
    A value that is malformed or violates its column contract.

    The ``side`` tells which file is to blame. Use :meth:`for_side` instead of
    picking the subclass by hand.
    """

    kind = "value"
    side: Side

    @classmethod
    def for_side(cls, side: Side, message: str) -> "FieldValueError":
        if side is Side.CANDIDATE:
            return CandidateFileError(message)
        return ReferenceFileError(message)


class CandidateFileError(FieldValueError):
    """Fault attributable to the candidate (computed) file."""

    side = Side.CANDIDATE


class ReferenceFileError(FieldValueError):
    """Fault attributable to the reference (expected) file."""

    side = Side.REFERENCE


class RecordStructureError(VerificationError):
    """Field-count or record-count mismatch between the two files."""

    kind = "structure"


class ValueMismatchError(VerificationError):
    """Two well-formed values that are simply not equal."""

    kind = "mismatch"

    def __init__(self, expected: str, actual: str, **location) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected {expected} got {actual}", **location)

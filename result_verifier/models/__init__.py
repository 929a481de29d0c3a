from .errors import (
    CandidateFileError,
    FieldValueError,
    RecordStructureError,
    ReferenceFileError,
    SchemaDefinitionError,
    ValueMismatchError,
    VerificationError,
)
from .outcomes import Field, FieldOutcome, Side, Signal
from .schema import ColumnDescriptor, ColumnType, Schema

__all__ = [
    "CandidateFileError",
    "ColumnDescriptor",
    "ColumnType",
    "Field",
    "FieldOutcome",
    "FieldValueError",
    "RecordStructureError",
    "ReferenceFileError",
    "Schema",
    "SchemaDefinitionError",
    "Side",
    "Signal",
    "ValueMismatchError",
    "VerificationError",
]

from __future__ import annotations

"""Record-level comparison of a candidate and a reference result file.

Both tokenizers are advanced in lock step, one schema column at a time. The
first discrepancy raises; nothing is collected past it.

Structure policy
----------------
- both files end: success (a missing record delimiter after the last
  record is tolerated by the tokenizer)
- a record ends before the schema's column count: "too few fields" (blamed on that file)
- a record continues after the last schema column: "too many fields" (blamed on that file)
- only the candidate ends: "too few results"
- only the reference ends: "too many results"
"""

from result_verifier.analysis.comparison import compare_field
from result_verifier.ingest.tokenizer import FieldTokenizer
from result_verifier.models.errors import (
    FieldValueError,
    RecordStructureError,
    ValueMismatchError,
)
from result_verifier.models.outcomes import Side, Signal
from result_verifier.models.schema import Schema


def _structure_error(tokenizer: FieldTokenizer, message: str) -> RecordStructureError:
    return RecordStructureError(message, source=tokenizer.filename, line=tokenizer.line_number)


def compare_record_streams(
    schema: Schema,
    candidate: FieldTokenizer,
    reference: FieldTokenizer,
    tolerance: float = 0.0,
) -> int:
    """
    Compare two result files record by record.

    Returns
    -------
    int
        Number of records compared (all equal).

    Raises
    ------
    RecordStructureError, CandidateFileError, ReferenceFileError, ValueMismatchError
        located at the file, line and (where applicable) column to blame.
    """
    if len(schema) == 0:
        raise ValueError("schema has no columns")

    while True:
        for column in schema:
            c = candidate.next_field()
            if c is Signal.END_OF_RECORD:
                raise _structure_error(candidate, "too few fields")
            r = reference.next_field()
            if r is Signal.END_OF_RECORD:
                raise _structure_error(reference, "too few fields")

            if c is Signal.END_OF_FILE and r is Signal.END_OF_FILE:
                return candidate.records
            if c is Signal.END_OF_FILE:
                raise _structure_error(candidate, "too few results")
            if r is Signal.END_OF_FILE:
                raise _structure_error(candidate, "too many results")

            try:
                equal = compare_field(column, c.text, r.text, tolerance)
            except FieldValueError as e:
                blamed = candidate if e.side is Side.CANDIDATE else reference
                raise e.located(blamed.filename, blamed.line_number, column.name)
            if not equal:
                raise ValueMismatchError(
                    r.text,
                    c.text,
                    source=candidate.filename,
                    line=candidate.line_number,
                    column=column.name,
                )

        for tokenizer in (candidate, reference):
            if not tokenizer.at_end_of_record:
                raise _structure_error(tokenizer, "too many fields")
        candidate.next_record()
        reference.next_record()

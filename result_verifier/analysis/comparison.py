from __future__ import annotations

from typing import Callable, Dict, Tuple, TypeVar

import numpy as np

from result_verifier.analysis.fixed_point import FixedPointValue
from result_verifier.models.errors import FieldValueError
from result_verifier.models.outcomes import Side
from result_verifier.models.schema import ColumnDescriptor, ColumnType


NULL_TOKEN = "null"

_INT32 = np.iinfo(np.int32)
_INT64 = np.iinfo(np.int64)

T = TypeVar("T")
Comparator = Callable[[ColumnDescriptor, str, str, float], bool]


def compare_field(
    column: ColumnDescriptor,
    candidate: str,
    reference: str,
    tolerance: float = 0.0,
) -> bool:
    """
    Compare one field of the candidate file with the same field of the reference file.

    Parameters
    ----------
    column:
        Descriptor of the field's column.
    candidate, reference:
        Raw field text of both sides.
    tolerance:
        Relative tolerance in percent for decimal columns; 0 means exact.

    Returns
    -------
    bool
        True if the values are equal under the column's type semantics.

    Raises
    ------
    CandidateFileError / ReferenceFileError
        if a value is malformed or violates the column contract; the subclass
        names the file to blame.
    """
    if column.nullable:
        if candidate == NULL_TOKEN and reference == NULL_TOKEN:
            return True
    else:
        for side, text in _sides(candidate, reference):
            if text == NULL_TOKEN:
                raise FieldValueError.for_side(side, "null not allowed")

    return _COMPARATORS[column.type](column, candidate, reference, tolerance)


def _sides(candidate: str, reference: str) -> Tuple[Tuple[Side, str], Tuple[Side, str]]:
    return (Side.CANDIDATE, candidate), (Side.REFERENCE, reference)


def _parse_both(parse: Callable[[str], T], candidate: str, reference: str) -> Tuple[T, T]:
    """Apply ``parse`` to both sides; a ValueError is re-raised tagged with its side."""
    out = []
    for side, text in _sides(candidate, reference):
        try:
            out.append(parse(text))
        except ValueError as e:
            raise FieldValueError.for_side(side, str(e)) from e
    return out[0], out[1]


def parse_signed(text: str, bounds: np.iinfo) -> int:
    """Parse a base-10 signed integer that must fit ``bounds``."""
    body = text[1:] if text[:1] in ("+", "-") else text
    if not body or not all(ch in "0123456789" for ch in body):
        raise ValueError(f"invalid integer {text!r}")
    value = int(text)
    if not (int(bounds.min) <= value <= int(bounds.max)):
        raise ValueError(f"{text} out of range for {bounds.bits}-bit integer")
    return value


def _compare_integer(column: ColumnDescriptor, candidate: str, reference: str, tolerance: float) -> bool:
    c, r = _parse_both(lambda s: parse_signed(s, _INT32), candidate, reference)
    return c == r


def _compare_bigint(column: ColumnDescriptor, candidate: str, reference: str, tolerance: float) -> bool:
    c, r = _parse_both(lambda s: parse_signed(s, _INT64), candidate, reference)
    return c == r


def _compare_date(column: ColumnDescriptor, candidate: str, reference: str, tolerance: float) -> bool:
    # Integer-encoded; no calendar validation.
    c, r = _parse_both(lambda s: parse_signed(s, _INT64), candidate, reference)
    return c == r


def _compare_text(column: ColumnDescriptor, candidate: str, reference: str, tolerance: float) -> bool:
    for side, text in _sides(candidate, reference):
        if len(text) > column.length:
            raise FieldValueError.for_side(
                side, f"{column.type.value} field exceeds length {column.length}"
            )
    return candidate == reference


def _compare_decimal(column: ColumnDescriptor, candidate: str, reference: str, tolerance: float) -> bool:
    c, r = _parse_both(lambda s: FixedPointValue.parse(s, column.precision), candidate, reference)
    if tolerance == 0.0:
        return c.same_as(r)
    try:
        ref = r.to_float()
        cand = c.to_float()
    except OverflowError:
        # Beyond float range: only exact equality is meaningful.
        return c.same_as(r)
    if ref == 0.0:
        return c.same_as(r)
    delta = abs(cand - ref) / ref * 100.0
    return bool(delta < tolerance)


_COMPARATORS: Dict[ColumnType, Comparator] = {
    ColumnType.INTEGER: _compare_integer,
    ColumnType.BIGINT: _compare_bigint,
    ColumnType.VARCHAR: _compare_text,
    ColumnType.CHAR: _compare_text,
    ColumnType.DECIMAL: _compare_decimal,
    ColumnType.DATE: _compare_date,
}

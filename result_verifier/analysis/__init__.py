"""Comparison package.

Design principle:
  - Ingest produces raw field text and typed column descriptors.
  - Analysis gives the text its column semantics and decides equality.

Every fault found here names the side (candidate or reference) it belongs to,
so reports always point at the right file.
"""

from .comparison import NULL_TOKEN, compare_field
from .fixed_point import FixedPointValue
from .records import compare_record_streams

__all__ = [
    "FixedPointValue",
    "NULL_TOKEN",
    "compare_field",
    "compare_record_streams",
]

from __future__ import annotations

"""Fixed-point decimal values as used by decimal columns.

A value is kept as an unsigned integer part plus a fractional part already
scaled to the column precision, so that exact comparison never involves
binary floating point.

Rounding is half-up on the first digit past the precision only, and the
increment stays inside the fractional part (no carry into the integer part).
Both quirks are part of the result-file contract and are kept on purpose.
"""

from dataclasses import dataclass

import numpy as np


_DIGITS = "0123456789"


@dataclass(frozen=True)
class FixedPointValue:
    """
    integer_part:
      unsigned magnitude before the decimal point (unbounded).
    fractional_part:
      digits after the point, rounded / zero-padded to ``precision`` digits.
    precision:
      declared number of fractional digits.
    """
    integer_part: int
    fractional_part: int
    precision: int

    @classmethod
    def parse(cls, text: str, precision: int) -> "FixedPointValue":
        """
        Single left-to-right pass over ``text``.

        Raises
        ------
        ValueError
            for empty text, signs, exponents or any other non-digit character
            before the rounding position, or a second decimal point.

        Examples
        --------
        >>> FixedPointValue.parse("10.5", 2)
        FixedPointValue(integer_part=10, fractional_part=50, precision=2)
        >>> FixedPointValue.parse("1.005", 2).fractional_part
        1
        """
        if precision < 0:
            raise ValueError(f"precision must be >= 0, got {precision}")

        integer_part = 0
        fractional_part = 0
        in_fraction = False
        places = 0
        n_digits = 0

        for ch in text:
            if ch == ".":
                if in_fraction:
                    raise ValueError(f"more than one decimal point in {text!r}")
                in_fraction = True
                continue
            if ch not in _DIGITS:
                raise ValueError(f"invalid character {ch!r} in decimal {text!r}")
            digit = ord(ch) - ord("0")
            n_digits += 1
            if not in_fraction:
                integer_part = integer_part * 10 + digit
                continue
            places += 1
            if places == precision + 1:
                if digit >= 5:
                    fractional_part += 1
                break
            fractional_part = fractional_part * 10 + digit

        if n_digits == 0:
            raise ValueError(f"no digits in decimal {text!r}")

        if places < precision:
            fractional_part *= 10 ** (precision - places)

        return cls(integer_part=integer_part, fractional_part=fractional_part, precision=precision)

    def to_float(self) -> float:
        """
        ``integer_part + fractional_part / 10**k`` where ``k`` is the digit count
        of ``fractional_part`` itself (1 for zero).

        Raises
        ------
        OverflowError
            if either part does not fit a float64.
        """
        k = len(str(self.fractional_part))
        return float(np.float64(self.integer_part) + np.float64(self.fractional_part) / np.float64(10.0 ** k))

    def same_as(self, other: "FixedPointValue") -> bool:
        """Exact equality of both parts."""
        return (self.integer_part, self.fractional_part) == (other.integer_part, other.fractional_part)

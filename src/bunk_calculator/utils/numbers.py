from __future__ import annotations

from decimal import Decimal, InvalidOperation
from fractions import Fraction

# Durations, percentages and lecture counts never need more than this.
MAX_INTEGER_DIGITS = 9
MAX_FRACTION_DIGITS = 12


class InvalidNumber(ValueError):
    pass


def parse_decimal(raw: str | int | float | Decimal) -> Fraction:
    """Parse user input into an exact rational value.

    Decimal text is converted without passing through binary floating point,
    so "0.07" stays exactly 7/100. Values with more than ``MAX_INTEGER_DIGITS``
    integer digits or ``MAX_FRACTION_DIGITS`` decimal places are rejected.
    """

    if isinstance(raw, bool):
        raise InvalidNumber("Booleans are not numbers.")

    if isinstance(raw, float):
        raw = repr(raw)

    text = str(raw).strip()
    if len(text) > MAX_INTEGER_DIGITS + MAX_FRACTION_DIGITS + 8:
        raise InvalidNumber(f"Number is too long: {text[:16]}...")

    try:
        value = Decimal(text)
    except InvalidOperation as exc:
        raise InvalidNumber(f"Not a number: {raw!r}") from exc

    if not value.is_finite():
        raise InvalidNumber(f"Not a finite number: {raw!r}")

    exponent = value.as_tuple().exponent
    if value.adjusted() >= MAX_INTEGER_DIGITS or (isinstance(exponent, int) and exponent < -MAX_FRACTION_DIGITS):
        raise InvalidNumber(f"Number out of range: {raw!r}")

    return Fraction(value)


def parse_int(raw: str | int) -> int:
    if isinstance(raw, bool):
        raise InvalidNumber("Booleans are not integers.")

    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if len(text.lstrip("+-")) > MAX_INTEGER_DIGITS:
            raise InvalidNumber(f"Integer out of range: {text[:16]}...")
        try:
            value = int(text)
        except ValueError as exc:
            raise InvalidNumber(f"Not an integer: {raw!r}") from exc

    if abs(value) >= 10**MAX_INTEGER_DIGITS:
        raise InvalidNumber(f"Integer out of range: {raw!r}")
    return value


def format_number(value: Fraction | int | float) -> str:
    """Render a stored duration the way a user would have typed it."""

    fraction = Fraction(value)
    if fraction.denominator == 1:
        return str(fraction.numerator)
    return f"{float(fraction):g}"

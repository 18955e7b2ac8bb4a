"""Low-level numeric scanning and canonical number strings.

Everything here works on plain digit strings so that rounding is exact
(``decimal.Decimal``) and no float artefacts leak into the display.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext

# A canonical (possibly partial) numeric string: "-", "12.", ".5", "-0.25".
CANONICAL_RE = re.compile(r"-?\d*(?:\.\d*)?")


@dataclass(frozen=True)
class NumberParts:
    """A scanned number split into sign, integer digits and fraction digits.

    ``fraction`` is ``None`` when no decimal mark was seen and ``""`` when one
    was seen with nothing after it yet.
    """

    negative: bool = False
    integer: str = ""
    fraction: str | None = None

    @property
    def has_digits(self) -> bool:
        return bool(self.integer or self.fraction)

    @property
    def has_decimal(self) -> bool:
        return self.fraction is not None

    def to_decimal(self) -> Decimal:
        text = f"{self.integer or '0'}.{self.fraction or '0'}"
        value = Decimal(text)
        return -value if self.negative else value


EMPTY = NumberParts()


def scan(text: str, decimal: str = ".") -> NumberParts:
    """Scan *text* left to right keeping digits, the sign and the first decimal mark.

    Any ``-`` marks the number negative wherever it appears. Decimal marks
    after the first one and every other character are dropped.
    """
    negative = False
    integer: list[str] = []
    fraction: list[str] | None = None
    for ch in text:
        if "0" <= ch <= "9":
            (integer if fraction is None else fraction).append(ch)
        elif ch == "-":
            negative = True
        elif ch == decimal and fraction is None:
            fraction = []
    return NumberParts(
        negative=negative,
        integer="".join(integer),
        fraction=None if fraction is None else "".join(fraction),
    )


def scan_number(value: int | float | Decimal) -> NumberParts:
    """Scan a numeric value; ``nan`` and infinities scan as empty."""
    if isinstance(value, (Decimal, int)):
        number = Decimal(value)
    else:
        number = Decimal(str(value))
    if not number.is_finite():
        return EMPTY
    return scan(format(number, "f"))


def round_half_up(value: Decimal, precision: int) -> Decimal:
    """Round to *precision* places, halves away from zero."""
    digits = len(value.as_tuple().digits)
    with localcontext() as ctx:
        ctx.prec = max(28, digits + precision + 2)
        return value.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)


def trim_fraction(fraction: str, minimum_digits: int) -> str:
    """Drop trailing zeros but keep at least *minimum_digits* places."""
    return fraction.rstrip("0").ljust(minimum_digits, "0")


def commit_parts(parts: NumberParts, precision: int, minimum_fraction_digits: int) -> NumberParts:
    """Rounded, trimmed and sign-normalised parts; ``EMPTY`` when there are no digits."""
    if not parts.has_digits:
        return EMPTY
    rounded = round_half_up(parts.to_decimal(), precision)
    integer, _, fraction = format(abs(rounded), "f").partition(".")
    fraction = trim_fraction(fraction, minimum_fraction_digits)
    return NumberParts(
        negative=rounded < 0,
        integer=integer,
        fraction=fraction or None,
    )


def to_string(parts: NumberParts) -> str:
    sign = "-" if parts.negative else ""
    if parts.fraction is None:
        return f"{sign}{parts.integer}"
    return f"{sign}{parts.integer}.{parts.fraction}"


def canonical_number(
    value: int | float | Decimal | str | None,
    precision: int = 2,
    minimum_fraction_digits: int = 0,
) -> str:
    """Canonical numeric string for *value*, or ``""`` when it has no digits.

    >>> canonical_number(1234.5)
    '1234.5'
    >>> canonical_number("3.005", 2, 2)
    '3.01'
    >>> canonical_number(-0.001)
    '0'
    """
    if value is None:
        return ""
    parts = scan(value) if isinstance(value, str) else scan_number(value)
    return to_string(commit_parts(parts, precision, minimum_fraction_digits))

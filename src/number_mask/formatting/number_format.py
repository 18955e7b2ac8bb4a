"""Conversion between numeric values and masked display strings."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from number_mask.formatting.digits import (
    CANONICAL_RE,
    EMPTY,
    NumberParts,
    commit_parts,
    scan,
    scan_number,
    to_string,
)
from number_mask.models.options import Options

Value = int | float | Decimal | str | None


@dataclass(frozen=True)
class Reformatted:
    """Display text produced from typed text, with what the re-mask added or removed.

    ``padding`` counts characters appended after the last typed digit
    (minimum fraction digits and the decimal mark they need). ``trimmed``
    counts typed characters dropped from the end of the number because they
    went past ``precision``.
    """

    text: str
    padding: int = 0
    trimmed: int = 0


class NumberFormatter:
    """Formats and unformats numbers under one set of ``Options``.

    A formatter is either in commit mode (``is_clean``, the default: round to
    ``precision``, trim to ``minimum_fraction_digits``) or in typing mode
    (``clean(False)``: truncate instead of rounding and keep partial display
    states such as ``"-"`` or ``"12."``). ``unformat`` always returns a
    canonical number or ``""``. Neither method raises on bad input; characters
    that cannot be part of a number are dropped.
    """

    def __init__(self, options: Options | None = None, *, is_clean: bool = True):
        self.options = options or Options()
        self.is_clean = is_clean

    def clean(self, flag: bool = True) -> NumberFormatter:
        """Return a formatter for the same options in commit (``True``) or typing mode."""
        return NumberFormatter(self.options, is_clean=flag)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def format(self, value: Value) -> str:
        """Masked display string for *value*.

        *value* is a number or a canonical numeric string such as ``unformat``
        returns; those are never shifted by ``reverse_fill``. Any other string
        is read as display text exactly as ``unformat`` reads it, so
        ``format(s) == format(unformat(s))``.
        """
        return self._mask(self._read(value)).text

    def reformat(self, display: str) -> Reformatted:
        """Re-mask text taken straight from the field."""
        return self._mask(self._read_display(display))

    def unformat(self, display: Value) -> str:
        """Canonical numeric string for a display string (or number).

        Returns ``""`` when no digit is left, in either mode.
        """
        if display is None:
            return ""
        if isinstance(display, str):
            parts = self._read_display(display)
        else:
            parts = scan_number(display)
        parts, _, _ = self._normalize(parts)
        if not parts.has_digits:
            return ""
        return to_string(parts)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _read(self, value: Value) -> NumberParts:
        if value is None:
            return EMPTY
        if not isinstance(value, str):
            return scan_number(value)
        text = value.strip()
        if CANONICAL_RE.fullmatch(text):
            return scan(text)
        return self._read_display(value)

    def _read_display(self, text: str) -> NumberParts:
        if self.options.null_value and text == self.options.null_value:
            return EMPTY
        parts = scan(self._strip_affixes(text), self.options.decimal)
        if self.options.reverse_fill:
            parts = self._shift_into_fraction(parts)
        return parts

    def _strip_affixes(self, text: str) -> str:
        prefix, suffix = self.options.prefix, self.options.suffix
        if prefix and prefix in text:
            text = text.replace(prefix, "", 1)
        if suffix and suffix in text:
            head, _, tail = text.rpartition(suffix)
            text = head + tail
        return text

    def _shift_into_fraction(self, parts: NumberParts) -> NumberParts:
        """Reverse fill: every digit typed counts from the last fractional place."""
        digits = parts.integer + (parts.fraction or "")
        if not digits:
            return NumberParts(negative=parts.negative)
        precision = self.options.precision
        digits = digits.rjust(precision + 1, "0")
        if precision == 0:
            return NumberParts(parts.negative, digits)
        return NumberParts(parts.negative, digits[:-precision], digits[-precision:])

    def _mask(self, parts: NumberParts) -> Reformatted:
        parts, padding, trimmed = self._normalize(parts)
        if not self._is_present(parts):
            if not self.options.prefill:
                return Reformatted(self.options.null_value)
            parts, padding, _ = self._normalize(NumberParts(integer="0"))
        return Reformatted(
            f"{self.options.prefix}{self._render(parts)}{self.options.suffix}",
            padding=padding,
            trimmed=trimmed,
        )

    def _normalize(self, parts: NumberParts) -> tuple[NumberParts, int, int]:
        opts = self.options
        padding = trimmed = 0
        if self.is_clean:
            parts = commit_parts(parts, opts.precision, opts.minimum_fraction_digits)
        else:
            parts, padding, trimmed = self._typing_parts(parts)
        if opts.reverse_fill and parts.has_digits and opts.precision:
            parts = NumberParts(parts.negative, parts.integer, (parts.fraction or "").ljust(opts.precision, "0"))
        return parts, padding, trimmed

    def _typing_parts(self, parts: NumberParts) -> tuple[NumberParts, int, int]:
        precision = self.options.precision
        fraction = parts.fraction
        trimmed = 0
        if fraction is not None and not precision:
            trimmed = len(fraction) + 1
            fraction = None
        elif fraction is not None and len(fraction) > precision:
            # typing into the zero padding overwrites it before real digits are cut
            kept = fraction
            while len(kept) > precision and kept.endswith("0"):
                kept = kept[:-1]
            kept = kept[:precision]
            trimmed = len(fraction) - len(kept)
            fraction = kept

        integer = parts.integer.lstrip("0")
        if not integer and (parts.integer or fraction is not None):
            integer = "0"

        padding = 0
        minimum = 0 if self.options.reverse_fill else self.options.minimum_fraction_digits
        shown = fraction or ""
        if integer and len(shown) < minimum:
            padding = minimum - len(shown) + (1 if fraction is None else 0)
            fraction = shown.ljust(minimum, "0")
        return NumberParts(parts.negative, integer, fraction), padding, trimmed

    def _is_present(self, parts: NumberParts) -> bool:
        if parts.has_digits:
            return True
        # typing mode keeps a lone "-" or "." so the user can continue from it
        return not self.is_clean and (parts.negative or parts.has_decimal)

    def _render(self, parts: NumberParts) -> str:
        sign = "-" if parts.negative else ""
        body = self._group(parts.integer)
        if parts.fraction is not None:
            body = f"{body}{self.options.decimal}{parts.fraction}"
        return f"{sign}{body}"

    def _group(self, digits: str) -> str:
        separator = self.options.separator
        if not separator or len(digits) <= 3:
            return digits
        head = len(digits) % 3 or 3
        groups = [digits[:head]] + [digits[i:i + 3] for i in range(head, len(digits), 3)]
        return separator.join(groups)

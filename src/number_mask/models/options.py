"""Masking options and per-field state.

``Options`` is immutable: reconfiguring a field means building a new instance
(or ``options.model_copy(update=...)``) and handing it to the engine. Keys may
be given in snake_case or in the camelCase used by the browser directive
(``minimumFractionDigits``, ``reverseFill``, ``nullValue``).
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class Options(BaseModel):
    """Formatting rules for one numeric input field."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    prefix: str = ""
    suffix: str = ""
    separator: str = ","
    decimal: str = "."
    precision: int = Field(default=2, ge=0)
    minimum_fraction_digits: int = Field(default=0, ge=0)
    prefill: bool = True
    reverse_fill: bool = False
    min: float | None = None
    max: float | None = None
    null_value: str = ""

    @field_validator("prefix", "suffix", "null_value")
    @classmethod
    def _no_digits_in_affix(cls, v: str) -> str:
        if any(ch.isdigit() for ch in v):
            raise ValueError(f"prefix, suffix and null_value must not contain digits: {v!r}")
        return v

    @field_validator("separator")
    @classmethod
    def _check_separator(cls, v: str) -> str:
        if len(v) > 1:
            raise ValueError(f"separator must be a single character or empty, got {v!r}")
        if v and (v.isdigit() or v == "-"):
            raise ValueError(f"separator cannot be a digit or '-': {v!r}")
        return v

    @field_validator("decimal")
    @classmethod
    def _check_decimal(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError(f"decimal must be exactly one character, got {v!r}")
        if v.isdigit() or v == "-":
            raise ValueError(f"decimal cannot be a digit or '-': {v!r}")
        return v

    @model_validator(mode="after")
    def _check_consistency(self) -> Options:
        if self.minimum_fraction_digits > self.precision:
            raise ValueError(
                f"minimum_fraction_digits ({self.minimum_fraction_digits}) "
                f"cannot exceed precision ({self.precision})"
            )
        if self.separator and self.separator == self.decimal:
            raise ValueError(f"separator and decimal must differ, both are {self.decimal!r}")
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min}) cannot be greater than max ({self.max})")
        return self

    @property
    def negatives_allowed(self) -> bool:
        """A leading ``-`` may be typed unless the lower bound is non-negative."""
        return self.min is None or self.min < 0


class FieldPhase(StrEnum):
    EMPTY = "empty"
    TYPING = "typing"
    COMMITTED = "committed"


class FieldState(BaseModel):
    """Mutable state of one bound input, owned by that input for its lifetime."""

    options: Options = Field(default_factory=Options)
    old_value: str = ""
    masked: str = ""
    unmasked_value: str = ""
    phase: FieldPhase = FieldPhase.EMPTY

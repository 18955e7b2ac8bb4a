"""Library defaults via environment variables with NUMBER_MASK_ prefix."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from number_mask.models.options import Options


class Settings(BaseSettings):
    """Process-wide defaults for masked numeric fields.

    Every field is read from an environment variable prefixed with
    ``NUMBER_MASK_`` (``NUMBER_MASK_PRECISION=3``). Fields bound without explicit
    options use :meth:`default_options`.
    """

    model_config = SettingsConfigDict(env_prefix="NUMBER_MASK_")

    # ── Logging ─────────────────────────────────────────────────────────────
    log_level: str = "INFO"

    # ── Display ─────────────────────────────────────────────────────────────
    prefix: str = ""
    suffix: str = ""
    separator: str = ","
    decimal: str = "."
    null_value: str = ""

    # ── Precision ───────────────────────────────────────────────────────────
    precision: int = Field(default=2, ge=0)
    minimum_fraction_digits: int = Field(default=0, ge=0)

    # ── Entry behaviour ─────────────────────────────────────────────────────
    prefill: bool = True
    reverse_fill: bool = False

    def default_options(self, **overrides: Any) -> Options:
        """Build validated ``Options`` from these defaults plus *overrides*."""
        values = self.model_dump(exclude={"log_level"})
        values.update(overrides)
        return Options(**values)


@lru_cache
def get_settings() -> Settings:
    return Settings()

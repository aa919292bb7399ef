"""Environment configuration for the numfmt command line.

Settings are read from prefixed environment variables:

    NUMFMT_LOCALE=de-DE
    NUMFMT_STYLE=currency
    NUMFMT_CURRENCY=EUR
    NUMFMT_DECIMALS=2
    NUMFMT_LOG_LEVEL=DEBUG

Usage:
    >>> from numfmt.config import load_settings
    >>> settings = load_settings()
    >>> settings.locale
    'en-US'

These settings only seed CLI defaults. ``format_number`` keeps its fixed
defaults regardless of the environment.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from numfmt.formatting import DEFAULT_CURRENCY, DEFAULT_LOCALE, NumberStyle

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(Exception):
    """Base configuration error."""

    pass


class ConfigValidationError(ConfigError):
    """Configuration validation error."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Configuration validation failed: {', '.join(errors)}")


# =============================================================================
# Environment Source
# =============================================================================


class EnvConfigSource:
    """Environment variable configuration source.

    Example:
        NUMFMT_LOCALE=de-DE
        NUMFMT_LOG_LEVEL=debug

        Will produce:
        {"locale": "de-DE", "log_level": "debug"}
    """

    def __init__(
        self,
        prefix: str = "NUMFMT",
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._prefix = f"{prefix}_"
        self._environ = os.environ if environ is None else environ

    def load(self) -> dict[str, Any]:
        """Load configuration from environment."""
        result: dict[str, Any] = {}
        for key, value in self._environ.items():
            if key.startswith(self._prefix):
                result[key[len(self._prefix) :].lower()] = self._parse_value(value)
        return result

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        # None
        if value.lower() in ("null", "none", ""):
            return None

        # Integer
        try:
            return int(value)
        except ValueError:
            pass

        return value


# =============================================================================
# Settings
# =============================================================================


@dataclass(frozen=True)
class FormatterSettings:
    """Default formatting options for the CLI.

    Attributes:
        locale: Locale tag.
        style: Number style.
        currency: ISO 4217 code.
        decimals: Fraction digits.
        log_level: Logging level name.
    """

    locale: str = DEFAULT_LOCALE
    style: str = NumberStyle.DECIMAL.value
    currency: str = DEFAULT_CURRENCY
    decimals: int = 0
    log_level: str = "WARNING"

    def validate(self) -> list[str]:
        """Validate settings.

        Returns:
            List of error messages (empty if valid).
        """
        errors = []
        if not isinstance(self.locale, str) or not self.locale:
            errors.append(f"locale must be a non-empty string, got {self.locale!r}")
        if self.style not in {s.value for s in NumberStyle}:
            errors.append(f"style must be one of {', '.join(s.value for s in NumberStyle)}")
        if not isinstance(self.currency, str) or len(self.currency) != 3 or not self.currency.isalpha():
            errors.append(f"currency must be a 3-letter code, got {self.currency!r}")
        if isinstance(self.decimals, bool) or not isinstance(self.decimals, int) or self.decimals < 0:
            errors.append(f"decimals must be a non-negative integer, got {self.decimals!r}")
        if str(self.log_level).upper() not in LOG_LEVELS:
            errors.append(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return errors


def load_settings(
    environ: Mapping[str, str] | None = None,
    prefix: str = "NUMFMT",
) -> FormatterSettings:
    """Load CLI settings from the environment.

    Args:
        environ: Mapping to read instead of ``os.environ``.
        prefix: Environment variable prefix.

    Returns:
        Validated FormatterSettings.

    Raises:
        ConfigValidationError: If any value is invalid.
    """
    values = EnvConfigSource(prefix, environ).load()
    known = {k: v for k, v in values.items() if k in FormatterSettings.__dataclass_fields__ and v is not None}
    unknown = sorted(set(values) - set(FormatterSettings.__dataclass_fields__))
    if unknown:
        logger.warning("Ignoring unknown %s settings: %s", prefix, ", ".join(unknown))

    settings = FormatterSettings(**known)
    errors = settings.validate()
    if errors:
        raise ConfigValidationError(errors)
    return settings

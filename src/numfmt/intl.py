"""Locale-aware number formatting primitive.

This module binds the CLDR data shipped with Babel to an options model
modelled on ``Intl.NumberFormat``:
- Styles: decimal, currency, percent, unit
- Currency display: symbol, narrowSymbol, code, name
- Grouping control (auto, always, min2, off)
- Independent minimum/maximum fraction digits
- Half-away-from-zero rounding

Usage:
    from numfmt.intl import LocaleNumberFormat, NumberFormatOptions

    fmt = LocaleNumberFormat(
        "de-DE",
        NumberFormatOptions(style="currency", currency="EUR"),
    )
    fmt.format(1234.5)  # "1.234,50 €"

Errors are not wrapped: unknown locales raise ``babel.UnknownLocaleError``,
unknown units raise ``babel.units.UnknownUnitError`` and invalid options
raise ``ValueError`` or ``TypeError``.
"""

from __future__ import annotations

import copy
import decimal
import logging
import math
import string
import sys
from dataclasses import asdict, dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Union

from babel import Locale
from babel.numbers import (
    NumberPattern,
    format_currency,
    get_currency_name,
    get_currency_precision,
    get_currency_symbol,
    get_currency_unit_pattern,
)
from babel.units import format_unit

logger = logging.getLogger(__name__)

Number = Union[int, float, Decimal]

STYLES = ("decimal", "currency", "percent", "unit")
CURRENCY_DISPLAYS = ("symbol", "narrowSymbol", "code", "name")
UNIT_DISPLAYS = ("short", "long", "narrow")
GROUPING_MODES = ("auto", "always", "min2")

MAX_FRACTION_DIGITS = 100

# Default (min, max) fraction digits for styles without a currency.
_DEFAULT_FRACTION_DIGITS = {
    "decimal": (0, 3),
    "percent": (0, 0),
    "unit": (0, 3),
}

_NO_GROUPING = (sys.maxsize, sys.maxsize)
_NBSP = "\u00a0"
# Stands in for the currency sign so Babel leaves symbol placement to us.
_CURRENCY_MARK = "\ue000"


# =============================================================================
# Options
# =============================================================================


@dataclass(frozen=True)
class NumberFormatOptions:
    """Options controlling how a number is rendered.

    Attributes:
        style: One of ``decimal``, ``currency``, ``percent`` or ``unit``.
        currency: ISO 4217 code. Required for the currency style.
        currency_display: ``symbol``, ``narrowSymbol``, ``code`` or ``name``.
        unit: CLDR unit identifier. Required for the unit style.
        unit_display: ``short``, ``long`` or ``narrow``.
        use_grouping: ``"auto"``, ``"always"``, ``"min2"``, ``True`` or ``False``.
        minimum_fraction_digits: Floor on fraction digits (None for style default).
        maximum_fraction_digits: Ceiling on fraction digits (None for style default).
    """

    style: str = "decimal"
    currency: str | None = None
    currency_display: str = "symbol"
    unit: str | None = None
    unit_display: str = "short"
    use_grouping: str | bool = "auto"
    minimum_fraction_digits: int | None = None
    maximum_fraction_digits: int | None = None


def parse_locale(tag: str) -> Locale:
    """Resolve a BCP 47 (``en-US``) or POSIX (``en_US``) tag to a Babel locale."""
    if not isinstance(tag, str):
        raise TypeError(f"Locale tag must be a string, got {type(tag).__name__}")
    return Locale.parse(tag.replace("-", "_"))


def _check_digits(name: str, value: int | None) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {value!r}")
    if not 0 <= value <= MAX_FRACTION_DIGITS:
        raise ValueError(f"{name} value is out of range: {value}")


def _narrow_symbol(symbol: str, currency: str) -> str:
    """Drop the country letters that disambiguate a symbol (``US$`` -> ``$``).

    Letters are only dropped when they abbreviate the currency code itself,
    so symbols such as ``R$`` (BRL) and ``CHF`` stay intact.
    """
    glyph = symbol.lstrip(string.ascii_letters)
    prefix = symbol[: len(symbol) - len(glyph)]
    if glyph and prefix and currency.startswith(prefix):
        return glyph
    return symbol


def _place_symbol(text: str, symbol: str) -> str:
    """Substitute the currency placeholder, spacing alphabetic symbols off digits."""
    before, marker, after = text.partition(_CURRENCY_MARK)
    if not marker:
        return text
    if symbol[-1:].isalpha() and after[:1].isdigit():
        symbol = symbol + _NBSP
    if symbol[:1].isalpha() and before[-1:].isdigit():
        symbol = _NBSP + symbol
    return f"{before}{symbol}{after}"


# =============================================================================
# Formatter
# =============================================================================


class LocaleNumberFormat:
    """Locale-aware number formatter.

    Options are validated once at construction; ``format`` can then be
    called any number of times.

    Example:
        fmt = LocaleNumberFormat("en-US", NumberFormatOptions(style="percent"))
        fmt.format(0.256)  # "26%"
    """

    def __init__(self, locale: str = "en-US", options: NumberFormatOptions | None = None) -> None:
        self._options = options or NumberFormatOptions()
        self._tag = locale
        self._locale = parse_locale(locale)

        style = self._options.style
        if style not in STYLES:
            raise ValueError(f"Invalid style: {style!r} (expected one of {', '.join(STYLES)})")
        self._style = style

        self._currency = self._resolve_currency(self._options.currency)
        self._unit = self._options.unit

        if self._options.currency_display not in CURRENCY_DISPLAYS:
            raise ValueError(f"Invalid currency display: {self._options.currency_display!r}")
        if self._options.unit_display not in UNIT_DISPLAYS:
            raise ValueError(f"Invalid unit display: {self._options.unit_display!r}")

        grouping = self._options.use_grouping
        if not isinstance(grouping, bool) and grouping not in GROUPING_MODES:
            raise ValueError(f"Invalid grouping mode: {grouping!r}")

        if style == "unit" and not self._unit:
            raise TypeError("The unit style requires a unit")

        self._min_fd, self._max_fd = self._resolve_fraction_digits()
        self._pattern = self._build_pattern()

        logger.debug("Resolved number format: %s", self.resolved_options())

    @property
    def locale(self) -> Locale:
        return self._locale

    @property
    def options(self) -> NumberFormatOptions:
        return self._options

    def _resolve_currency(self, currency: str | None) -> str | None:
        if currency is None:
            if self._style == "currency":
                raise TypeError("Currency code is required with currency style")
            return None
        if (
            not isinstance(currency, str)
            or len(currency) != 3
            or not all(c in string.ascii_letters for c in currency)
        ):
            raise ValueError(f"Invalid currency code: {currency!r}")
        return currency.upper()

    def _resolve_fraction_digits(self) -> tuple[int, int]:
        """Combine requested fraction digits with the style defaults."""
        min_fd = self._options.minimum_fraction_digits
        max_fd = self._options.maximum_fraction_digits
        _check_digits("minimum_fraction_digits", min_fd)
        _check_digits("maximum_fraction_digits", max_fd)

        if self._style == "currency":
            precision = get_currency_precision(self._currency)
            default_min, default_max = precision, precision
        else:
            default_min, default_max = _DEFAULT_FRACTION_DIGITS[self._style]

        if min_fd is None and max_fd is None:
            return default_min, default_max
        if max_fd is None:
            return min_fd, max(default_max, min_fd)
        if min_fd is None:
            return min(default_min, max_fd), max_fd
        if min_fd > max_fd:
            raise ValueError(
                f"minimum_fraction_digits ({min_fd}) exceeds "
                f"maximum_fraction_digits ({max_fd})"
            )
        return min_fd, max_fd

    def _build_pattern(self) -> NumberPattern:
        if self._style == "currency" and self._options.currency_display != "name":
            base = self._locale.currency_formats["standard"]
        elif self._style == "percent":
            base = self._locale.percent_formats[None]
        else:
            base = self._locale.decimal_formats[None]

        # Patterns are shared locale data, so adjust a private copy.
        pattern = copy.copy(base)
        pattern.frac_prec = (self._min_fd, self._max_fd)
        pattern.prefix = tuple(p.replace("¤", _CURRENCY_MARK) for p in base.prefix)
        pattern.suffix = tuple(s.replace("¤", _CURRENCY_MARK) for s in base.suffix)
        return pattern

    def _pattern_for(self, value: Decimal) -> NumberPattern:
        grouping = self._options.use_grouping
        if grouping is False or (grouping == "min2" and abs(value).scaleb(self._pattern.scale) < 10000):
            pattern = copy.copy(self._pattern)
            pattern.grouping = _NO_GROUPING
            return pattern
        return self._pattern

    def _currency_symbol(self) -> str:
        display = self._options.currency_display
        if display == "code":
            return self._currency
        symbol = get_currency_symbol(self._currency, self._locale)
        if display == "narrowSymbol":
            return _narrow_symbol(symbol, self._currency)
        return symbol

    def format(self, value: Number) -> str:
        """Format a number.

        Args:
            value: Number to format (int, float or Decimal).

        Returns:
            Formatted string.
        """
        number = to_decimal(value)

        if not number.is_finite():
            return self._format_non_finite(number)

        pattern = self._pattern_for(number)
        with decimal.localcontext() as ctx:
            ctx.rounding = ROUND_HALF_UP
            # Quantizing needs room for every integer digit plus the fraction.
            ctx.prec = max(ctx.prec, abs(number.adjusted()) + self._max_fd + 4)
            if self._style == "unit":
                return format_unit(
                    number,
                    self._unit,
                    length=self._options.unit_display,
                    format=pattern,
                    locale=self._locale,
                )
            if self._style == "currency" and self._options.currency_display == "name":
                return format_currency(
                    number,
                    self._currency,
                    format=pattern,
                    locale=self._locale,
                    currency_digits=False,
                    format_type="name",
                )
            # No currency is passed, so the marker survives for _place_symbol.
            text = pattern.apply(number, self._locale, currency=None, currency_digits=False)

        if self._style == "currency":
            text = _place_symbol(text, self._currency_symbol())
        return text

    def _format_non_finite(self, number: Decimal) -> str:
        symbols = self._locale.number_symbols
        # Babel >= 2.14 keys symbols by numbering system.
        symbols = symbols.get("latn", symbols)
        if number.is_nan():
            return symbols.get("nan", "NaN")

        negative = int(number.is_signed())
        text = (
            f"{self._pattern.prefix[negative]}"
            f"{symbols.get('infinity', '∞')}"
            f"{self._pattern.suffix[negative]}"
        )
        if "%" in text:
            text = text.replace("%", symbols.get("percentSign", "%"))
        if "-" in text:
            text = text.replace("-", symbols.get("minusSign", "-"))

        if self._style == "unit":
            # A string value is placed into the unit pattern as is.
            return format_unit(text, self._unit, length=self._options.unit_display, locale=self._locale)
        if self._style == "currency" and self._options.currency_display == "name":
            count = self._plural_other_sample()
            unit_pattern = get_currency_unit_pattern(self._currency, count=count, locale=self._locale)
            name = get_currency_name(self._currency, count=count, locale=self._locale)
            return unit_pattern.format(text, name)
        if self._style == "currency":
            text = _place_symbol(text, self._currency_symbol())
        return text

    def _plural_other_sample(self) -> int | float | None:
        """Pick a count in the locale's ``other`` plural category.

        Infinity has no plural operands, so it borrows the ``other`` forms.
        """
        for sample in (10, 100, 1.5, 0, 2):
            if self._locale.plural_form(sample) == "other":
                return sample
        return None

    def resolved_options(self) -> dict[str, Any]:
        """Return the effective options after defaulting."""
        resolved = asdict(self._options)
        resolved.update(
            locale=self._tag,
            babel_locale=str(self._locale),
            currency=self._currency,
            minimum_fraction_digits=self._min_fd,
            maximum_fraction_digits=self._max_fd,
        )
        return resolved


def to_decimal(value: Any) -> Decimal:
    """Convert a number to Decimal, keeping the shortest float representation."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (bool, int)):
        return Decimal(int(value))
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(str(value))


def is_nan(value: Any) -> bool:
    """Check whether a value is a floating or decimal NaN."""
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, Decimal):
        return value.is_nan()
    return False

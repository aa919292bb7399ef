"""Number formatting entry point.

``format_number`` renders a number as a localized decimal, currency,
percent or unit string. Locale conventions (grouping, separators, currency
symbols) come from :mod:`numfmt.intl`.

Usage:
    from numfmt import format_number

    format_number(1234.5, "decimal", 2)           # "1,234.50"
    format_number(99.999, "currency", 2, "USD")   # "$100.00"
    format_number(0.5, "percent")                 # "50%"
    format_number(1234.5, "decimal", 2, lang="de-DE")  # "1.234,50"

Defaults are coalesced on falsiness: ``None``, ``0``, ``""`` and NaN all
fall back to the default, so an explicit ``0`` is the same as omitting it.
"""

from __future__ import annotations

from enum import Enum

from numfmt.intl import LocaleNumberFormat, Number, NumberFormatOptions, is_nan

DEFAULT_LOCALE = "en-US"
DEFAULT_CURRENCY = "USD"


class NumberStyle(str, Enum):
    """Number formatting style."""

    DECIMAL = "decimal"
    CURRENCY = "currency"
    PERCENT = "percent"
    UNIT = "unit"


def format_number(
    number: Number | None,
    format: NumberStyle | str | None = None,
    decimals: int | None = None,
    currency: str | None = None,
    lang: str | None = DEFAULT_LOCALE,
) -> str:
    """Format a number for a locale.

    Args:
        number: Value to format. Falsy values and NaN format as 0.
        format: Style (decimal, currency, percent, unit). Defaults to decimal.
        decimals: Exact number of fraction digits. Defaults to 0.
        currency: ISO 4217 code used by the currency style. Defaults to USD.
        lang: Locale tag. Defaults to en-US.

    Returns:
        Formatted string.
    """
    if not number or is_nan(number):
        number = 0
    style = format or NumberStyle.DECIMAL
    digits = decimals or 0

    options = NumberFormatOptions(
        style=style.value if isinstance(style, NumberStyle) else style,
        currency=currency or DEFAULT_CURRENCY,
        currency_display="narrowSymbol",
        use_grouping="auto",
        minimum_fraction_digits=digits,
        maximum_fraction_digits=digits,
    )
    return LocaleNumberFormat(lang or DEFAULT_LOCALE, options).format(number)

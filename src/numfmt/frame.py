"""Column formatting for Polars data.

Example:
    import polars as pl
    from numfmt.frame import format_series

    revenue = pl.Series("revenue", [1234.5, None, 99.999])
    format_series(revenue, "currency", 2)
    # ["$1,234.50", "$0.00", "$100.00"]
"""

from __future__ import annotations

import polars as pl

from numfmt.formatting import DEFAULT_LOCALE, NumberStyle, format_number


def format_series(
    series: pl.Series,
    format: NumberStyle | str | None = None,
    decimals: int | None = None,
    currency: str | None = None,
    lang: str | None = DEFAULT_LOCALE,
) -> pl.Series:
    """Format every value of a numeric series.

    Nulls follow the same defaulting as ``format_number`` and render as 0.

    Args:
        series: Numeric series.
        format: Style (decimal, currency, percent, unit).
        decimals: Exact number of fraction digits.
        currency: ISO 4217 code for the currency style.
        lang: Locale tag.

    Returns:
        Utf8 series with the same name and length.
    """
    values = [
        format_number(value, format, decimals, currency, lang)
        for value in series.to_list()
    ]
    return pl.Series(series.name, values, dtype=pl.Utf8)

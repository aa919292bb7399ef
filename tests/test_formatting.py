"""Tests for numfmt.formatting.format_number."""

from __future__ import annotations

import threading
from decimal import Decimal

import pytest
from babel import UnknownLocaleError

from numfmt import NumberStyle, format_number


# =============================================================================
# Styles
# =============================================================================


class TestDecimalStyle:
    def test_fixed_decimals_with_grouping(self):
        assert format_number(1234.5, "decimal", 2) == "1,234.50"

    def test_zero_defaults(self):
        assert format_number(0) == "0"

    def test_default_drops_fraction(self):
        assert format_number(1234.567) == "1,235"

    def test_large_number_grouping(self):
        assert format_number(1234567.891, "decimal", 1) == "1,234,567.9"

    def test_negative(self):
        assert format_number(-1234.5, "decimal", 2) == "-1,234.50"

    def test_decimal_input(self):
        assert format_number(Decimal("1234.5"), "decimal", 2) == "1,234.50"

    def test_enum_style(self):
        assert format_number(1234.5, NumberStyle.DECIMAL, 2) == "1,234.50"


class TestCurrencyStyle:
    def test_rounds_to_fixed_decimals(self):
        assert format_number(99.999, "currency", 2, "USD") == "$100.00"

    def test_default_currency_is_usd(self):
        assert format_number(5, "currency", 2) == "$5.00"

    def test_narrow_symbol_outside_home_locale(self):
        # en-GB spells the dollar as "US$"; the narrow form is "$".
        assert format_number(5, "currency", 2, "USD", "en-GB") == "$5.00"

    def test_euro_in_german(self):
        result = format_number(1234.5, "currency", 2, "EUR", "de-DE")
        assert "1.234,50" in result
        assert result.endswith("€")

    def test_zero_decimals_without_fraction(self):
        assert format_number(1234.56, "currency", None, "USD") == "$1,235"

    def test_lowercase_code_accepted(self):
        assert format_number(5, "currency", 2, "usd") == "$5.00"


class TestPercentStyle:
    def test_half(self):
        assert format_number(0.5, "percent", 0) == "50%"

    def test_fraction_digits(self):
        assert format_number(0.1234, "percent", 1) == "12.3%"

    def test_enum_style(self):
        assert format_number(0.25, NumberStyle.PERCENT) == "25%"


class TestUnitStyle:
    def test_requires_unit(self):
        with pytest.raises(TypeError):
            format_number(5, "unit")


# =============================================================================
# Defaulting
# =============================================================================


class TestDefaults:
    def test_none_matches_explicit_defaults(self):
        assert format_number(None) == format_number(0, "decimal", 0, "USD", "en-US")

    def test_nan_treated_as_zero(self):
        assert format_number(float("nan")) == "0"

    def test_decimal_nan_treated_as_zero(self):
        assert format_number(Decimal("NaN"), "decimal", 2) == "0.00"

    def test_false_treated_as_zero(self):
        assert format_number(False) == "0"

    def test_empty_style_is_decimal(self):
        assert format_number(1234.5, "", 2) == "1,234.50"

    def test_explicit_zero_decimals_same_as_omitted(self):
        assert format_number(3.75, "decimal", 0) == format_number(3.75, "decimal") == "4"

    def test_empty_currency_is_usd(self):
        assert format_number(1, "currency", 2, "") == "$1.00"

    def test_none_lang_is_en_us(self):
        assert format_number(1234.5, "decimal", 2, lang=None) == "1,234.50"


# =============================================================================
# Locale sensitivity and determinism
# =============================================================================


class TestLocales:
    def test_separators_differ(self):
        us = format_number(1234.5, "decimal", 2, lang="en-US")
        de = format_number(1234.5, "decimal", 2, lang="de-DE")
        assert us == "1,234.50"
        assert de == "1.234,50"

    def test_posix_tag_accepted(self):
        assert format_number(1234.5, "decimal", 2, lang="de_DE") == "1.234,50"

    def test_deterministic(self):
        first = format_number(98765.4321, "currency", 3, "EUR", "fr-FR")
        second = format_number(98765.4321, "currency", 3, "EUR", "fr-FR")
        assert first == second

    def test_concurrent_calls(self):
        results: list[str] = []
        lock = threading.Lock()

        def worker():
            value = format_number(1234.5, "decimal", 2, lang="de-DE")
            with lock:
                results.append(value)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == ["1.234,50"] * 8


# =============================================================================
# Errors propagate unchanged
# =============================================================================


class TestErrors:
    def test_invalid_style(self):
        with pytest.raises(ValueError, match="Invalid style"):
            format_number(1, "scientific")

    def test_malformed_currency(self):
        with pytest.raises(ValueError, match="Invalid currency code"):
            format_number(1, "currency", 2, "US")

    def test_unknown_locale(self):
        with pytest.raises(UnknownLocaleError):
            format_number(1, lang="xx-XX")

    def test_negative_decimals(self):
        with pytest.raises(ValueError):
            format_number(1, "decimal", -1)

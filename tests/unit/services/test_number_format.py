"""Tests for locale number and date helpers."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from src.core.entities.locale import NumberLocale
from src.core.services.number_format import (
    format_filename_date,
    format_locale_number,
    format_report_date,
    format_short_date,
    parse_locale_number,
    parse_sheet_date,
)


class TestParseLocaleNumber:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("1.234,56", 1234.56),
            ("1.234.567,89", 1234567.89),
            (" 10,5 ", 10.5),
            ("-3,2", -3.2),
            ("150", 150.0),
            ("2.000", 2000.0),
        ],
    )
    def test_brazilian_text(self, raw, expected):
        assert parse_locale_number(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", "12,3,4x", True, False])
    def test_unreadable_is_zero(self, raw):
        assert parse_locale_number(raw) == 0.0

    @pytest.mark.parametrize("raw", ["nan", "inf", float("inf"), float("nan")])
    def test_non_finite_is_zero(self, raw):
        assert parse_locale_number(raw) == 0.0

    def test_numbers_pass_through(self):
        assert parse_locale_number(12) == 12.0
        assert parse_locale_number(7.25) == 7.25
        assert parse_locale_number(Decimal("3.5")) == 3.5

    def test_custom_locale(self):
        en = NumberLocale(decimal_separator=".", thousands_separator=",")
        assert parse_locale_number("1,234.56", en) == pytest.approx(1234.56)


class TestFormatLocaleNumber:
    def test_groups_thousands(self):
        assert format_locale_number(1234.5) == "1.234,50"
        assert format_locale_number(1234567.891, decimals=1) == "1.234.567,9"

    def test_no_decimals(self):
        assert format_locale_number(1234.6, decimals=0) == "1.235"

    def test_negative(self):
        assert format_locale_number(-1234.567) == "-1.234,57"

    def test_zero_sentinel(self):
        assert format_locale_number(0) == "0"
        assert format_locale_number(None) == "0"
        assert format_locale_number(0, zero="-") == "-"
        assert format_locale_number(float("nan"), zero="") == ""

    def test_tiny_negative_rounds_without_sign(self):
        assert format_locale_number(-0.001) == "0,00"

    def test_custom_locale(self):
        en = NumberLocale(decimal_separator=".", thousands_separator=",")
        assert format_locale_number(1234.5, locale=en) == "1,234.50"

    @pytest.mark.parametrize("text", ["1.234,50", "0,01", "98.765,40", "-42,42", "1.000.000,00"])
    def test_formatted_text_survives_parse(self, text):
        assert format_locale_number(parse_locale_number(text), 2) == text

    @pytest.mark.parametrize("value", [0.01, 12.3, 1234.56, 98765.4, -42.42])
    def test_parse_recovers_formatted_value(self, value):
        assert parse_locale_number(format_locale_number(value)) == pytest.approx(value)


class TestDates:
    @pytest.mark.parametrize(
        "raw",
        [
            "15/01/2026",
            "2026-01-15",
            "15-01-2026",
            "15/01/2026 08:30:00",
            "2026-01-15T08:30:00",
            datetime(2026, 1, 15, 8, 30),
            date(2026, 1, 15),
        ],
    )
    def test_parse_sheet_date(self, raw):
        assert parse_sheet_date(raw) == date(2026, 1, 15)

    @pytest.mark.parametrize("raw", [None, "", "31/02/2026", "ontem"])
    def test_unreadable_dates(self, raw):
        assert parse_sheet_date(raw) is None

    def test_formats(self):
        day = date(2026, 1, 5)
        assert format_short_date(day) == "05/01/2026"
        assert format_filename_date(day) == "05-01-2026"
        assert format_report_date(day) == "5 de jan. de 2026"

    def test_report_date_uses_locale_months(self):
        custom = NumberLocale(
            month_abbreviations=(
                "JAN", "FEV", "MAR", "ABR", "MAI", "JUN",
                "JUL", "AGO", "SET", "OUT", "NOV", "DEZ",
            )
        )
        assert format_report_date(date(2026, 12, 24), custom) == "24 de DEZ. de 2026"

"""
Locale-aware parsing and formatting of sheet numbers and dates.

Sheet cells arrive as Brazilian-formatted text ("1.234,56"), as plain numbers,
or empty. Parsing never raises: anything unreadable becomes 0 (numbers) or
None (dates) so a single bad cell cannot break a report.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from src.core.entities.locale import PT_BR, NumberLocale

_DATE_FORMATS = ("%d/%m/%Y", "%Y-%m-%d", "%d-%m-%Y")


def parse_locale_number(raw: Any, locale: NumberLocale = PT_BR) -> float:
    """
    Convert a sheet cell to a float.

    Numbers pass through. Text has every thousands separator removed and the
    first decimal separator turned into a point. Blank, missing, non-finite
    or unparseable input yields 0.0.
    """
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float, Decimal)):
        value = float(raw)
        return value if math.isfinite(value) else 0.0

    text = str(raw).strip()
    if not text:
        return 0.0
    text = text.replace(locale.thousands_separator, "")
    text = text.replace(locale.decimal_separator, ".", 1)
    try:
        value = float(text)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def format_locale_number(
    value: float | None,
    decimals: int = 2,
    zero: str = "0",
    locale: NumberLocale = PT_BR,
) -> str:
    """
    Format a number with grouped thousands and a fixed number of decimals.

    Exactly-zero (or missing) values return the ``zero`` sentinel; summary
    tables pass "0", detail tables pass "-" or "".
    """
    if value is None or not math.isfinite(value) or value == 0:
        return zero

    rounded = round(value, decimals)
    text = f"{abs(rounded):,.{decimals}f}"
    integer, _, fraction = text.partition(".")
    integer = integer.replace(",", locale.thousands_separator)
    result = f"{integer}{locale.decimal_separator}{fraction}" if decimals > 0 else integer
    return f"-{result}" if rounded < 0 else result


def parse_sheet_date(raw: Any) -> date | None:
    """Parse a sheet date cell (dd/MM/yyyy, ISO, or date objects); None if unreadable."""
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw

    text = str(raw).strip()
    if not text:
        return None
    # "15/01/2026 08:30:00" -> date part only
    head = text.split(" ")[0].split("T")[0]
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(head, fmt).date()
        except ValueError:
            continue
    return None


def format_short_date(day: date) -> str:
    """dd/MM/yyyy."""
    return day.strftime("%d/%m/%Y")


def format_filename_date(day: date) -> str:
    """dd-MM-yyyy, safe for file names."""
    return day.strftime("%d-%m-%Y")


def format_report_date(day: date, locale: NumberLocale = PT_BR) -> str:
    """Long header date, e.g. "15 de jan. de 2026"."""
    month = locale.month_abbreviations[day.month - 1]
    return f"{day.day} de {month}. de {day.year}"

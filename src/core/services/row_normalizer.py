"""Build typed fuel movement rows from raw sheet mappings."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from src.core.entities.fuel_movement import FuelMovementRow
from src.core.entities.locale import PT_BR, NumberLocale
from src.core.services.field_resolver import resolve_field, resolve_text
from src.core.services.number_format import parse_locale_number, parse_sheet_date

_TEXT_FIELDS = (
    "time",
    "vehicle",
    "description",
    "operator",
    "company",
    "category",
    "record_type",
    "location",
    "destination",
    "supplier",
    "invoice_number",
    "entry_location",
    "observations",
)

_NUMBER_FIELDS = (
    "arla_quantity",
    "horimeter_previous",
    "horimeter_current",
    "km_previous",
    "km_current",
    "unit_price",
)


def normalize_movement(
    raw: Mapping[str, Any], locale: NumberLocale = PT_BR
) -> FuelMovementRow:
    """
    Resolve every logical field of one transactional row.

    Text fields are stripped, numeric fields parsed leniently, and the
    quantity is clamped to zero so a mistyped sign cannot create stock.
    """
    values: dict[str, Any] = {name: resolve_text(raw, name) for name in _TEXT_FIELDS}
    for name in _NUMBER_FIELDS:
        values[name] = parse_locale_number(resolve_field(raw, name), locale)

    values["quantity"] = max(0.0, parse_locale_number(resolve_field(raw, "quantity"), locale))
    values["movement_date"] = parse_sheet_date(resolve_field(raw, "date"))
    return FuelMovementRow(raw=dict(raw), **values)


def normalize_movements(
    rows: Iterable[Mapping[str, Any]], locale: NumberLocale = PT_BR
) -> list[FuelMovementRow]:
    return [normalize_movement(row, locale) for row in rows]

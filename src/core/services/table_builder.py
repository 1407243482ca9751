"""
Report table building.

Turns normalized rows and summaries into display tables (already formatted
cell text) shared by the PDF renderer, and into spreadsheet projections
(typed cell values) for the workbook writer. Nothing here mutates its input.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from functools import reduce
from typing import Any, NamedTuple

from src.core.entities.fuel_movement import FuelMovementRow, LocationKind, ReadingKind
from src.core.entities.locale import PT_BR, NumberLocale
from src.core.entities.report import ReportTable, ReportTableRow
from src.core.entities.stock import LocationStockSummary
from src.core.entities.vehicle_usage import VehicleUsageSummary
from src.core.services.collation import collation_key
from src.core.services.number_format import format_locale_number, format_short_date
from src.core.services.stock_aggregator import rollup_summaries

MOVEMENT_HEADERS = [
    "Data", "Hora", "Veículo", "Descrição", "Motorista", "Diesel (L)", "Arla (L)", "Local",
]
MOVEMENT_WIDTHS = [22, 15, 22, 50, 40, 22, 18, 35]

DETAIL_HEADERS = [
    "Data", "Hora", "Veículo", "Descrição", "Motorista", "Anterior", "Atual",
    "Intervalo", "Qtd (L)", "Consumo", "Local",
]
DETAIL_WIDTHS = [20, 12, 20, 42, 32, 20, 20, 18, 18, 22, 30]

TANK_SUMMARY_HEADERS = [
    "Descrição", "Estoque Anterior", "Entrada", "Saída p/ Comboios",
    "Saída p/ Equipamentos", "Total", "Estoque Atual",
]
TANK_SUMMARY_WIDTHS = [50, 32, 28, 36, 40, 28, 32]

TRUCK_SUMMARY_HEADERS = ["Descrição", "Estoque Anterior", "Entrada", "Saída", "Estoque Atual"]
TRUCK_SUMMARY_WIDTHS = [60, 40, 35, 35, 40]

USAGE_HEADERS = [
    "#", "Veículo", "Descrição", "Empresa", "Operador", "Hor. Anterior", "Hor. Atual",
    "Intervalo (h)", "Km Anterior", "Km Atual", "Intervalo (km)",
]
USAGE_WIDTHS = [8, 20, 45, 30, 35, 20, 20, 18, 20, 20, 18]

# Spreadsheet projection of a movement row, in column order
XLSX_HEADERS = list(MOVEMENT_HEADERS)
XLSX_COLUMN_WIDTHS = [12, 8, 15, 30, 30, 12, 12, 25]

XLSX_DETAIL_HEADERS = [
    "Data", "Hora", "Veículo", "Descrição", "Motorista", "Empresa", "Anterior",
    "Atual", "Intervalo", "Quantidade (L)", "Consumo", "Unidade", "Local",
]
XLSX_DETAIL_WIDTHS = [12, 8, 15, 30, 25, 20, 12, 12, 12, 14, 12, 8, 25]

XLSX_USAGE_HEADERS = USAGE_HEADERS[1:] + ["Categoria"]
XLSX_USAGE_WIDTHS = [15, 30, 20, 25, 14, 14, 14, 14, 14, 14, 20]


# =========================================================================
# Sorting
# =========================================================================


def sort_records(
    records: Iterable[FuelMovementRow], by_description: bool
) -> list[FuelMovementRow]:
    """
    Sorted copy of the records.

    With ``by_description`` rows are ordered by description with Portuguese
    collation (accents and case ignored, stable); otherwise the original order
    is kept.
    """
    if not by_description:
        return list(records)
    return sorted(records, key=lambda r: collation_key(r.description))


# =========================================================================
# Per-row metrics
# =========================================================================


@dataclass
class RowMetrics:
    """Meter interval and consumption derived from one row."""

    kind: ReadingKind
    previous: float
    current: float
    interval: float | None = None
    consumption: float | None = None  # km/L for distance, L/h for hours

    @property
    def unit(self) -> str:
        return "km/L" if self.kind is ReadingKind.DISTANCE else "L/h"


def compute_row_metrics(row: FuelMovementRow) -> RowMetrics:
    """
    Interval and consumption for one fueling.

    The interval only exists when both readings are positive. Consumption is
    distance per liter for odometer readings and liters per hour for
    horimeter readings; it needs a positive interval and quantity.
    """
    kind, previous, current = row.reading_pair()
    metrics = RowMetrics(kind=kind, previous=previous, current=current)
    if previous > 0 and current > 0:
        metrics.interval = current - previous

    if metrics.interval and metrics.interval > 0 and row.quantity > 0:
        if kind is ReadingKind.DISTANCE:
            metrics.consumption = metrics.interval / row.quantity
        else:
            metrics.consumption = row.quantity / metrics.interval
    return metrics


def _date_cell(row: FuelMovementRow) -> str:
    if row.movement_date is not None:
        return format_short_date(row.movement_date)
    return str(row.raw.get("DATA") or row.raw.get("Data") or "")


# =========================================================================
# Fuel detail table (fold with explicit accumulator)
# =========================================================================


class _DetailAccumulator(NamedTuple):
    rows: tuple[ReportTableRow, ...] = ()
    quantity: float = 0.0
    ratio_sum: float = 0.0
    ratio_count: int = 0


def _detail_step(
    locale: NumberLocale,
) -> Callable[[_DetailAccumulator, FuelMovementRow], _DetailAccumulator]:
    def step(acc: _DetailAccumulator, row: FuelMovementRow) -> _DetailAccumulator:
        metrics = compute_row_metrics(row)
        consumption = "-"
        if metrics.consumption is not None:
            consumption = f"{format_locale_number(metrics.consumption, 2, locale=locale)} {metrics.unit}"

        cells = [
            _date_cell(row),
            row.time,
            row.vehicle,
            row.description,
            row.operator,
            format_locale_number(metrics.previous, 1, zero="-", locale=locale),
            format_locale_number(metrics.current, 1, zero="-", locale=locale),
            format_locale_number(metrics.interval, 1, zero="-", locale=locale),
            format_locale_number(row.quantity, 2, zero="-", locale=locale),
            consumption,
            row.location,
        ]
        has_ratio = metrics.consumption is not None
        return _DetailAccumulator(
            rows=acc.rows + (ReportTableRow(cells=cells),),
            quantity=acc.quantity + row.quantity,
            ratio_sum=acc.ratio_sum + (metrics.consumption or 0.0),
            ratio_count=acc.ratio_count + int(has_ratio),
        )

    return step


def build_fuel_detail_table(
    records: Sequence[FuelMovementRow], locale: NumberLocale = PT_BR
) -> ReportTable:
    """
    Detail rows with per-row interval and consumption plus a TOTAL row.

    The TOTAL row carries the quantity sum and "Média: X", the mean of the
    valid consumption ratios, or "-" when no row had one.
    """
    acc = reduce(_detail_step(locale), records, _DetailAccumulator())

    average = "-"
    if acc.ratio_count:
        average = f"Média: {format_locale_number(acc.ratio_sum / acc.ratio_count, 2, locale=locale)}"

    totals = ["TOTAL"] + [""] * 7 + [
        format_locale_number(acc.quantity, 2, zero="-", locale=locale),
        average,
        "",
    ]
    return ReportTable(
        headers=list(DETAIL_HEADERS),
        rows=list(acc.rows),
        totals=ReportTableRow(cells=totals, is_total=True),
        column_widths=list(DETAIL_WIDTHS),
        numeric_columns=[5, 6, 7, 8, 9],
    )


# =========================================================================
# Movement (exits) and entries tables
# =========================================================================


def build_movement_table(
    records: Sequence[FuelMovementRow], locale: NumberLocale = PT_BR
) -> ReportTable:
    """Movement rows (diesel and arla liters) with a TOTAL row."""
    rows = []
    diesel = 0.0
    arla = 0.0
    for record in records:
        diesel += record.quantity
        arla += record.arla_quantity
        rows.append(
            ReportTableRow(
                cells=[
                    _date_cell(record),
                    record.time,
                    record.vehicle,
                    record.description,
                    record.operator,
                    format_locale_number(record.quantity, 2, zero="-", locale=locale),
                    format_locale_number(record.arla_quantity, 2, zero="-", locale=locale),
                    record.location,
                ]
            )
        )

    totals = [
        "TOTAL", "", "", "", "",
        format_locale_number(diesel, 2, zero="-", locale=locale),
        format_locale_number(arla, 2, zero="-", locale=locale),
        "",
    ]
    return ReportTable(
        headers=list(MOVEMENT_HEADERS),
        rows=rows,
        totals=ReportTableRow(cells=totals, is_total=True),
        column_widths=list(MOVEMENT_WIDTHS),
        numeric_columns=[5, 6],
    )


def build_entries_table(
    records: Sequence[FuelMovementRow],
    location_kind: LocationKind,
    locale: NumberLocale = PT_BR,
) -> ReportTable:
    """
    Entries with index, date, counterpart and liters.

    The counterpart is the supplier for tanks and the entry location (the
    tank the fuel came from) for trucks.
    """
    truck = location_kind is LocationKind.TRUCK
    counterpart_header = "Local de Entrada" if truck else "Fornecedor"

    rows = []
    total = 0.0
    for index, record in enumerate(records, start=1):
        counterpart = record.entry_location if truck else record.supplier
        total += record.quantity
        rows.append(
            ReportTableRow(
                cells=[
                    str(index),
                    _date_cell(record),
                    counterpart or "-",
                    f"{format_locale_number(record.quantity, 2, locale=locale)} L",
                ]
            )
        )

    return ReportTable(
        headers=["#", "Data", counterpart_header, "Quantidade"],
        rows=rows,
        totals=ReportTableRow(
            cells=["", "TOTAL", "", f"{format_locale_number(total, 2, locale=locale)} L"],
            is_total=True,
        ),
        column_widths=[12, 30, 90, 35],
        numeric_columns=[3],
    )


# =========================================================================
# Stock summary table
# =========================================================================


def _summary_cells(
    summary: LocationStockSummary, truck: bool, locale: NumberLocale
) -> list[str]:
    def fmt(value: float) -> str:
        return format_locale_number(value, 2, zero="0", locale=locale)

    if truck:
        return [
            summary.location_name,
            fmt(summary.previous_stock),
            fmt(summary.entries_total),
            fmt(summary.exits_total),
            fmt(summary.current_stock),
        ]
    return [
        summary.location_name,
        fmt(summary.previous_stock),
        fmt(summary.entries_total),
        fmt(summary.exits_to_trucks),
        fmt(summary.exits_to_equipment),
        fmt(summary.net_total),
        fmt(summary.current_stock),
    ]


def build_stock_summary_table(
    summaries: Sequence[LocationStockSummary],
    location_kind: LocationKind,
    locale: NumberLocale = PT_BR,
    total_label: str = "Total geral",
) -> ReportTable:
    """Per-location stock rows followed by the grand-total rollup row."""
    truck = location_kind is LocationKind.TRUCK
    rollup = rollup_summaries(summaries, name=total_label)
    headers = TRUCK_SUMMARY_HEADERS if truck else TANK_SUMMARY_HEADERS
    widths = TRUCK_SUMMARY_WIDTHS if truck else TANK_SUMMARY_WIDTHS
    return ReportTable(
        headers=list(headers),
        rows=[ReportTableRow(cells=_summary_cells(s, truck, locale)) for s in summaries],
        totals=ReportTableRow(cells=_summary_cells(rollup, truck, locale), is_total=True),
        column_widths=list(widths),
        numeric_columns=list(range(1, len(headers))),
    )


# =========================================================================
# Usage table
# =========================================================================


def _usage_interval(previous: float, current: float) -> float | None:
    if previous > 0 and current > 0:
        return current - previous
    return None


def build_usage_table(
    summaries: Sequence[VehicleUsageSummary], locale: NumberLocale = PT_BR
) -> ReportTable:
    """
    Horimeter/odometer table, numbered from 1.

    Zero or missing readings are left blank; negative intervals are shown.
    """
    def fmt(value: float | None) -> str:
        return format_locale_number(value, 1, zero="", locale=locale)

    rows = []
    for index, s in enumerate(summaries, start=1):
        rows.append(
            ReportTableRow(
                cells=[
                    str(index),
                    s.vehicle_code,
                    s.description,
                    s.company,
                    s.operator,
                    fmt(s.previous_value),
                    fmt(s.current_value),
                    fmt(_usage_interval(s.previous_value, s.current_value)),
                    fmt(s.previous_km),
                    fmt(s.current_km),
                    fmt(_usage_interval(s.previous_km, s.current_km)),
                ]
            )
        )
    return ReportTable(
        headers=list(USAGE_HEADERS),
        rows=rows,
        column_widths=list(USAGE_WIDTHS),
        numeric_columns=[5, 6, 7, 8, 9, 10],
    )


# =========================================================================
# Spreadsheet projections
# =========================================================================


def _cell_date(row: FuelMovementRow) -> date | str:
    return row.movement_date if row.movement_date is not None else _date_cell(row)


def project_record(row: FuelMovementRow) -> dict[str, Any]:
    """Movement row keyed by its Portuguese column header."""
    return {
        "Data": _cell_date(row),
        "Hora": row.time,
        "Veículo": row.vehicle,
        "Descrição": row.description,
        "Motorista": row.operator,
        "Diesel (L)": row.quantity,
        "Arla (L)": row.arla_quantity,
        "Local": row.location,
    }


def project_detail_record(row: FuelMovementRow) -> dict[str, Any]:
    """Detail row with meter interval and consumption as numbers."""
    metrics = compute_row_metrics(row)
    return {
        "Data": _cell_date(row),
        "Hora": row.time,
        "Veículo": row.vehicle,
        "Descrição": row.description,
        "Motorista": row.operator,
        "Empresa": row.company,
        "Anterior": metrics.previous or None,
        "Atual": metrics.current or None,
        "Intervalo": metrics.interval,
        "Quantidade (L)": row.quantity,
        "Consumo": round(metrics.consumption, 2) if metrics.consumption is not None else None,
        "Unidade": metrics.unit if metrics.consumption is not None else "",
        "Local": row.location,
    }


def project_usage(summary: VehicleUsageSummary) -> dict[str, Any]:
    """Usage summary keyed by column header; blank instead of zero."""
    return {
        "Veículo": summary.vehicle_code,
        "Descrição": summary.description,
        "Empresa": summary.company,
        "Operador": summary.operator,
        "Hor. Anterior": summary.previous_value or None,
        "Hor. Atual": summary.current_value or None,
        "Intervalo (h)": _usage_interval(summary.previous_value, summary.current_value),
        "Km Anterior": summary.previous_km or None,
        "Km Atual": summary.current_km or None,
        "Intervalo (km)": _usage_interval(summary.previous_km, summary.current_km),
        "Categoria": summary.category,
    }

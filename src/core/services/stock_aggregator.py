"""
Stock reconciliation.

Per location:

    current_stock = max(0, previous_stock + entries - exits)

Tanks split exits into two channels (to fuel trucks, to equipment); trucks
only track a single exit total. The net total follows each model's own
convention (entries - exits for tanks, entries for trucks) but both reconcile
to the same current stock formula.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from typing import Any

from src.config import get_logger
from src.core.entities.fuel_movement import ExitDestination, FuelMovementRow, LocationKind
from src.core.entities.locale import PT_BR, NumberLocale
from src.core.entities.stock import DailyStockSnapshot, LocationStockSummary
from src.core.services.field_resolver import STOCK_FIELD_CANDIDATES, resolve_field
from src.core.services.number_format import (
    format_short_date,
    parse_locale_number,
    parse_sheet_date,
)
from src.core.services.record_classifier import (
    classify_destination,
    classify_location,
    is_entry,
    location_key,
)

logger = get_logger(__name__)

_SUMMED_FIELDS = (
    "previous_stock",
    "entries_total",
    "exits_to_trucks",
    "exits_to_equipment",
    "exits_total",
    "net_total",
    "current_stock",
)


def _infer_kind(rows: Iterable[FuelMovementRow]) -> LocationKind:
    for row in rows:
        kind = classify_location(row.location)
        if kind is not LocationKind.OTHER:
            return kind
    return LocationKind.TANK


def compute_stock_summary(
    previous_stock: float,
    rows: Sequence[FuelMovementRow],
    location_kind: LocationKind | None = None,
    location_name: str = "",
) -> LocationStockSummary:
    """
    Reconcile one location's movements against its opening stock.

    When ``location_kind`` is omitted it is taken from the first row with a
    recognizable location (tank if none has one).
    """
    kind = location_kind or _infer_kind(rows)

    entries = 0.0
    to_trucks = 0.0
    to_equipment = 0.0
    for row in rows:
        if is_entry(row):
            entries += row.quantity
        elif kind is LocationKind.TANK and classify_destination(row) is ExitDestination.TRUCK:
            to_trucks += row.quantity
        else:
            to_equipment += row.quantity

    exits = to_trucks + to_equipment
    if kind is LocationKind.TRUCK:
        to_trucks = to_equipment = 0.0
        net_total = entries
    else:
        net_total = entries - exits

    return LocationStockSummary(
        location_name=location_name,
        location_kind=kind,
        previous_stock=previous_stock,
        entries_total=entries,
        exits_to_trucks=to_trucks,
        exits_to_equipment=to_equipment,
        exits_total=exits,
        net_total=net_total,
        current_stock=max(0.0, previous_stock + entries - exits),
    )


def rollup_summaries(
    summaries: Sequence[LocationStockSummary], name: str = "Total geral"
) -> LocationStockSummary:
    """Field-wise sum of summaries; the current stock is summed, not recomputed."""
    kinds = {s.location_kind for s in summaries}
    totals: dict[str, Any] = {field: 0.0 for field in _SUMMED_FIELDS}
    for summary in summaries:
        for field in _SUMMED_FIELDS:
            totals[field] += getattr(summary, field)

    return LocationStockSummary(
        location_name=name,
        location_kind=kinds.pop() if len(kinds) == 1 else LocationKind.OTHER,
        **totals,
    )


def group_rows_by_location(
    rows: Iterable[FuelMovementRow], locations: Sequence[str]
) -> dict[str, list[FuelMovementRow]]:
    """
    Assign rows to configured locations by (kind, number) key.

    Every configured location appears in the result, possibly with no rows.
    Rows matching no configured location are dropped.
    """
    by_key = {location_key(name): name for name in locations}
    grouped: dict[str, list[FuelMovementRow]] = {name: [] for name in locations}
    for row in rows:
        key = location_key(row.location)
        if key is not None and key in by_key:
            grouped[by_key[key]].append(row)
    return grouped


def summarize_locations(
    rows: Iterable[FuelMovementRow],
    locations: Sequence[str],
    previous_stock: Mapping[str, float] | None = None,
) -> list[LocationStockSummary]:
    """One summary per configured location, in configured order."""
    baselines = previous_stock or {}
    grouped = group_rows_by_location(rows, locations)
    return [
        compute_stock_summary(
            baselines.get(name, 0.0),
            grouped[name],
            location_kind=classify_location(name),
            location_name=name,
        )
        for name in locations
    ]


# =========================================================================
# Daily stock series
# =========================================================================


def _read_snapshot(
    row: Mapping[str, Any],
    kind: LocationKind,
    location_name: str,
    locale: NumberLocale,
    matched_today: bool,
) -> DailyStockSnapshot:
    def number(field: str) -> float:
        return parse_locale_number(
            resolve_field(row, field, candidates=STOCK_FIELD_CANDIDATES), locale
        )

    previous = number("previous_stock")
    entries = number("entries")
    exits = number("exits")
    to_trucks = number("exits_to_trucks")
    to_equipment = number("exits_to_equipment")
    current = number("current_stock")

    if kind is LocationKind.TANK and not exits:
        exits = to_trucks + to_equipment
    if not current and (previous or entries or exits):
        current = max(0.0, previous + entries - exits)

    raw_date = resolve_field(row, "date", candidates=STOCK_FIELD_CANDIDATES)
    parsed = parse_sheet_date(raw_date)
    return DailyStockSnapshot(
        location_name=location_name,
        location_kind=kind,
        date=format_short_date(parsed) if parsed else str(raw_date or "").strip(),
        previous_stock=previous,
        entries=entries,
        exits=exits,
        exits_to_trucks=to_trucks,
        exits_to_equipment=to_equipment,
        current_stock=current,
        matched_today=matched_today,
    )


def _is_today(row: Mapping[str, Any], today: date, today_label: str) -> bool:
    raw = resolve_field(row, "date", candidates=STOCK_FIELD_CANDIDATES)
    if raw is None:
        return False
    if str(raw).strip() == today_label:
        return True
    return parse_sheet_date(raw) == today


def resolve_daily_stock(
    series: Sequence[Mapping[str, Any]],
    today: date,
    location_kind: LocationKind,
    location_name: str = "",
    locale: NumberLocale = PT_BR,
) -> DailyStockSnapshot:
    """
    Pick the row representing "today" in an append-only daily stock series.

    The last row dated today wins. Without one, the most recent non-empty
    row is used (current stock, entries and exits all zero means empty).
    An empty series yields a zero snapshot dated today.
    """
    today_label = format_short_date(today)

    for row in reversed(series):
        if _is_today(row, today, today_label):
            return _read_snapshot(row, location_kind, location_name, locale, True)

    for row in reversed(series):
        snapshot = _read_snapshot(row, location_kind, location_name, locale, False)
        if not snapshot.is_empty:
            logger.info(
                "daily_stock_fallback",
                location=location_name,
                today=today_label,
                used_date=snapshot.date,
            )
            return snapshot

    logger.warning("daily_stock_empty_series", location=location_name, rows=len(series))
    return DailyStockSnapshot(
        location_name=location_name,
        location_kind=location_kind,
        date=today_label,
    )


def snapshot_to_summary(snapshot: DailyStockSnapshot) -> LocationStockSummary:
    """Express a resolved daily row as a stock summary."""
    truck = snapshot.location_kind is LocationKind.TRUCK
    return LocationStockSummary(
        location_name=snapshot.location_name,
        location_kind=snapshot.location_kind,
        previous_stock=snapshot.previous_stock,
        entries_total=snapshot.entries,
        exits_to_trucks=0.0 if truck else snapshot.exits_to_trucks,
        exits_to_equipment=0.0 if truck else snapshot.exits_to_equipment,
        exits_total=snapshot.exits,
        net_total=snapshot.entries if truck else snapshot.entries - snapshot.exits,
        current_stock=snapshot.current_stock,
    )

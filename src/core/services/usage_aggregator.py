"""
Vehicle/equipment usage aggregation over horimeter and odometer readings.

For each vehicle the oldest reading in the window supplies the "previous"
values and the newest supplies the operator; the "current" values are the
largest seen in the window, so a late typo with a lower reading does not
shrink the interval. Intervals are reported as-is, negative included.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence

from src.config import get_logger
from src.core.entities.vehicle_usage import (
    DateRange,
    HorimeterReading,
    Vehicle,
    VehicleUsageSummary,
)
from src.core.services.collation import collation_key, fold_text

logger = get_logger(__name__)

EQUIPMENT_KEYWORDS = (
    "equipamento",
    "maquina",
    "trator",
    "escavadeira",
    "retroescavadeira",
    "pa carregadeira",
    "rolo",
    "motoniveladora",
    "compactador",
    "gerador",
)


def is_equipment(category: str | None) -> bool:
    """True for machine/equipment categories, False for road vehicles."""
    folded = fold_text(category)
    return any(keyword in folded for keyword in EQUIPMENT_KEYWORDS)


def _summarize(
    code: str, vehicle: Vehicle | None, readings: Sequence[HorimeterReading]
) -> VehicleUsageSummary:
    summary = VehicleUsageSummary(
        vehicle_code=code,
        description=vehicle.description if vehicle else "",
        company=vehicle.company if vehicle else "",
        category=vehicle.category if vehicle else "",
    )
    if not readings:
        return summary

    ordered = sorted(readings, key=lambda r: r.reading_date)
    oldest, newest = ordered[0], ordered[-1]

    previous_value = 0.0
    previous_km = 0.0
    if oldest.previous_value > 0:
        previous_value = oldest.previous_value
    if oldest.previous_km > 0:
        previous_km = oldest.previous_km

    summary.previous_value = previous_value
    summary.previous_km = previous_km
    summary.current_value = max(r.current_value for r in readings)
    summary.current_km = max(r.current_km for r in readings)
    summary.operator = newest.operator
    summary.reading_count = len(readings)
    return summary


def aggregate_usage(
    readings: Iterable[HorimeterReading],
    vehicles: Sequence[Vehicle],
    date_filter: DateRange | None = None,
) -> list[VehicleUsageSummary]:
    """
    One summary per roster vehicle, plus one per unknown vehicle with readings.

    Roster vehicles without readings in the window are still listed with
    zero values. The result is ordered by vehicle code.
    """
    grouped: dict[str, list[HorimeterReading]] = defaultdict(list)
    for reading in readings:
        if date_filter is not None and not date_filter.contains(reading.reading_date):
            continue
        grouped[reading.vehicle_code.strip()].append(reading)

    roster = {v.code.strip(): v for v in vehicles}
    codes = list(roster) + [code for code in grouped if code not in roster]
    unknown = len(codes) - len(roster)
    if unknown:
        logger.debug("usage_readings_without_roster_entry", count=unknown)

    summaries = [_summarize(code, roster.get(code), grouped.get(code, [])) for code in codes]
    return sorted(summaries, key=lambda s: collation_key(s.vehicle_code))


def filter_usage(
    summaries: Iterable[VehicleUsageSummary],
    company: str | None = None,
    category: str | None = None,
    search: str | None = None,
) -> list[VehicleUsageSummary]:
    """Narrow summaries by exact company/category and a free-text search."""
    needle = fold_text(search).strip()
    result = []
    for summary in summaries:
        if company and fold_text(summary.company) != fold_text(company):
            continue
        if category and fold_text(summary.category) != fold_text(category):
            continue
        if needle:
            haystack = fold_text(
                " ".join((summary.vehicle_code, summary.description, summary.operator))
            )
            if needle not in haystack:
                continue
        result.append(summary)
    return result

"""
Record classification.

Decides whether a movement row is an entry or an exit and which kind of
location (tank, fuel truck, other) it belongs to. Classification is a total
function: every row gets an answer and nothing here raises.
"""

from __future__ import annotations

import re

from src.core.entities.fuel_movement import (
    ExitDestination,
    FuelMovementRow,
    LocationKind,
    MovementClassification,
)

_LOCATION_NUMBER = re.compile(r"(\d+)\s*$")


def classify_location(text: str | None) -> LocationKind:
    """tank if the name mentions "tanque" or "canteiro", truck for "comboio"."""
    lowered = (text or "").lower()
    if "tanque" in lowered or "canteiro" in lowered:
        return LocationKind.TANK
    if "comboio" in lowered:
        return LocationKind.TRUCK
    return LocationKind.OTHER


def is_entry(row: FuelMovementRow) -> bool:
    """
    Entry when the type says "entrada", or a supplier or entry location is filled.

    A supplier on a row typed as an exit still makes it an entry.
    """
    if "entrada" in row.record_type.lower():
        return True
    return bool(row.supplier.strip() or row.entry_location.strip())


def classify_movement(row: FuelMovementRow) -> MovementClassification:
    return MovementClassification(
        is_entry=is_entry(row),
        location_kind=classify_location(row.location),
    )


def classify_destination(row: FuelMovementRow) -> ExitDestination:
    """Exits default to equipment unless the destination names a fuel truck."""
    if "comboio" in row.destination.lower():
        return ExitDestination.TRUCK
    return ExitDestination.EQUIPMENT


def location_key(text: str | None) -> tuple[LocationKind, int] | None:
    """
    Key used to match a row location against a configured location.

    "Tanque 01", "TANQUE CANTEIRO 1" and "Tanque Canteiro 01" share
    (TANK, 1). Names without a kind or a trailing number have no key.
    """
    kind = classify_location(text)
    if kind is LocationKind.OTHER:
        return None
    match = _LOCATION_NUMBER.search((text or "").strip())
    if match is None:
        return None
    return kind, int(match.group(1))

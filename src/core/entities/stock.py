"""Stock reconciliation entities."""

from pydantic import BaseModel

from src.core.entities.fuel_movement import LocationKind


class LocationStockSummary(BaseModel):
    """Reconciled stock figures for one location over the report window."""

    location_name: str = ""
    location_kind: LocationKind = LocationKind.TANK
    previous_stock: float = 0.0
    entries_total: float = 0.0
    exits_to_trucks: float = 0.0  # tanks only
    exits_to_equipment: float = 0.0  # tanks only
    exits_total: float = 0.0
    net_total: float = 0.0
    current_stock: float = 0.0


class DailyStockSnapshot(BaseModel):
    """Row of a per-location daily stock series chosen as "today"."""

    location_name: str = ""
    location_kind: LocationKind = LocationKind.TANK
    date: str = ""
    previous_stock: float = 0.0
    entries: float = 0.0
    exits: float = 0.0
    exits_to_trucks: float = 0.0
    exits_to_equipment: float = 0.0
    current_stock: float = 0.0
    matched_today: bool = False

    @property
    def is_empty(self) -> bool:
        return not (self.current_stock or self.entries or self.exits)

"""Fuel movement domain entities."""

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class LocationKind(str, Enum):
    """Kind of fuel-holding location a row refers to."""

    TANK = "tank"
    TRUCK = "truck"
    OTHER = "other"


class ExitDestination(str, Enum):
    """Where fuel leaving a tank went."""

    TRUCK = "truck"
    EQUIPMENT = "equipment"


class ReadingKind(str, Enum):
    """Unit of a meter reading pair."""

    DISTANCE = "km"
    HOURS = "h"


class FuelMovementRow(BaseModel):
    """One normalized fuel transaction from the transactional sheet."""

    movement_date: date | None = None
    time: str = ""
    vehicle: str = ""
    description: str = ""
    operator: str = ""
    company: str = ""
    category: str = ""
    record_type: str = ""
    location: str = ""
    destination: str = ""

    quantity: float = 0.0  # liters, never negative
    arla_quantity: float = 0.0

    horimeter_previous: float = 0.0
    horimeter_current: float = 0.0
    km_previous: float = 0.0
    km_current: float = 0.0

    supplier: str = ""
    invoice_number: str = ""
    unit_price: float = 0.0
    entry_location: str = ""
    observations: str = ""

    raw: dict[str, Any] = Field(default_factory=dict, repr=False)

    def reading_pair(self) -> tuple[ReadingKind, float, float]:
        """Authoritative meter pair: odometer when any km value is set, else horimeter."""
        if self.km_previous or self.km_current:
            return ReadingKind.DISTANCE, self.km_previous, self.km_current
        return ReadingKind.HOURS, self.horimeter_previous, self.horimeter_current


class MovementClassification(BaseModel):
    """Result of classifying a movement row."""

    is_entry: bool
    location_kind: LocationKind

"""Vehicle and equipment usage entities."""

from datetime import date

from pydantic import BaseModel, model_validator


class Vehicle(BaseModel):
    """Roster entry for a vehicle or piece of equipment."""

    code: str
    description: str = ""
    company: str = ""
    category: str = ""


class HorimeterReading(BaseModel):
    """One dated meter reading for a vehicle."""

    vehicle_code: str
    reading_date: date
    previous_value: float = 0.0
    current_value: float = 0.0
    previous_km: float = 0.0
    current_km: float = 0.0
    operator: str = ""


class DateRange(BaseModel):
    """Inclusive date window; an open bound matches everything on that side."""

    start: date | None = None
    end: date | None = None

    @model_validator(mode="after")
    def check_order(self) -> "DateRange":
        if self.start and self.end and self.start > self.end:
            raise ValueError("start must not be after end")
        return self

    def contains(self, day: date) -> bool:
        if self.start and day < self.start:
            return False
        if self.end and day > self.end:
            return False
        return True


class VehicleUsageSummary(BaseModel):
    """Usage for one vehicle over the filtered reading history."""

    vehicle_code: str
    description: str = ""
    company: str = ""
    category: str = ""
    operator: str = ""
    previous_value: float = 0.0
    current_value: float = 0.0
    previous_km: float = 0.0
    current_km: float = 0.0
    reading_count: int = 0

    @property
    def interval(self) -> float:
        """Hours interval, not clamped."""
        return self.current_value - self.previous_value

    @property
    def km_interval(self) -> float:
        """Distance interval, not clamped."""
        return self.current_km - self.previous_km

"""Unit tests for vehicle usage entities."""

from datetime import date

import pytest
from pydantic import ValidationError

from src.core.entities.vehicle_usage import DateRange, VehicleUsageSummary


class TestDateRange:
    def test_open_range_contains_everything(self):
        assert DateRange().contains(date(1999, 1, 1))

    def test_inclusive_bounds(self):
        window = DateRange(start=date(2026, 1, 1), end=date(2026, 1, 31))
        assert window.contains(date(2026, 1, 1))
        assert window.contains(date(2026, 1, 31))
        assert not window.contains(date(2025, 12, 31))
        assert not window.contains(date(2026, 2, 1))

    def test_start_after_end_rejected(self):
        with pytest.raises(ValidationError):
            DateRange(start=date(2026, 2, 1), end=date(2026, 1, 1))


class TestVehicleUsageSummary:
    def test_intervals(self):
        summary = VehicleUsageSummary(
            vehicle_code="EQ-01",
            previous_value=100,
            current_value=90,
            previous_km=1000,
            current_km=1250,
        )
        assert summary.interval == -10
        assert summary.km_interval == 250

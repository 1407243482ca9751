"""Tests for stock reconciliation per location."""

import pytest

from src.core.entities.fuel_movement import FuelMovementRow, LocationKind
from src.core.entities.stock import LocationStockSummary
from src.core.services.stock_aggregator import (
    compute_stock_summary,
    group_rows_by_location,
    rollup_summaries,
    summarize_locations,
)


def _entry(quantity: float, location: str = "Tanque Canteiro 01") -> FuelMovementRow:
    return FuelMovementRow(record_type="Entrada", quantity=quantity, location=location)


def _exit(
    quantity: float, location: str = "Tanque Canteiro 01", destination: str = ""
) -> FuelMovementRow:
    return FuelMovementRow(
        record_type="Saída", quantity=quantity, location=location, destination=destination
    )


class TestComputeStockSummary:
    def test_tank_reconciliation(self):
        rows = [_entry(500), _exit(200, destination="Comboio 01"), _exit(100)]
        summary = compute_stock_summary(1000, rows, LocationKind.TANK, "Tanque Canteiro 01")

        assert summary.location_name == "Tanque Canteiro 01"
        assert summary.entries_total == 500
        assert summary.exits_to_trucks == 200
        assert summary.exits_to_equipment == 100
        assert summary.exits_total == 300
        assert summary.net_total == 200
        assert summary.current_stock == 1200

    def test_truck_reconciliation(self):
        rows = [_entry(300, "Comboio 01"), _exit(50, "Comboio 01", destination="Comboio 02")]
        summary = compute_stock_summary(100, rows, LocationKind.TRUCK)

        assert summary.entries_total == 300
        assert summary.exits_total == 50
        assert summary.exits_to_trucks == 0
        assert summary.exits_to_equipment == 0
        assert summary.net_total == 300
        assert summary.current_stock == 350

    def test_current_stock_never_negative(self):
        summary = compute_stock_summary(10, [_exit(100)], LocationKind.TANK)
        assert summary.current_stock == 0
        assert summary.net_total == -100

    def test_no_rows(self):
        summary = compute_stock_summary(750, [], LocationKind.TANK)
        assert summary.current_stock == 750
        assert summary.exits_total == 0

    def test_kind_inferred_from_rows(self):
        summary = compute_stock_summary(0, [_entry(10, "Comboio 02")])
        assert summary.location_kind is LocationKind.TRUCK

    def test_kind_defaults_to_tank(self):
        assert compute_stock_summary(0, []).location_kind is LocationKind.TANK

    def test_input_rows_not_mutated(self):
        rows = [_entry(500), _exit(200)]
        before = [r.model_dump() for r in rows]
        compute_stock_summary(0, rows, LocationKind.TANK)
        assert [r.model_dump() for r in rows] == before


class TestRollup:
    def test_sums_every_field(self):
        a = compute_stock_summary(1000, [_entry(500), _exit(200, destination="Comboio 1")],
                                  LocationKind.TANK)
        b = compute_stock_summary(300, [_exit(100)], LocationKind.TANK)
        total = rollup_summaries([a, b])

        assert total.location_name == "Total geral"
        assert total.location_kind is LocationKind.TANK
        assert total.previous_stock == 1300
        assert total.entries_total == 500
        assert total.exits_to_trucks == 200
        assert total.exits_to_equipment == 100
        assert total.exits_total == 300
        assert total.net_total == 200
        assert total.current_stock == 1500

    def test_mixed_kinds(self):
        total = rollup_summaries(
            [
                LocationStockSummary(location_kind=LocationKind.TANK, current_stock=10),
                LocationStockSummary(location_kind=LocationKind.TRUCK, current_stock=5),
            ],
            name="Geral",
        )
        assert total.location_kind is LocationKind.OTHER
        assert total.location_name == "Geral"
        assert total.current_stock == 15

    def test_empty(self):
        total = rollup_summaries([])
        assert total.current_stock == 0
        assert total.previous_stock == 0


class TestGrouping:
    LOCATIONS = ["Tanque Canteiro 01", "Tanque Canteiro 02"]

    def test_rows_attributed_by_key(self):
        rows = [
            _exit(1, "Tanque 01"),
            _exit(2, "TANQUE CANTEIRO 02"),
            _exit(3, "Oficina"),
            _exit(4, "Comboio 01"),
        ]
        grouped = group_rows_by_location(rows, self.LOCATIONS)

        assert list(grouped) == self.LOCATIONS
        assert [r.quantity for r in grouped["Tanque Canteiro 01"]] == [1]
        assert [r.quantity for r in grouped["Tanque Canteiro 02"]] == [2]

    def test_every_location_present(self):
        grouped = group_rows_by_location([], self.LOCATIONS)
        assert grouped == {"Tanque Canteiro 01": [], "Tanque Canteiro 02": []}

    def test_summarize_locations(self):
        rows = [_entry(500, "Tanque 01"), _exit(100, "Tanque 02")]
        summaries = summarize_locations(
            rows, self.LOCATIONS, {"Tanque Canteiro 01": 1000, "Tanque Canteiro 02": 50}
        )

        assert [s.location_name for s in summaries] == self.LOCATIONS
        assert summaries[0].current_stock == 1500
        assert summaries[1].current_stock == 0
        assert all(s.location_kind is LocationKind.TANK for s in summaries)

    def test_missing_baseline_is_zero(self):
        summaries = summarize_locations([_entry(5, "Tanque 01")], self.LOCATIONS)
        assert summaries[0].previous_stock == 0
        assert summaries[0].current_stock == pytest.approx(5)

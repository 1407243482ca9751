"""Tests for resolving today's row of a daily stock series."""

from datetime import date

from src.core.entities.fuel_movement import LocationKind
from src.core.entities.stock import DailyStockSnapshot
from src.core.services.stock_aggregator import resolve_daily_stock, snapshot_to_summary

TODAY = date(2026, 1, 15)


def _series() -> list[dict]:
    return [
        {
            "Data": "14/01/2026",
            "EstoqueAnterior": "1.000,00",
            "Entrada": "0",
            "Saida": "200",
            "EstoqueAtual": "800",
        },
        {
            "Data": "15/01/2026",
            "EstoqueAnterior": "800",
            "Entrada": "500",
            "Saida": "",
            "Saida_para_Comboios": "100",
            "Saida_para_Equipamentos": "50",
            "EstoqueAtual": "",
        },
    ]


class TestResolveDailyStock:
    def test_row_dated_today(self):
        snapshot = resolve_daily_stock(_series(), TODAY, LocationKind.TANK, "Tanque Canteiro 01")

        assert snapshot.matched_today is True
        assert snapshot.date == "15/01/2026"
        assert snapshot.location_name == "Tanque Canteiro 01"
        assert snapshot.previous_stock == 800
        assert snapshot.entries == 500
        # Tank exits derived from the two channels
        assert snapshot.exits == 150
        # Current stock derived from the movement
        assert snapshot.current_stock == 1150

    def test_last_row_for_today_wins(self):
        series = _series() + [{"Data": "15/01/2026", "EstoqueAtual": "999"}]
        snapshot = resolve_daily_stock(series, TODAY, LocationKind.TANK)
        assert snapshot.current_stock == 999

    def test_iso_date_matches(self):
        series = [{"Data": "2026-01-15", "EstoqueAtual": "42"}]
        snapshot = resolve_daily_stock(series, TODAY, LocationKind.TANK)
        assert snapshot.matched_today is True
        assert snapshot.date == "15/01/2026"

    def test_falls_back_to_latest_non_empty_row(self):
        series = _series() + [{"Data": "17/01/2026", "EstoqueAtual": "", "Entrada": ""}]
        snapshot = resolve_daily_stock(series, date(2026, 1, 18), LocationKind.TANK)

        assert snapshot.matched_today is False
        assert snapshot.date == "15/01/2026"
        assert snapshot.current_stock == 1150

    def test_empty_series(self):
        snapshot = resolve_daily_stock([], TODAY, LocationKind.TRUCK, "Comboio 01")

        assert snapshot == DailyStockSnapshot(
            location_name="Comboio 01",
            location_kind=LocationKind.TRUCK,
            date="15/01/2026",
        )
        assert snapshot.is_empty

    def test_truck_exits_not_derived_from_channels(self):
        series = [
            {
                "Data": "15/01/2026",
                "EstoqueAnterior": "100",
                "Entrada": "0",
                "Saida": "",
                "Saida_para_Comboios": "30",
            }
        ]
        snapshot = resolve_daily_stock(series, TODAY, LocationKind.TRUCK)
        assert snapshot.exits == 0
        assert snapshot.current_stock == 100

    def test_recorded_current_stock_is_kept(self):
        series = [{"Data": "15/01/2026", "EstoqueAnterior": "100", "Saida": "40",
                   "EstoqueAtual": "70"}]
        snapshot = resolve_daily_stock(series, TODAY, LocationKind.TANK)
        assert snapshot.current_stock == 70


class TestSnapshotToSummary:
    def test_tank(self):
        snapshot = resolve_daily_stock(_series(), TODAY, LocationKind.TANK, "Tanque Canteiro 01")
        summary = snapshot_to_summary(snapshot)

        assert summary.location_name == "Tanque Canteiro 01"
        assert summary.exits_to_trucks == 100
        assert summary.exits_to_equipment == 50
        assert summary.exits_total == 150
        assert summary.net_total == 350
        assert summary.current_stock == 1150

    def test_truck(self):
        snapshot = DailyStockSnapshot(
            location_name="Comboio 01",
            location_kind=LocationKind.TRUCK,
            previous_stock=100,
            entries=300,
            exits=50,
            exits_to_trucks=10,
            current_stock=350,
        )
        summary = snapshot_to_summary(snapshot)

        assert summary.net_total == 300
        assert summary.exits_total == 50
        assert summary.exits_to_trucks == 0

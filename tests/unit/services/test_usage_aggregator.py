"""Tests for horimeter/odometer usage aggregation."""

from datetime import date

import pytest

from src.core.entities.vehicle_usage import DateRange, HorimeterReading, Vehicle
from src.core.services.collation import collation_key, fold_text
from src.core.services.usage_aggregator import aggregate_usage, filter_usage, is_equipment


@pytest.fixture
def vehicles() -> list[Vehicle]:
    return [
        Vehicle(
            code="VE-02",
            description="Caminhonete Hilux",
            company="Beta Ltda",
            category="Caminhonete",
        ),
        Vehicle(
            code="EQ-01",
            description="Escavadeira CAT 320",
            company="Construtora Ávila",
            category="Escavadeira",
        ),
    ]


@pytest.fixture
def readings() -> list[HorimeterReading]:
    return [
        HorimeterReading(
            vehicle_code="EQ-01", reading_date=date(2026, 1, 10),
            previous_value=100, current_value=110, operator="Ana",
        ),
        HorimeterReading(
            vehicle_code="EQ-01", reading_date=date(2026, 1, 12),
            previous_value=110, current_value=125, operator="Bruno",
        ),
        HorimeterReading(
            vehicle_code="EQ-01", reading_date=date(2026, 1, 11),
            previous_value=105, current_value=130, operator="Carlos",
        ),
        HorimeterReading(
            vehicle_code="ZZ-9", reading_date=date(2026, 1, 11),
            previous_km=5000, current_km=5200, operator="Dora",
        ),
    ]


class TestCollation:
    def test_fold_text(self):
        assert fold_text("Máquina ÁGUA") == "maquina agua"
        assert fold_text(None) == ""

    def test_accents_sort_with_plain_letters(self):
        names = ["Óleo", "abc", "Zeta", "oleo"]
        assert sorted(names, key=collation_key) == ["abc", "oleo", "Óleo", "Zeta"]


class TestIsEquipment:
    @pytest.mark.parametrize(
        "category",
        ["Escavadeira", "Máquina Pesada", "TRATOR", "Rolo", "Pá Carregadeira", "Retroescavadeira"],
    )
    def test_equipment(self, category):
        assert is_equipment(category)

    @pytest.mark.parametrize(
        "category", ["Caminhonete", "Caminhão", "Caminhão Munck", "Carregadeira de Toras", "", None]
    )
    def test_vehicles(self, category):
        assert not is_equipment(category)


class TestAggregateUsage:
    def test_oldest_previous_max_current_newest_operator(self, readings, vehicles):
        summaries = {s.vehicle_code: s for s in aggregate_usage(readings, vehicles)}
        eq = summaries["EQ-01"]

        assert eq.previous_value == 100
        assert eq.current_value == 130
        assert eq.interval == 30
        assert eq.operator == "Bruno"
        assert eq.reading_count == 3
        assert eq.description == "Escavadeira CAT 320"

    def test_roster_vehicle_without_readings_listed(self, readings, vehicles):
        summaries = {s.vehicle_code: s for s in aggregate_usage(readings, vehicles)}
        ve = summaries["VE-02"]

        assert ve.reading_count == 0
        assert ve.current_value == 0
        assert ve.company == "Beta Ltda"

    def test_unknown_vehicle_included(self, readings, vehicles):
        summaries = {s.vehicle_code: s for s in aggregate_usage(readings, vehicles)}
        zz = summaries["ZZ-9"]

        assert zz.description == ""
        assert zz.previous_km == 5000
        assert zz.km_interval == 200

    def test_sorted_by_code(self, readings, vehicles):
        codes = [s.vehicle_code for s in aggregate_usage(readings, vehicles)]
        assert codes == ["EQ-01", "VE-02", "ZZ-9"]

    def test_date_filter(self, readings, vehicles):
        window = DateRange(start=date(2026, 1, 11))
        summaries = {
            s.vehicle_code: s for s in aggregate_usage(readings, vehicles, window)
        }

        assert summaries["EQ-01"].previous_value == 105
        assert summaries["EQ-01"].current_value == 130
        assert summaries["EQ-01"].operator == "Bruno"
        assert summaries["EQ-01"].reading_count == 2

    def test_non_positive_previous_ignored(self, vehicles):
        readings = [
            HorimeterReading(
                vehicle_code="EQ-01", reading_date=date(2026, 1, 10),
                previous_value=0, current_value=50,
            )
        ]
        eq = aggregate_usage(readings, vehicles)[0]
        assert eq.previous_value == 0
        assert eq.current_value == 50

    def test_negative_interval_not_clamped(self, vehicles):
        readings = [
            HorimeterReading(
                vehicle_code="EQ-01", reading_date=date(2026, 1, 10),
                previous_value=200, current_value=150,
            )
        ]
        assert aggregate_usage(readings, vehicles)[0].interval == -50


class TestFilterUsage:
    def test_company_ignores_case_and_accents(self, readings, vehicles):
        result = filter_usage(aggregate_usage(readings, vehicles), company="construtora avila")
        assert [s.vehicle_code for s in result] == ["EQ-01"]

    def test_category(self, readings, vehicles):
        result = filter_usage(aggregate_usage(readings, vehicles), category="caminhonete")
        assert [s.vehicle_code for s in result] == ["VE-02"]

    def test_search_matches_description_and_operator(self, readings, vehicles):
        summaries = aggregate_usage(readings, vehicles)
        assert [s.vehicle_code for s in filter_usage(summaries, search="escav")] == ["EQ-01"]
        assert [s.vehicle_code for s in filter_usage(summaries, search="DORA")] == ["ZZ-9"]

    def test_no_filters(self, readings, vehicles):
        summaries = aggregate_usage(readings, vehicles)
        assert filter_usage(summaries) == summaries

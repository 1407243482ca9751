"""Tests for ExportHorimeterReportUseCase."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from src.application.dto.requests import ExportHorimeterReportRequest
from src.application.use_cases.export_horimeter_report import (
    ExportHorimeterReportUseCase,
    usage_font_size,
)
from src.core.entities.report import ExportFormat, SectionTheme
from src.core.entities.vehicle_usage import DateRange, HorimeterReading, Vehicle
from src.core.interfaces import IPdfReportRenderer, ISpreadsheetWriter


@pytest.fixture
def pdf_renderer():
    renderer = MagicMock(spec=IPdfReportRenderer)
    renderer.render.return_value = b"%PDF-fake"
    return renderer


@pytest.fixture
def spreadsheet_writer():
    writer = MagicMock(spec=ISpreadsheetWriter)
    writer.write.return_value = b"PK-fake"
    return writer


@pytest.fixture
def use_case(pdf_renderer, spreadsheet_writer, report_settings, locale):
    return ExportHorimeterReportUseCase(
        pdf_renderer=pdf_renderer,
        spreadsheet_writer=spreadsheet_writer,
        report_settings=report_settings,
        locale=locale,
    )


@pytest.fixture
def fleet() -> dict:
    return {
        "vehicles": [
            Vehicle(code="EQ-01", description="Escavadeira CAT 320",
                    company="Construtora Ávila", category="Escavadeira"),
            Vehicle(code="VE-02", description="Caminhonete Hilux",
                    company="Construtora Ávila", category="Caminhonete"),
            Vehicle(code="RL-03", description="Rolo Compactador",
                    company="Beta Ltda", category="Rolo"),
        ],
        "readings": [
            HorimeterReading(vehicle_code="EQ-01", reading_date=date(2026, 1, 10),
                             previous_value=100, current_value=112, operator="Ana"),
            HorimeterReading(vehicle_code="VE-02", reading_date=date(2026, 1, 11),
                             previous_km=5000, current_km=5300, operator="Bruno"),
            HorimeterReading(vehicle_code="RL-03", reading_date=date(2026, 2, 20),
                             previous_value=10, current_value=20),
        ],
    }


def _request(fleet, **overrides) -> ExportHorimeterReportRequest:
    values = {**fleet, "reference_date": date(2026, 1, 15)}
    values.update(overrides)
    return ExportHorimeterReportRequest(**values)


def test_usage_font_size():
    assert usage_font_size(10) == 8
    assert usage_font_size(25) == 8
    assert usage_font_size(26) == 7
    assert usage_font_size(41) == 6


class TestExportHorimeterReportUseCase:
    def test_one_page_per_company(self, use_case, pdf_renderer, fleet):
        result = use_case.execute(_request(fleet))

        assert result.filename == "Relatorio_Horimetros_15-01-2026.pdf"
        document = pdf_renderer.render.call_args.args[0]
        assert [p.subtitle for p in document.pages] == ["Beta Ltda", "Construtora Ávila"]
        assert all(p.title == "RELATÓRIO DE HORÍMETROS" for p in document.pages)

    def test_equipment_and_vehicle_sections(self, use_case, pdf_renderer, fleet):
        use_case.execute(_request(fleet))
        page = pdf_renderer.render.call_args.args[0].pages[1]

        equipment, vehicles = page.sections
        assert equipment.heading == "EQUIPAMENTOS (1)"
        assert equipment.theme is SectionTheme.TANKS
        assert equipment.table.rows[0].cells[1] == "EQ-01"
        assert equipment.table.rows[0].cells[7] == "12,0"
        assert vehicles.heading == "VEÍCULOS (1)"
        assert vehicles.table.rows[0].cells[10] == "300,0"

    def test_period_filter(self, use_case, pdf_renderer, fleet):
        window = DateRange(start=date(2026, 1, 1), end=date(2026, 1, 31))
        summaries = use_case.summarize(_request(fleet, period=window))
        rl = next(s for s in summaries if s.vehicle_code == "RL-03")
        assert rl.reading_count == 0

        use_case.execute(_request(fleet, period=window))
        page = pdf_renderer.render.call_args.args[0].pages[0]
        assert page.date_label == "01/01/2026 a 31/01/2026"

    def test_company_filter(self, use_case, pdf_renderer, fleet):
        use_case.execute(_request(fleet, company="  beta ltda "))
        document = pdf_renderer.render.call_args.args[0]
        assert [p.subtitle for p in document.pages] == ["Beta Ltda"]

    def test_company_without_vehicles_still_renders(self, use_case, pdf_renderer, fleet):
        use_case.execute(_request(fleet, company="Gama SA"))
        (page,) = pdf_renderer.render.call_args.args[0].pages
        assert page.subtitle == "Gama SA"
        assert all(section.is_empty for section in page.sections)
        assert page.sections[0].empty_message == "Nenhum equipamento encontrado."

    def test_no_vehicles_at_all(self, use_case, pdf_renderer):
        use_case.execute(ExportHorimeterReportRequest(reference_date=date(2026, 1, 15)))
        (page,) = pdf_renderer.render.call_args.args[0].pages
        assert page.subtitle == "Todas as empresas"

    def test_search_filter(self, use_case, fleet):
        summaries = use_case.summarize(_request(fleet, search="hilux"))
        assert [s.vehicle_code for s in summaries] == ["VE-02"]

    def test_xlsx_sheets(self, use_case, spreadsheet_writer, fleet):
        result = use_case.execute(_request(fleet, format=ExportFormat.XLSX))

        assert result.filename == "Relatorio_Horimetros_15-01-2026.xlsx"
        sheets = spreadsheet_writer.write.call_args.args[0]
        assert [s.name for s in sheets] == ["Equipamentos", "Veículos"]
        assert [row[0] for row in sheets[0].rows] == ["EQ-01", "RL-03"]
        assert sheets[1].rows[0][0] == "VE-02"

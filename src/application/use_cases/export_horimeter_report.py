"""
Export Horimeter Report Use Case.

Aggregates meter readings per vehicle and renders one page per company,
split into equipment and road vehicles.
"""

from collections import defaultdict

from src.application.dto.requests import ExportHorimeterReportRequest
from src.application.use_cases.export_common import (
    MEDIA_TYPES,
    ExportResult,
    build_filename,
    period_label,
)
from src.config import get_logger, get_settings, report_log_context
from src.config.settings import ReportSettings
from src.core.entities.locale import NumberLocale
from src.core.entities.report import (
    ExportFormat,
    ReportDocument,
    ReportPage,
    ReportSection,
    SectionTheme,
    SheetSpec,
)
from src.core.entities.vehicle_usage import VehicleUsageSummary
from src.core.interfaces import IPdfReportRenderer, ISpreadsheetWriter
from src.core.services.collation import collation_key
from src.core.services.number_format import format_report_date
from src.core.services.table_builder import (
    XLSX_USAGE_HEADERS,
    XLSX_USAGE_WIDTHS,
    build_usage_table,
    project_usage,
)
from src.core.services.usage_aggregator import aggregate_usage, filter_usage, is_equipment

logger = get_logger(__name__)

REPORT_TITLE = "RELATÓRIO DE HORÍMETROS"
FILENAME_LABEL = "Relatorio_Horimetros"
NO_COMPANY = "Sem empresa"


def usage_font_size(row_count: int) -> float:
    """Shrink the table font for long sections."""
    if row_count > 40:
        return 6
    if row_count > 25:
        return 7
    return 8


def split_equipment(
    summaries: list[VehicleUsageSummary],
) -> tuple[list[VehicleUsageSummary], list[VehicleUsageSummary]]:
    equipment = [s for s in summaries if is_equipment(s.category)]
    vehicles = [s for s in summaries if not is_equipment(s.category)]
    return equipment, vehicles


class ExportHorimeterReportUseCase:
    """
    Use case for horimeter/odometer history exports.

    Flow:
    1. Aggregate readings per roster vehicle inside the period
    2. Apply company / category / search filters
    3. One page per company (PDF) or two sheets (XLSX)
    """

    def __init__(
        self,
        pdf_renderer: IPdfReportRenderer | None = None,
        spreadsheet_writer: ISpreadsheetWriter | None = None,
        report_settings: ReportSettings | None = None,
        locale: NumberLocale | None = None,
    ):
        self._pdf_renderer = pdf_renderer
        self._spreadsheet_writer = spreadsheet_writer
        self._settings = report_settings or get_settings().report
        self._locale = locale

    def _get_locale(self) -> NumberLocale:
        if self._locale is None:
            from src.application.services import get_number_locale

            self._locale = get_number_locale()
        return self._locale

    def _get_pdf_renderer(self) -> IPdfReportRenderer:
        if self._pdf_renderer is None:
            from src.application.services import get_pdf_renderer

            self._pdf_renderer = get_pdf_renderer()
        return self._pdf_renderer

    def _get_spreadsheet_writer(self) -> ISpreadsheetWriter:
        if self._spreadsheet_writer is None:
            from src.application.services import get_spreadsheet_writer

            self._spreadsheet_writer = get_spreadsheet_writer()
        return self._spreadsheet_writer

    def execute(self, request: ExportHorimeterReportRequest) -> ExportResult:
        """Build the horimeter report artifact."""
        with report_log_context(
            report="horimeters",
            format=request.format.value,
            reference_date=request.reference_date.isoformat(),
        ):
            summaries = self.summarize(request)
            logger.info(
                "horimeter_export_started",
                readings=len(request.readings),
                vehicles=len(summaries),
            )

            if request.format is ExportFormat.PDF:
                content = self._get_pdf_renderer().render(
                    self.build_document(request, summaries)
                )
            else:
                content = self._get_spreadsheet_writer().write(self.build_sheets(summaries))

            result = ExportResult(
                filename=build_filename(FILENAME_LABEL, request.reference_date, request.format),
                content=content,
                media_type=MEDIA_TYPES[request.format],
            )
            logger.info("horimeter_exported", filename=result.filename, file_size=result.file_size)
            return result

    @staticmethod
    def summarize(request: ExportHorimeterReportRequest) -> list[VehicleUsageSummary]:
        summaries = aggregate_usage(request.readings, request.vehicles, request.period)
        return filter_usage(
            summaries,
            company=request.company,
            category=request.category,
            search=request.search,
        )

    def build_document(
        self,
        request: ExportHorimeterReportRequest,
        summaries: list[VehicleUsageSummary],
    ) -> ReportDocument:
        locale = self._get_locale()
        date_label = period_label(request.period.start, request.period.end) or format_report_date(
            request.reference_date, locale
        )

        by_company: dict[str, list[VehicleUsageSummary]] = defaultdict(list)
        for summary in summaries:
            by_company[summary.company.strip() or NO_COMPANY].append(summary)
        if request.company and not by_company:
            by_company[request.company] = []
        if not by_company:
            by_company["Todas as empresas"] = []

        pages = []
        for company in sorted(by_company, key=collation_key):
            equipment, vehicles = split_equipment(by_company[company])
            pages.append(
                ReportPage(
                    title=request.metadata.title or REPORT_TITLE,
                    subtitle=company,
                    date_label=date_label,
                    sections=[
                        ReportSection(
                            heading=f"EQUIPAMENTOS ({len(equipment)})",
                            theme=SectionTheme.TANKS,
                            table=build_usage_table(equipment, locale),
                            empty_message="Nenhum equipamento encontrado.",
                            font_size=usage_font_size(len(equipment)),
                        ),
                        ReportSection(
                            heading=f"VEÍCULOS ({len(vehicles)})",
                            theme=SectionTheme.TRUCKS,
                            table=build_usage_table(vehicles, locale),
                            empty_message="Nenhum veículo encontrado.",
                            font_size=usage_font_size(len(vehicles)),
                        ),
                    ],
                )
            )

        return ReportDocument(
            organization_name=request.metadata.organization_name
            or self._settings.organization_name,
            footer_text=self._settings.footer_text,
            pages=pages,
        )

    @staticmethod
    def build_sheets(summaries: list[VehicleUsageSummary]) -> list[SheetSpec]:
        equipment, vehicles = split_equipment(summaries)
        return [
            SheetSpec(
                name=name,
                headers=list(XLSX_USAGE_HEADERS),
                rows=[list(project_usage(s).values()) for s in group],
                column_widths=list(XLSX_USAGE_WIDTHS),
            )
            for name, group in (("Equipamentos", equipment), ("Veículos", vehicles))
        ]

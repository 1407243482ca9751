"""
Export Fuel Detail Report Use Case.

Consumption rows grouped by location ("Relatório Completo"), by company or
by vehicle, each group with per-row interval and consumption and a TOTAL row
carrying the liters sum and the average consumption.
"""

from collections import defaultdict

from src.application.dto.requests import ExportFuelDetailRequest
from src.application.use_cases.export_common import (
    MEDIA_TYPES,
    ExportResult,
    build_filename,
    period_label,
)
from src.config import get_logger, get_settings, report_log_context
from src.config.settings import ReportSettings
from src.core.entities.fuel_movement import FuelMovementRow
from src.core.entities.locale import NumberLocale
from src.core.entities.report import (
    ExportFormat,
    GroupBy,
    ReportDocument,
    ReportPage,
    ReportSection,
    SectionTheme,
    SheetSpec,
)
from src.core.interfaces import IPdfReportRenderer, ISpreadsheetWriter
from src.core.services.collation import collation_key
from src.core.services.number_format import format_report_date
from src.core.services.record_classifier import is_entry
from src.core.services.row_normalizer import normalize_movements
from src.core.services.table_builder import (
    XLSX_DETAIL_HEADERS,
    XLSX_DETAIL_WIDTHS,
    build_fuel_detail_table,
    project_detail_record,
    sort_records,
)

logger = get_logger(__name__)

GROUP_TITLES: dict[GroupBy, str] = {
    GroupBy.LOCATION: "RELATÓRIO COMPLETO DE ABASTECIMENTO",
    GroupBy.COMPANY: "RELATÓRIO DE ABASTECIMENTO POR EMPRESA",
    GroupBy.VEHICLE: "RELATÓRIO DE ABASTECIMENTO POR VEÍCULO",
}

FILENAME_LABELS: dict[GroupBy, str] = {
    GroupBy.LOCATION: "Abastecimento_Por_Local",
    GroupBy.COMPANY: "Abastecimento_Por_Empresa",
    GroupBy.VEHICLE: "Abastecimento_Por_Veiculo",
}

_MISSING_GROUP: dict[GroupBy, str] = {
    GroupBy.LOCATION: "Sem local",
    GroupBy.COMPANY: "Sem empresa",
    GroupBy.VEHICLE: "Sem veículo",
}


def group_name(row: FuelMovementRow, group_by: GroupBy) -> str:
    if group_by is GroupBy.COMPANY:
        name = row.company
    elif group_by is GroupBy.VEHICLE:
        name = f"{row.vehicle} - {row.description}" if row.vehicle and row.description else row.vehicle
    else:
        name = row.location
    return name.strip() or _MISSING_GROUP[group_by]


class ExportFuelDetailUseCase:
    """
    Use case for grouped fuel detail exports.

    Flow:
    1. Normalize rows, keep consumption rows inside the period
    2. Sort (same order for PDF and XLSX) and group
    3. One PDF section / one worksheet per group
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

    def execute(self, request: ExportFuelDetailRequest) -> ExportResult:
        """Build the grouped detail report artifact."""
        with report_log_context(
            report="fuel_detail",
            group_by=request.group_by.value,
            format=request.format.value,
            reference_date=request.reference_date.isoformat(),
        ):
            groups = self.build_groups(request)
            logger.info(
                "fuel_detail_export_started",
                rows=len(request.rows),
                groups=len(groups),
            )

            if request.format is ExportFormat.PDF:
                content = self._get_pdf_renderer().render(self.build_document(request, groups))
            else:
                content = self._get_spreadsheet_writer().write(self.build_sheets(groups))

            result = ExportResult(
                filename=build_filename(
                    FILENAME_LABELS[request.group_by], request.reference_date, request.format
                ),
                content=content,
                media_type=MEDIA_TYPES[request.format],
            )
            logger.info("fuel_detail_exported", filename=result.filename, file_size=result.file_size)
            return result

    def select_rows(self, request: ExportFuelDetailRequest) -> list[FuelMovementRow]:
        rows = normalize_movements(request.rows, self._get_locale())
        period = request.period
        bounded = period.start is not None or period.end is not None

        selected = []
        for row in rows:
            if not request.include_entries and is_entry(row):
                continue
            if bounded and (row.movement_date is None or not period.contains(row.movement_date)):
                continue
            selected.append(row)
        return sort_records(selected, request.sort_by_description)

    def build_groups(self, request: ExportFuelDetailRequest) -> dict[str, list[FuelMovementRow]]:
        """Rows per group name, groups in Portuguese alphabetical order."""
        grouped: dict[str, list[FuelMovementRow]] = defaultdict(list)
        for row in self.select_rows(request):
            grouped[group_name(row, request.group_by)].append(row)
        return {name: grouped[name] for name in sorted(grouped, key=collation_key)}

    def build_document(
        self, request: ExportFuelDetailRequest, groups: dict[str, list[FuelMovementRow]]
    ) -> ReportDocument:
        locale = self._get_locale()
        sections = [
            ReportSection(
                heading=f"{name.upper()} - {len(rows)} registros",
                theme=SectionTheme.NEUTRAL,
                table=build_fuel_detail_table(rows, locale),
            )
            for name, rows in groups.items()
        ]
        if not sections:
            sections.append(
                ReportSection(
                    heading="ABASTECIMENTOS - 0 registros",
                    empty_message="Nenhum registro de abastecimento encontrado no período.",
                )
            )

        date_label = period_label(request.period.start, request.period.end) or format_report_date(
            request.reference_date, locale
        )
        return ReportDocument(
            organization_name=request.metadata.organization_name
            or self._settings.organization_name,
            footer_text=self._settings.footer_text,
            pages=[
                ReportPage(
                    title=request.metadata.title or GROUP_TITLES[request.group_by],
                    date_label=date_label,
                    sections=sections,
                )
            ],
        )

    @staticmethod
    def build_sheets(groups: dict[str, list[FuelMovementRow]]) -> list[SheetSpec]:
        sheets = [
            SheetSpec(
                name=name,
                headers=list(XLSX_DETAIL_HEADERS),
                rows=[list(project_detail_record(r).values()) for r in rows],
                column_widths=list(XLSX_DETAIL_WIDTHS),
            )
            for name, rows in groups.items()
        ]
        if not sheets:
            sheets.append(
                SheetSpec(
                    name="Abastecimentos",
                    headers=list(XLSX_DETAIL_HEADERS),
                    column_widths=list(XLSX_DETAIL_WIDTHS),
                )
            )
        return sheets

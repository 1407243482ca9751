"""
Export Stock Report Use Case.

Builds the tank / fuel-truck stock report ("Relatório Geral dos Tanques /
Comboios") as PDF or XLSX. Combined exports put the tanks page and the
trucks page into one document (or two sheets of one workbook).
"""

from dataclasses import dataclass

from src.application.dto.requests import ExportStockReportRequest
from src.application.use_cases.export_common import MEDIA_TYPES, ExportResult, build_filename
from src.config import get_logger, get_settings, report_log_context
from src.config.settings import ReportSettings
from src.core.entities.fuel_movement import FuelMovementRow, LocationKind
from src.core.entities.locale import NumberLocale
from src.core.entities.report import (
    ExportFormat,
    ReportDocument,
    ReportKind,
    ReportPage,
    ReportSection,
    SectionTheme,
    SheetSpec,
)
from src.core.entities.stock import LocationStockSummary
from src.core.interfaces import IPdfReportRenderer, ISpreadsheetWriter
from src.core.services.number_format import format_report_date
from src.core.services.record_classifier import classify_location, is_entry
from src.core.services.row_normalizer import normalize_movements
from src.core.services.stock_aggregator import snapshot_to_summary, summarize_locations
from src.core.services.table_builder import (
    XLSX_COLUMN_WIDTHS,
    XLSX_HEADERS,
    build_entries_table,
    build_movement_table,
    build_stock_summary_table,
    project_record,
    sort_records,
)

logger = get_logger(__name__)

FILENAME_LABELS: dict[tuple[ReportKind, ExportFormat], str] = {
    (ReportKind.TANKS, ExportFormat.PDF): "Relatorio_Tanques",
    (ReportKind.TRUCKS, ExportFormat.PDF): "Relatorio_Comboios",
    (ReportKind.COMBINED, ExportFormat.PDF): "Tanques_Comboios",
    (ReportKind.TANKS, ExportFormat.XLSX): "Abastecimento_Tanques",
    (ReportKind.TRUCKS, ExportFormat.XLSX): "Abastecimento_Comboios",
    (ReportKind.COMBINED, ExportFormat.XLSX): "Tanques_Comboios",
}


@dataclass
class LocationGroup:
    """Rows and summaries of one location kind (all tanks or all trucks)."""

    kind: LocationKind
    label: str  # "Tanques" / "Comboios"
    title: str
    rows: list[FuelMovementRow]
    summaries: list[LocationStockSummary]

    @property
    def exits(self) -> list[FuelMovementRow]:
        return [r for r in self.rows if not is_entry(r)]

    @property
    def entries(self) -> list[FuelMovementRow]:
        return [r for r in self.rows if is_entry(r)]


class ExportStockReportUseCase:
    """
    Use case for stock report exports.

    Flow:
    1. Normalize and sort the raw rows (same order for PDF and XLSX)
    2. Split rows into tank and truck groups by location kind
    3. Reconcile stock per configured location (or take supplied summaries
       and resolved daily stock rows)
    4. Render the document or workbook and name the file
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

    def execute(self, request: ExportStockReportRequest) -> ExportResult:
        """Build the requested stock report artifact."""
        with report_log_context(
            report="stock",
            kind=request.kind.value,
            format=request.format.value,
            reference_date=request.reference_date.isoformat(),
        ):
            logger.info("stock_report_export_started", rows=len(request.rows))

            groups = self.build_groups(request)
            if request.format is ExportFormat.PDF:
                content = self._get_pdf_renderer().render(self.build_document(request, groups))
            else:
                content = self._get_spreadsheet_writer().write(self.build_sheets(groups))

            label = FILENAME_LABELS[(request.kind, request.format)]
            result = ExportResult(
                filename=build_filename(label, request.reference_date, request.format),
                content=content,
                media_type=MEDIA_TYPES[request.format],
            )
            logger.info(
                "stock_report_exported",
                filename=result.filename,
                file_size=result.file_size,
            )
            return result

    # ------------------------------------------------------------------
    # Grouping
    # ------------------------------------------------------------------

    def build_groups(self, request: ExportStockReportRequest) -> list[LocationGroup]:
        rows = normalize_movements(request.rows, self._get_locale())
        rows = sort_records(rows, request.sort_by_description)

        specs = []
        if request.kind in (ReportKind.TANKS, ReportKind.COMBINED):
            specs.append(
                (LocationKind.TANK, "Tanques", "RELATÓRIO GERAL DOS TANQUES",
                 self._settings.tank_locations)
            )
        if request.kind in (ReportKind.TRUCKS, ReportKind.COMBINED):
            specs.append(
                (LocationKind.TRUCK, "Comboios", "RELATÓRIO GERAL DOS COMBOIOS",
                 self._settings.truck_locations)
            )

        groups = []
        for kind, label, title, locations in specs:
            # Sections list every row of this kind; summaries match configured locations
            group_rows = [r for r in rows if classify_location(r.location) is kind]
            groups.append(
                LocationGroup(
                    kind=kind,
                    label=label,
                    title=request.metadata.title or title,
                    rows=group_rows,
                    summaries=self._summaries(request, group_rows, locations),
                )
            )
        return groups

    @staticmethod
    def _summaries(
        request: ExportStockReportRequest,
        rows: list[FuelMovementRow],
        locations: list[str],
    ) -> list[LocationStockSummary]:
        computed = summarize_locations(rows, locations, request.previous_stock)
        supplied = {
            s.location_name: snapshot_to_summary(s) for s in request.daily_snapshots or []
        }
        supplied.update({s.location_name: s for s in request.stock_summaries or []})
        if not supplied:
            return computed
        return [supplied.get(s.location_name, s) for s in computed]

    # ------------------------------------------------------------------
    # PDF document
    # ------------------------------------------------------------------

    def build_document(
        self, request: ExportStockReportRequest, groups: list[LocationGroup]
    ) -> ReportDocument:
        locale = self._get_locale()
        date_label = format_report_date(request.reference_date, locale)
        pages = []
        for group in groups:
            exits = group.exits
            entries = group.entries
            pages.append(
                ReportPage(
                    title=group.title,
                    date_label=date_label,
                    summary_heading="Resumo Geral",
                    summary_tables=[
                        build_stock_summary_table(group.summaries, group.kind, locale)
                    ],
                    sections=[
                        ReportSection(
                            heading=f"SAÍDAS - {len(exits)} registros",
                            theme=SectionTheme.EXITS,
                            table=build_movement_table(exits, locale),
                            empty_message=f"Nenhum registro de saída encontrado para {group.label}.",
                        ),
                        ReportSection(
                            heading=f"ENTRADAS - {len(entries)} registros",
                            theme=SectionTheme.ENTRIES,
                            table=build_entries_table(entries, group.kind, locale),
                            empty_message=f"Nenhum registro de entrada encontrado para {group.label}.",
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

    # ------------------------------------------------------------------
    # Workbook
    # ------------------------------------------------------------------

    @staticmethod
    def build_sheets(groups: list[LocationGroup]) -> list[SheetSpec]:
        return [
            SheetSpec(
                name=group.label,
                headers=list(XLSX_HEADERS),
                rows=[list(project_record(r).values()) for r in group.rows],
                column_widths=list(XLSX_COLUMN_WIDTHS),
            )
            for group in groups
        ]

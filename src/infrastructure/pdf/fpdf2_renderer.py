"""
Fpdf2 implementation of report PDF rendering.

Renders a ReportDocument on landscape A4: a dark header band per report page,
the summary tables, then each section with a colored heading band and either
its table or the empty-state notice. Every physical page gets the shared
footer (system tag on the left, "Página N de Total" on the right).
"""

import os

from fpdf import FPDF
from fpdf.enums import XPos, YPos
from fpdf.errors import FPDFException

from src.config import get_logger
from src.config.settings import ReportSettings, get_settings
from src.core.entities.report import (
    ReportDocument,
    ReportPage,
    ReportSection,
    ReportTable,
    ReportTableRow,
    SectionTheme,
)
from src.core.exceptions import RenderError
from src.core.interfaces.renderer import IPdfReportRenderer
from src.core.services.pagination import needs_page_break

logger = get_logger(__name__)

HEADER_BAND_COLOR = (30, 41, 59)
TABLE_HEADER_COLOR = (51, 65, 85)
ZEBRA_COLOR = (241, 245, 249)

THEME_COLORS: dict[SectionTheme, tuple[int, int, int]] = {
    SectionTheme.EXITS: (185, 28, 28),
    SectionTheme.ENTRIES: (22, 101, 52),
    SectionTheme.TANKS: (30, 64, 175),
    SectionTheme.TRUCKS: (21, 128, 61),
    SectionTheme.NEUTRAL: (71, 85, 105),
}

# Heading band plus header row plus a couple of body rows
_SECTION_MIN_HEIGHT = 24.0

_LATIN1_REPLACEMENTS = str.maketrans({"—": "-", "–": "-", "•": "-", "…": "..."})


class _ReportPdf(FPDF):
    """FPDF subclass that renders the shared footer on every page."""

    def __init__(self) -> None:
        super().__init__(orientation="L", unit="mm", format="A4")
        self.footer_text = ""
        self.footer_font = "Helvetica"

    # fpdf2 calls this automatically at the bottom of each page.
    def footer(self) -> None:  # noqa: D401
        """Render footer with system tag and page numbers."""
        self.set_y(-12)
        self.set_font(self.footer_font, "I", 8)
        self.set_text_color(100, 116, 139)
        self.cell(self.epw / 2, 5, self.footer_text, align="L")
        self.cell(0, 5, f"Página {self.page_no()} de {{nb}}", align="R")
        self.set_text_color(0, 0, 0)


class Fpdf2ReportRenderer(IPdfReportRenderer):
    """Renders report documents using fpdf2."""

    def __init__(self, report_settings: ReportSettings | None = None) -> None:
        if report_settings is None:
            report_settings = get_settings().report
        self._settings = report_settings
        self._font = "Helvetica"
        self._unicode_font_loaded = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, document: ReportDocument) -> bytes:
        """Render every page of the document into one PDF."""
        self._unicode_font_loaded = False
        self._font = "Helvetica"

        pdf = _ReportPdf()
        self._maybe_load_unicode_font(pdf)
        pdf.footer_font = self._font
        pdf.footer_text = self._safe_text(document.footer_text)
        pdf.alias_nb_pages()
        pdf.set_auto_page_break(auto=True, margin=18)

        try:
            for page in document.pages:
                self._render_page(pdf, document, page)
            if not document.pages:
                pdf.add_page()
            output = bytes(pdf.output())
        except FPDFException as e:
            raise RenderError("pdf", str(e)) from e

        logger.info(
            "pdf_rendered",
            pages=pdf.page_no(),
            report_pages=len(document.pages),
            size=len(output),
        )
        return output

    # ------------------------------------------------------------------
    # Font handling
    # ------------------------------------------------------------------

    def _maybe_load_unicode_font(self, pdf: FPDF) -> None:
        """Register the configured TTF font under every style the layout uses.

        Without it the built-in Helvetica is used, which covers latin-1
        (all Portuguese letters) but nothing beyond.
        """
        font_path = self._settings.unicode_font_path
        if not font_path or not os.path.isfile(font_path):
            return
        try:
            for style in ("", "B", "I"):
                pdf.add_font("ReportFont", style, str(font_path))
        except (FPDFException, OSError) as e:
            logger.warning("pdf_font_load_failed", path=str(font_path), error=str(e))
            return
        self._font = "ReportFont"
        self._unicode_font_loaded = True

    def _safe_text(self, text: str) -> str:
        """Return *text* encodable by the active font."""
        if self._unicode_font_loaded:
            return text
        text = text.translate(_LATIN1_REPLACEMENTS)
        return text.encode("latin-1", errors="replace").decode("latin-1")

    def _fit(self, pdf: FPDF, text: str, width: float) -> str:
        """Truncate *text* so it fits a cell of *width* mm."""
        text = self._safe_text(text)
        limit = width - 2
        if pdf.get_string_width(text) <= limit:
            return text
        while text and pdf.get_string_width(text + "...") > limit:
            text = text[:-1]
        return text + "..."

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def _render_page(self, pdf: FPDF, document: ReportDocument, page: ReportPage) -> None:
        pdf.add_page()
        self._render_header(pdf, document.organization_name, page)

        if page.summary_tables:
            if page.summary_heading:
                pdf.set_font(self._font, "B", 11)
                pdf.cell(
                    0, 7, self._safe_text(page.summary_heading),
                    new_x=XPos.LMARGIN, new_y=YPos.NEXT,
                )
            for table in page.summary_tables:
                self._render_table(pdf, table, font_size=8, dark_totals=True)
                pdf.ln(3)

        for section in page.sections:
            self._render_section(pdf, section)

    def _render_header(self, pdf: FPDF, organization: str, page: ReportPage) -> None:
        """Dark band with organization, title and date."""
        band_height = 28 if page.subtitle else 25
        pdf.set_fill_color(*HEADER_BAND_COLOR)
        pdf.rect(0, 0, pdf.w, band_height, style="F")

        pdf.set_text_color(255, 255, 255)
        pdf.set_xy(pdf.l_margin, 4)
        pdf.set_font(self._font, "B", 10)
        pdf.cell(0, 5, self._safe_text(organization.upper()), align="C",
                 new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font(self._font, "B", 14)
        pdf.cell(0, 8, self._safe_text(page.title), align="C",
                 new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font(self._font, "", 9)
        if page.subtitle:
            pdf.cell(0, 4, self._safe_text(page.subtitle), align="C",
                     new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        if page.date_label:
            pdf.cell(0, 5, self._safe_text(page.date_label), align="C",
                     new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        pdf.set_text_color(0, 0, 0)
        pdf.set_y(band_height + 5)

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _render_section(self, pdf: FPDF, section: ReportSection) -> None:
        threshold = self._settings.page_break_threshold_mm
        if needs_page_break(pdf.get_y(), pdf.h, _SECTION_MIN_HEIGHT, threshold):
            pdf.add_page()

        pdf.set_fill_color(*THEME_COLORS[section.theme])
        pdf.set_text_color(255, 255, 255)
        pdf.set_font(self._font, "B", 10)
        pdf.cell(0, 7, self._safe_text(section.heading), fill=True,
                 new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_text_color(0, 0, 0)
        pdf.ln(1)

        if section.is_empty:
            pdf.set_font(self._font, "I", 9)
            pdf.set_text_color(100, 116, 139)
            pdf.cell(0, 8, self._safe_text(section.empty_message),
                     new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            pdf.set_text_color(0, 0, 0)
        else:
            self._render_table(pdf, section.table, font_size=section.font_size)
        pdf.ln(4)

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    @staticmethod
    def _column_widths(pdf: FPDF, table: ReportTable) -> list[float]:
        weights = table.column_widths or [1.0] * len(table.headers)
        scale = pdf.epw / sum(weights)
        return [w * scale for w in weights]

    def _render_header_row(
        self, pdf: FPDF, table: ReportTable, widths: list[float], font_size: float
    ) -> None:
        pdf.set_font(self._font, "B", font_size)
        pdf.set_fill_color(*TABLE_HEADER_COLOR)
        pdf.set_text_color(255, 255, 255)
        for width, header in zip(widths, table.headers):
            pdf.cell(width, 6, self._fit(pdf, header, width), border=1, fill=True, align="C")
        pdf.ln()
        pdf.set_text_color(0, 0, 0)

    def _render_table(
        self,
        pdf: FPDF,
        table: ReportTable,
        font_size: float = 8,
        dark_totals: bool = False,
    ) -> None:
        """Header row, zebra body rows and a bold totals row.

        The header row is repeated whenever the body flows onto a new page.
        """
        widths = self._column_widths(pdf, table)
        row_height = max(4.0, font_size * 0.6)

        self._render_header_row(pdf, table, widths, font_size)
        for index, row in enumerate(table.rows):
            if pdf.will_page_break(row_height):
                pdf.add_page()
                self._render_header_row(pdf, table, widths, font_size)
            pdf.set_font(self._font, "", font_size)
            fill = index % 2 == 1
            if fill:
                pdf.set_fill_color(*ZEBRA_COLOR)
            self._render_row(pdf, table, row, widths, row_height, fill)

        if table.totals is not None:
            if pdf.will_page_break(row_height):
                pdf.add_page()
                self._render_header_row(pdf, table, widths, font_size)
            pdf.set_font(self._font, "B", font_size)
            if dark_totals:
                pdf.set_fill_color(*HEADER_BAND_COLOR)
                pdf.set_text_color(255, 255, 255)
            else:
                pdf.set_fill_color(226, 232, 240)
            self._render_row(pdf, table, table.totals, widths, row_height, True)
            pdf.set_text_color(0, 0, 0)

    def _render_row(
        self,
        pdf: FPDF,
        table: ReportTable,
        row: ReportTableRow,
        widths: list[float],
        height: float,
        fill: bool,
    ) -> None:
        for column, (width, value) in enumerate(zip(widths, row.cells)):
            align = "R" if column in table.numeric_columns else "L"
            pdf.cell(width, height, self._fit(pdf, value, width), border=1, fill=fill, align=align)
        pdf.ln()

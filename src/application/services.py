"""
Service factory functions for dependency injection.

This module wires infrastructure implementations (fpdf2 renderer, openpyxl
writer, spreadsheet proxy) to the use cases. Use cases import from here
lazily so tests can inject fakes through their constructors instead.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from src.config import get_settings
from src.core.entities.locale import NumberLocale
from src.core.interfaces import IPdfReportRenderer, IRowSource, ISpreadsheetWriter

# Singleton service instances
_pdf_renderer: IPdfReportRenderer | None = None
_spreadsheet_writer: ISpreadsheetWriter | None = None
_row_source: IRowSource | None = None


def get_number_locale() -> NumberLocale:
    """Presentation locale built from settings."""
    locale = get_settings().locale
    return NumberLocale(
        decimal_separator=locale.decimal_separator,
        thousands_separator=locale.thousands_separator,
        month_abbreviations=tuple(locale.month_abbreviations),
    )


def get_pdf_renderer() -> IPdfReportRenderer:
    """Get or create the PDF renderer."""
    global _pdf_renderer
    if _pdf_renderer is None:
        from src.infrastructure.pdf import Fpdf2ReportRenderer

        _pdf_renderer = Fpdf2ReportRenderer(get_settings().report)
    return _pdf_renderer


def get_spreadsheet_writer() -> ISpreadsheetWriter:
    """Get or create the workbook writer."""
    global _spreadsheet_writer
    if _spreadsheet_writer is None:
        from src.infrastructure.xlsx import OpenpyxlSpreadsheetWriter

        _spreadsheet_writer = OpenpyxlSpreadsheetWriter()
    return _spreadsheet_writer


def get_row_source() -> IRowSource:
    """Get or create the spreadsheet proxy row source."""
    global _row_source
    if _row_source is None:
        from src.infrastructure.sheets import SheetsProxyRowSource

        _row_source = SheetsProxyRowSource(get_settings().sheets)
    return _row_source


def reset_services() -> None:
    """Reset all service singletons (for testing)."""
    global _pdf_renderer, _spreadsheet_writer, _row_source
    _pdf_renderer = None
    _spreadsheet_writer = None
    _row_source = None

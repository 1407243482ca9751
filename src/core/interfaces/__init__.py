"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.renderer import IPdfReportRenderer, ISpreadsheetWriter
from src.core.interfaces.row_source import IRowSource, SheetData

__all__ = [
    # Row source
    "IRowSource",
    "SheetData",
    # Renderers
    "IPdfReportRenderer",
    "ISpreadsheetWriter",
]

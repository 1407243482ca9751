"""
Openpyxl implementation of workbook export.

Each SheetSpec becomes one worksheet with a bold header row, fixed column
widths and typed cells (dates and liters stay numeric so they can be summed
in the spreadsheet).
"""

import io
import re
from datetime import date

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from src.config import get_logger
from src.core.entities.report import SheetSpec
from src.core.exceptions import RenderError
from src.core.interfaces.renderer import ISpreadsheetWriter

logger = get_logger(__name__)

MAX_SHEET_NAME = 31
_INVALID_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")

DATE_FORMAT = "DD/MM/YYYY"
NUMBER_FORMAT = "#,##0.00"


def safe_sheet_name(name: str, taken: set[str]) -> str:
    """Excel-legal, unique sheet name (31 chars, no []:*?/\\)."""
    base = _INVALID_SHEET_CHARS.sub("-", name).strip() or "Planilha"
    base = base[:MAX_SHEET_NAME]
    candidate = base
    counter = 2
    while candidate.lower() in taken:
        suffix = f" ({counter})"
        candidate = base[: MAX_SHEET_NAME - len(suffix)] + suffix
        counter += 1
    taken.add(candidate.lower())
    return candidate


class OpenpyxlSpreadsheetWriter(ISpreadsheetWriter):
    """Writes sheet specs into an .xlsx workbook."""

    def write(self, sheets: list[SheetSpec]) -> bytes:
        wb = Workbook()
        # Workbook() starts with one empty sheet; reuse it for the first spec
        ws = wb.active
        taken: set[str] = set()

        for index, sheet in enumerate(sheets):
            if index > 0:
                ws = wb.create_sheet()
            ws.title = safe_sheet_name(sheet.name, taken)
            self._fill_sheet(ws, sheet)

        if not sheets:
            ws.title = "Planilha"

        buf = io.BytesIO()
        try:
            wb.save(buf)
        except (OSError, ValueError) as e:
            raise RenderError("xlsx", str(e)) from e

        logger.info(
            "xlsx_written",
            sheets=[s.name for s in sheets],
            rows=sum(len(s.rows) for s in sheets),
        )
        return buf.getvalue()

    @staticmethod
    def _fill_sheet(ws, sheet: SheetSpec) -> None:
        bold = Font(bold=True)
        for col_idx, header in enumerate(sheet.headers, 1):
            cell = ws.cell(row=1, column=col_idx, value=header)
            cell.font = bold

        for row_idx, row in enumerate(sheet.rows, 2):
            for col_idx, value in enumerate(row, 1):
                cell = ws.cell(row=row_idx, column=col_idx, value=value)
                if isinstance(value, date):
                    cell.number_format = DATE_FORMAT
                elif isinstance(value, float):
                    cell.number_format = NUMBER_FORMAT

        for col_idx, width in enumerate(sheet.column_widths, 1):
            ws.column_dimensions[get_column_letter(col_idx)].width = width
        ws.freeze_panes = "A2"

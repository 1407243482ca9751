"""Spreadsheet export infrastructure."""

from src.infrastructure.xlsx.openpyxl_writer import OpenpyxlSpreadsheetWriter, safe_sheet_name

__all__ = ["OpenpyxlSpreadsheetWriter", "safe_sheet_name"]

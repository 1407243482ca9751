"""Spreadsheet row source infrastructure."""

from src.infrastructure.sheets.proxy_client import SheetsProxyRowSource

__all__ = ["SheetsProxyRowSource"]

"""
Dependency injection container for FastAPI.

Provides use case instances to route handlers; tests override these with
``app.dependency_overrides``.
"""

from src.application.services import get_row_source
from src.application.use_cases import (
    ExportFuelDetailUseCase,
    ExportHorimeterReportUseCase,
    ExportStockReportUseCase,
    GetDailyStockUseCase,
)
from src.config import Settings, get_settings
from src.core.interfaces import IRowSource


def get_app_settings() -> Settings:
    """Get application settings."""
    return get_settings()


def get_sheets_row_source() -> IRowSource:
    """Get the spreadsheet proxy row source."""
    return get_row_source()


def get_export_stock_report_use_case() -> ExportStockReportUseCase:
    """Get stock report export use case."""
    return ExportStockReportUseCase()


def get_export_fuel_detail_use_case() -> ExportFuelDetailUseCase:
    """Get fuel detail export use case."""
    return ExportFuelDetailUseCase()


def get_export_horimeter_report_use_case() -> ExportHorimeterReportUseCase:
    """Get horimeter report export use case."""
    return ExportHorimeterReportUseCase()


def get_daily_stock_use_case() -> GetDailyStockUseCase:
    """Get daily stock use case."""
    return GetDailyStockUseCase()

"""Application use cases."""

from src.application.use_cases.export_common import ExportResult, build_filename
from src.application.use_cases.export_fuel_detail import ExportFuelDetailUseCase
from src.application.use_cases.export_horimeter_report import ExportHorimeterReportUseCase
from src.application.use_cases.export_stock_report import ExportStockReportUseCase
from src.application.use_cases.get_daily_stock import GetDailyStockUseCase

__all__ = [
    "ExportResult",
    "build_filename",
    "ExportStockReportUseCase",
    "ExportFuelDetailUseCase",
    "ExportHorimeterReportUseCase",
    "GetDailyStockUseCase",
]

"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API and CLI contracts
2. Implementing export use cases that coordinate core services
3. Providing factory functions for dependency injection

Use cases are the only entry point for API handlers and the CLI.
"""

from src.application.dto import (
    DailyStockListResponse,
    DailyStockRequest,
    DailyStockResponse,
    ErrorResponse,
    ExportFuelDetailRequest,
    ExportHorimeterReportRequest,
    ExportStockReportRequest,
    HealthResponse,
    ReportMetadata,
)
from src.application.services import (
    get_number_locale,
    get_pdf_renderer,
    get_row_source,
    get_spreadsheet_writer,
    reset_services,
)
from src.application.use_cases import (
    ExportFuelDetailUseCase,
    ExportHorimeterReportUseCase,
    ExportResult,
    ExportStockReportUseCase,
    GetDailyStockUseCase,
)

__all__ = [
    # Request DTOs
    "ExportStockReportRequest",
    "ExportFuelDetailRequest",
    "ExportHorimeterReportRequest",
    "DailyStockRequest",
    "ReportMetadata",
    # Response DTOs
    "DailyStockResponse",
    "DailyStockListResponse",
    "HealthResponse",
    "ErrorResponse",
    # Use Cases
    "ExportStockReportUseCase",
    "ExportFuelDetailUseCase",
    "ExportHorimeterReportUseCase",
    "GetDailyStockUseCase",
    "ExportResult",
    # Service factories
    "get_number_locale",
    "get_pdf_renderer",
    "get_spreadsheet_writer",
    "get_row_source",
    "reset_services",
]

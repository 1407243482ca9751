"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming export requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from src.application.dto.requests import (
    DailyStockRequest,
    ExportFuelDetailRequest,
    ExportHorimeterReportRequest,
    ExportStockReportRequest,
    ReportMetadata,
)
from src.application.dto.responses import (
    DailyStockListResponse,
    DailyStockResponse,
    ErrorResponse,
    HealthResponse,
    ProviderHealthResponse,
)

__all__ = [
    # Requests
    "ExportStockReportRequest",
    "ExportFuelDetailRequest",
    "ExportHorimeterReportRequest",
    "DailyStockRequest",
    "ReportMetadata",
    # Responses
    "DailyStockResponse",
    "DailyStockListResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "ErrorResponse",
]

"""
Domain exceptions for the fuel reporting engine.

Row parsing, classification and aggregation never raise on malformed sheet
data; these exceptions belong to the edges (request validation, row source,
rendering and configuration).
"""

from typing import Any


class FuelReportError(Exception):
    """Base exception for all fuel reporting errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Request Exceptions
class ValidationError(FuelReportError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value else None,
            },
        )


class TooManyRowsError(ValidationError):
    """Request carries more rows than the configured limit."""

    def __init__(self, count: int, limit: int):
        FuelReportError.__init__(
            self,
            f"Too many rows: {count} (max {limit})",
            code="TOO_MANY_ROWS",
            details={"count": count, "limit": limit},
        )


# Row Source Exceptions
class RowSourceError(FuelReportError):
    """Spreadsheet proxy returned an error or an unreadable payload."""

    def __init__(self, sheet_name: str, reason: str):
        super().__init__(
            f"Failed to read sheet '{sheet_name}': {reason}",
            code="ROW_SOURCE_ERROR",
            details={"sheet_name": sheet_name, "reason": reason},
        )


class RowSourceUnavailableError(RowSourceError):
    """Spreadsheet proxy could not be reached."""

    def __init__(self, sheet_name: str, reason: str):
        FuelReportError.__init__(
            self,
            f"Row source unavailable for sheet '{sheet_name}': {reason}",
            code="ROW_SOURCE_UNAVAILABLE",
            details={"sheet_name": sheet_name, "reason": reason},
        )


class LocationNotConfiguredError(FuelReportError):
    """Location has no daily-stock sheet configured."""

    def __init__(self, location: str):
        super().__init__(
            f"No stock sheet configured for location: {location}",
            code="LOCATION_NOT_CONFIGURED",
            details={"location": location},
        )


# Rendering Exceptions
class RenderError(FuelReportError):
    """PDF or workbook generation failed."""

    def __init__(self, artifact: str, reason: str):
        super().__init__(
            f"Failed to render {artifact}: {reason}",
            code="RENDER_ERROR",
            details={"artifact": artifact, "reason": reason},
        )


class ConfigurationError(FuelReportError):
    """Configuration error."""

    pass

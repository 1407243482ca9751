"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field


class DailyStockResponse(BaseModel):
    """Resolved "today" row of one location's daily stock sheet."""

    location: str = Field(..., description="Configured location name")
    location_kind: str = Field(..., description="tank or truck")
    date: str = Field(..., description="Date of the row used (dd/MM/yyyy)")
    matched_today: bool = Field(
        ..., description="False when the most recent non-empty row was used instead"
    )
    previous_stock: float
    entries: float
    exits: float
    exits_to_trucks: float = 0.0
    exits_to_equipment: float = 0.0
    current_stock: float


class DailyStockListResponse(BaseModel):
    """Snapshots for every requested location plus the grand total."""

    today: date
    locations: list[DailyStockResponse]
    total_current_stock: float


class ProviderHealthResponse(BaseModel):
    """Upstream dependency health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    environment: str | None = None
    report_font: str = Field(default="core", description="core (latin-1) or unicode")
    stock_locations: int = Field(default=0, description="Locations with a daily stock sheet")
    sheets: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. TOO_MANY_ROWS)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)

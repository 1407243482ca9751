"""Request DTOs for API endpoints and the CLI.

Pydantic v2 models for request validation.
These are the ONLY contracts between callers and use cases.
"""

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, model_validator

from src.core.entities.report import ExportFormat, GroupBy, ReportKind
from src.core.entities.stock import DailyStockSnapshot, LocationStockSummary
from src.core.entities.vehicle_usage import DateRange, HorimeterReading, Vehicle


class ReportMetadata(BaseModel):
    """Optional branding overrides for one export."""

    organization_name: str | None = Field(
        default=None,
        description="Organization shown in the header band (defaults to settings)",
        examples=["CONSÓRCIO AERO MARAGOGI"],
    )
    title: str | None = Field(
        default=None,
        description="Override for the report title",
    )


class ExportStockReportRequest(BaseModel):
    """Request for the tank / fuel-truck stock report."""

    rows: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Raw rows of the transactional fuel sheet, already filtered to the period",
    )
    reference_date: date = Field(
        ...,
        description="Date printed in the header and used in the file name",
        examples=["2026-01-15"],
    )
    kind: ReportKind = Field(
        default=ReportKind.COMBINED,
        description="tanks, trucks or combined",
    )
    format: ExportFormat = Field(default=ExportFormat.PDF, description="pdf or xlsx")
    previous_stock: dict[str, float] = Field(
        default_factory=dict,
        description="Opening stock per configured location name",
        examples=[{"Tanque Canteiro 01": 5000.0, "Comboio 01": 1200.0}],
    )
    stock_summaries: list[LocationStockSummary] | None = Field(
        default=None,
        description="Precomputed summaries; replace the ones computed from rows",
    )
    daily_snapshots: list[DailyStockSnapshot] | None = Field(
        default=None,
        description="Resolved daily stock rows used as location baselines; stock_summaries win",
    )
    sort_by_description: bool = Field(
        default=False,
        description="Sort detail rows by description (Portuguese collation)",
    )
    metadata: ReportMetadata = Field(default_factory=ReportMetadata)


class ExportFuelDetailRequest(BaseModel):
    """Request for the grouped fuel detail report."""

    rows: list[dict[str, Any]] = Field(default_factory=list)
    reference_date: date = Field(..., examples=["2026-01-15"])
    group_by: GroupBy = Field(
        default=GroupBy.LOCATION,
        description="location, company or vehicle",
    )
    format: ExportFormat = Field(default=ExportFormat.PDF)
    period: DateRange = Field(
        default_factory=DateRange,
        description="Inclusive movement date window; rows without a date are kept only without bounds",
    )
    include_entries: bool = Field(
        default=False,
        description="Include entry rows (deliveries) alongside consumption rows",
    )
    sort_by_description: bool = Field(default=False)
    metadata: ReportMetadata = Field(default_factory=ReportMetadata)


class ExportHorimeterReportRequest(BaseModel):
    """Request for the horimeter/odometer history report."""

    readings: list[HorimeterReading] = Field(default_factory=list)
    vehicles: list[Vehicle] = Field(
        default_factory=list,
        description="Roster; every listed vehicle appears even without readings",
    )
    reference_date: date = Field(..., examples=["2026-01-15"])
    period: DateRange = Field(default_factory=DateRange)
    company: str | None = Field(default=None, description="Single company report")
    category: str | None = Field(default=None)
    search: str | None = Field(default=None, description="Free-text vehicle filter")
    format: ExportFormat = Field(default=ExportFormat.PDF)
    metadata: ReportMetadata = Field(default_factory=ReportMetadata)

    @model_validator(mode="after")
    def strip_filters(self) -> "ExportHorimeterReportRequest":
        self.company = (self.company or "").strip() or None
        self.category = (self.category or "").strip() or None
        self.search = (self.search or "").strip() or None
        return self


class DailyStockRequest(BaseModel):
    """Request for today's stock snapshot of configured locations."""

    today: date | None = Field(default=None, description="Defaults to the current date")
    locations: list[str] | None = Field(
        default=None,
        description="Subset of configured locations (all when omitted)",
    )

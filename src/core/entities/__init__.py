"""Core domain entities."""

from src.core.entities.fuel_movement import (
    ExitDestination,
    FuelMovementRow,
    LocationKind,
    MovementClassification,
    ReadingKind,
)
from src.core.entities.locale import PT_BR, NumberLocale
from src.core.entities.report import (
    ExportFormat,
    GroupBy,
    ReportDocument,
    ReportKind,
    ReportPage,
    ReportSection,
    ReportTable,
    ReportTableRow,
    SectionTheme,
    SheetSpec,
)
from src.core.entities.stock import DailyStockSnapshot, LocationStockSummary
from src.core.entities.vehicle_usage import (
    DateRange,
    HorimeterReading,
    Vehicle,
    VehicleUsageSummary,
)

__all__ = [
    # Movement entities
    "FuelMovementRow",
    "MovementClassification",
    "LocationKind",
    "ExitDestination",
    "ReadingKind",
    # Locale
    "NumberLocale",
    "PT_BR",
    # Stock entities
    "LocationStockSummary",
    "DailyStockSnapshot",
    # Usage entities
    "Vehicle",
    "HorimeterReading",
    "VehicleUsageSummary",
    "DateRange",
    # Report model
    "ReportKind",
    "ExportFormat",
    "GroupBy",
    "SectionTheme",
    "ReportTableRow",
    "ReportTable",
    "ReportSection",
    "ReportPage",
    "ReportDocument",
    "SheetSpec",
]

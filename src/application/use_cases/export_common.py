"""Shared pieces of the export use cases: result type, file naming, locale."""

from dataclasses import dataclass
from datetime import date

from src.core.entities.report import ExportFormat
from src.core.services.number_format import format_filename_date

MEDIA_TYPES: dict[ExportFormat, str] = {
    ExportFormat.PDF: "application/pdf",
    ExportFormat.XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


@dataclass
class ExportResult:
    """Artifact produced by an export."""

    filename: str
    content: bytes
    media_type: str

    @property
    def file_size(self) -> int:
        return len(self.content)


def build_filename(label: str, reference_date: date, export_format: ExportFormat) -> str:
    """``{Label}_{dd-MM-yyyy}.{ext}``; depends only on the label and date."""
    return f"{label}_{format_filename_date(reference_date)}.{export_format.value}"


def period_label(start: date | None, end: date | None) -> str:
    """Human period for report headers ("01/01/2026 a 15/01/2026")."""
    fmt = "%d/%m/%Y"
    if start and end:
        return f"{start.strftime(fmt)} a {end.strftime(fmt)}"
    if start:
        return f"A partir de {start.strftime(fmt)}"
    if end:
        return f"Até {end.strftime(fmt)}"
    return ""

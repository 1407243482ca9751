"""Report document model shared by the table builder and the renderers."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ReportKind(str, Enum):
    """Stock report scopes."""

    TANKS = "tanks"
    TRUCKS = "trucks"
    COMBINED = "combined"


class ExportFormat(str, Enum):
    """Artifact formats."""

    PDF = "pdf"
    XLSX = "xlsx"


class GroupBy(str, Enum):
    """Groupings for the fuel detail report."""

    LOCATION = "location"
    COMPANY = "company"
    VEHICLE = "vehicle"


class SectionTheme(str, Enum):
    """Color theme of a section heading."""

    EXITS = "exits"  # red
    ENTRIES = "entries"  # green
    TANKS = "tanks"  # blue
    TRUCKS = "trucks"  # dark green
    NEUTRAL = "neutral"


class ReportTableRow(BaseModel):
    """One display row; every cell is already formatted text."""

    cells: list[str]
    is_total: bool = False


class ReportTable(BaseModel):
    """Headers, body rows and an optional trailing total row."""

    headers: list[str]
    rows: list[ReportTableRow] = Field(default_factory=list)
    totals: ReportTableRow | None = None
    column_widths: list[float] | None = None  # relative widths
    numeric_columns: list[int] = Field(default_factory=list)  # right aligned

    @property
    def body(self) -> list[list[str]]:
        """Body rows followed by the totals row, as plain cell lists."""
        rows = [r.cells for r in self.rows]
        if self.totals is not None:
            rows.append(self.totals.cells)
        return rows


class ReportSection(BaseModel):
    """Titled block of a page; renders its table or the empty notice."""

    heading: str
    theme: SectionTheme = SectionTheme.NEUTRAL
    table: ReportTable | None = None
    empty_message: str = "Nenhum registro encontrado."
    font_size: float = 8

    @property
    def is_empty(self) -> bool:
        return self.table is None or not self.table.rows


class ReportPage(BaseModel):
    """One logical report page (may flow onto several physical pages)."""

    title: str
    subtitle: str = ""
    date_label: str = ""
    summary_heading: str = ""
    summary_tables: list[ReportTable] = Field(default_factory=list)
    sections: list[ReportSection] = Field(default_factory=list)


class ReportDocument(BaseModel):
    """Complete document handed to a PDF renderer."""

    organization_name: str
    footer_text: str
    pages: list[ReportPage] = Field(default_factory=list)


class SheetSpec(BaseModel):
    """One worksheet handed to a spreadsheet writer."""

    name: str
    headers: list[str]
    rows: list[list[Any]] = Field(default_factory=list)
    column_widths: list[float] = Field(default_factory=list)

"""Abstract interfaces for artifact renderers."""

from abc import ABC, abstractmethod

from src.core.entities.report import ReportDocument, SheetSpec


class IPdfReportRenderer(ABC):
    """Interface for turning a report document into PDF bytes."""

    @abstractmethod
    def render(self, document: ReportDocument) -> bytes:
        """Render the document; every page carries the shared footer."""
        pass


class ISpreadsheetWriter(ABC):
    """Interface for turning sheet specs into a workbook."""

    @abstractmethod
    def write(self, sheets: list[SheetSpec]) -> bytes:
        """Write the sheets, in order, into one workbook."""
        pass

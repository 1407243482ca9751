"""Abstract interface for reading sheet rows."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field


class SheetData(BaseModel):
    """Headers and rows of one sheet; each row maps header name to cell value."""

    headers: list[str] = Field(default_factory=list)
    rows: list[dict[str, Any]] = Field(default_factory=list)


class IRowSource(ABC):
    """Interface for the spreadsheet backend holding transactional and stock sheets."""

    @abstractmethod
    async def get_sheet(self, sheet_name: str) -> SheetData:
        """Fetch every row of a sheet."""
        pass

"""Infrastructure layer implementations."""

from src.infrastructure import pdf, sheets, xlsx

__all__ = ["pdf", "xlsx", "sheets"]

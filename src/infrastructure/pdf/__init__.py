"""PDF generation infrastructure."""

from src.infrastructure.pdf.fpdf2_renderer import Fpdf2ReportRenderer

__all__ = ["Fpdf2ReportRenderer"]

"""Configuration module."""

from src.config.logging import configure_logging, get_logger, report_log_context
from src.config.settings import Settings, get_settings, reset_settings

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
    "report_log_context",
]

"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReportSettings(BaseSettings):
    """Report branding and layout configuration."""

    model_config = SettingsConfigDict(env_prefix="REPORT_")

    organization_name: str = "CONSÓRCIO AERO MARAGOGI"
    footer_text: str = "Sistema Abastech - Gestão de Frota"

    # Optional TTF font for text outside latin-1 (core fonts cover Portuguese)
    unicode_font_path: Path | None = None

    # Distance from the page bottom (mm) below which a new section starts a page
    page_break_threshold_mm: float = 40.0

    tank_locations: list[str] = ["Tanque Canteiro 01", "Tanque Canteiro 02"]
    truck_locations: list[str] = ["Comboio 01", "Comboio 02", "Comboio 03"]


class LocaleSettings(BaseSettings):
    """Number and date presentation configuration."""

    model_config = SettingsConfigDict(env_prefix="LOCALE_")

    decimal_separator: str = ","
    thousands_separator: str = "."
    month_abbreviations: list[str] = [
        "jan", "fev", "mar", "abr", "mai", "jun",
        "jul", "ago", "set", "out", "nov", "dez",
    ]

    @field_validator("month_abbreviations")
    @classmethod
    def twelve_months(cls, v: list[str]) -> list[str]:
        if len(v) != 12:
            raise ValueError("month_abbreviations must list 12 months")
        return v


class SheetsSettings(BaseSettings):
    """Spreadsheet proxy (row source) configuration."""

    model_config = SettingsConfigDict(env_prefix="SHEETS_")

    proxy_url: str = "http://localhost:54321/functions/v1/google-sheets"
    api_key: str | None = None
    timeout: float = 30.0

    # Retry on transport failures
    max_retries: int = 3
    retry_delay: float = 1.0

    # Daily stock sheet per location
    location_sheets: dict[str, str] = {
        "Tanque Canteiro 01": "EstoqueCanteiro01",
        "Tanque Canteiro 02": "EstoqueCanteiro02",
        "Comboio 01": "EstoqueComboio01",
        "Comboio 02": "EstoqueComboio02",
        "Comboio 03": "EstoqueComboio03",
    }


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]

    # Request limits
    max_rows_per_request: int = 50_000


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Abastech Fuel Reports"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["auto", "console", "json"] = "auto"

    # Sub-settings
    report: ReportSettings = Field(default_factory=ReportSettings)
    locale: LocaleSettings = Field(default_factory=LocaleSettings)
    sheets: SheetsSettings = Field(default_factory=SheetsSettings)
    api: APISettings = Field(default_factory=APISettings)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None

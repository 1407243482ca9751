"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends

from src.api.dependencies import get_app_settings, get_sheets_row_source
from src.application.dto.responses import HealthResponse, ProviderHealthResponse
from src.config import Settings
from src.core.exceptions import RowSourceError
from src.core.interfaces import IRowSource

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


def _base_health(settings: Settings, status: str = "healthy") -> HealthResponse:
    font_path = settings.report.unicode_font_path
    return HealthResponse(
        status=status,
        version=settings.app_version,
        uptime_seconds=time.time() - _start_time,
        environment=settings.environment,
        report_font="unicode" if font_path and font_path.is_file() else "core",
        stock_locations=len(settings.sheets.location_sheets),
    )


@router.get("", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """
    Basic health check.

    Returns service status, uptime and the report font in use.
    """
    return _base_health(settings)


@router.get("/sheets", response_model=HealthResponse)
async def sheets_health(
    settings: Settings = Depends(get_app_settings),
    row_source: IRowSource = Depends(get_sheets_row_source),
) -> HealthResponse:
    """
    Spreadsheet proxy health check.

    Reads the first configured daily stock sheet and reports latency.
    """
    sheet_names = list(settings.sheets.location_sheets.values())
    if not sheet_names:
        sheets = ProviderHealthResponse(
            name="sheets-proxy", available=False, error="no stock sheets configured"
        )
        return _base_health(settings, "degraded").model_copy(update={"sheets": sheets})

    start = time.time()
    try:
        await row_source.get_sheet(sheet_names[0])
        sheets = ProviderHealthResponse(
            name="sheets-proxy",
            available=True,
            latency_ms=(time.time() - start) * 1000,
        )
    except RowSourceError as e:
        sheets = ProviderHealthResponse(name="sheets-proxy", available=False, error=e.message)

    status = "healthy" if sheets.available else "degraded"
    return _base_health(settings, status).model_copy(update={"sheets": sheets})

"""Report export endpoints (file downloads)."""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from src.api.dependencies import (
    get_app_settings,
    get_export_fuel_detail_use_case,
    get_export_horimeter_report_use_case,
    get_export_stock_report_use_case,
)
from src.application.dto.requests import (
    ExportFuelDetailRequest,
    ExportHorimeterReportRequest,
    ExportStockReportRequest,
)
from src.application.dto.responses import ErrorResponse
from src.application.use_cases.export_common import ExportResult
from src.application.use_cases.export_fuel_detail import ExportFuelDetailUseCase
from src.application.use_cases.export_horimeter_report import ExportHorimeterReportUseCase
from src.application.use_cases.export_stock_report import ExportStockReportUseCase
from src.config import Settings
from src.core.exceptions import TooManyRowsError

router = APIRouter(prefix="/api/reports", tags=["reports"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid report request"},
    413: {"model": ErrorResponse, "description": "Too many rows"},
    500: {"model": ErrorResponse, "description": "Report rendering failed"},
}


def _download(result: ExportResult) -> Response:
    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{result.filename}"',
        },
    )


def _check_size(count: int, settings: Settings) -> None:
    limit = settings.api.max_rows_per_request
    if count > limit:
        raise TooManyRowsError(count, limit)


# Sync handlers: rendering is CPU-bound and runs in the threadpool.
@router.post("/stock", responses=_ERROR_RESPONSES)
def export_stock_report(
    request: ExportStockReportRequest,
    use_case: ExportStockReportUseCase = Depends(get_export_stock_report_use_case),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """Download the tank / fuel-truck stock report (PDF or XLSX)."""
    _check_size(len(request.rows), settings)
    return _download(use_case.execute(request))


@router.post("/fuel-detail", responses=_ERROR_RESPONSES)
def export_fuel_detail(
    request: ExportFuelDetailRequest,
    use_case: ExportFuelDetailUseCase = Depends(get_export_fuel_detail_use_case),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """Download the fuel detail report grouped by location, company or vehicle."""
    _check_size(len(request.rows), settings)
    return _download(use_case.execute(request))


@router.post("/horimeters", responses=_ERROR_RESPONSES)
def export_horimeter_report(
    request: ExportHorimeterReportRequest,
    use_case: ExportHorimeterReportUseCase = Depends(get_export_horimeter_report_use_case),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """Download the horimeter/odometer history report."""
    _check_size(len(request.readings), settings)
    return _download(use_case.execute(request))

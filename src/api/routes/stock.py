"""Daily stock endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_daily_stock_use_case
from src.application.dto.requests import DailyStockRequest
from src.application.dto.responses import DailyStockListResponse, ErrorResponse
from src.application.use_cases.get_daily_stock import GetDailyStockUseCase

router = APIRouter(prefix="/api/stock", tags=["stock"])


@router.get(
    "/daily",
    response_model=DailyStockListResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Location not configured"},
        502: {"model": ErrorResponse, "description": "Spreadsheet proxy error"},
        503: {"model": ErrorResponse, "description": "Spreadsheet proxy unreachable"},
    },
)
async def get_daily_stock(
    today: date | None = Query(default=None, description="Defaults to the current date"),
    location: list[str] | None = Query(default=None, description="Repeat to select locations"),
    use_case: GetDailyStockUseCase = Depends(get_daily_stock_use_case),
) -> DailyStockListResponse:
    """Today's stock row for each configured tank and fuel truck."""
    request = DailyStockRequest(today=today, locations=location)
    snapshots = await use_case.execute(request)
    return use_case.to_response(snapshots, request.today or date.today())

"""
Get Daily Stock Use Case.

Reads each location's daily stock sheet through the row source and resolves
the row that represents today.
"""

import asyncio
from datetime import date

from src.application.dto.requests import DailyStockRequest
from src.application.dto.responses import DailyStockListResponse, DailyStockResponse
from src.config import get_logger, get_settings
from src.config.settings import SheetsSettings
from src.core.entities.locale import NumberLocale
from src.core.entities.stock import DailyStockSnapshot
from src.core.exceptions import ConfigurationError, LocationNotConfiguredError
from src.core.interfaces import IRowSource
from src.core.services.record_classifier import classify_location
from src.core.services.stock_aggregator import resolve_daily_stock

logger = get_logger(__name__)


class GetDailyStockUseCase:
    """Resolve today's stock row for configured locations."""

    def __init__(
        self,
        row_source: IRowSource | None = None,
        sheets_settings: SheetsSettings | None = None,
        locale: NumberLocale | None = None,
    ):
        self._row_source = row_source
        self._sheets = sheets_settings or get_settings().sheets
        self._locale = locale

    def _get_row_source(self) -> IRowSource:
        if self._row_source is None:
            from src.application.services import get_row_source

            self._row_source = get_row_source()
        return self._row_source

    def _get_locale(self) -> NumberLocale:
        if self._locale is None:
            from src.application.services import get_number_locale

            self._locale = get_number_locale()
        return self._locale

    async def execute(self, request: DailyStockRequest) -> list[DailyStockSnapshot]:
        """Fetch every requested location concurrently, in request order."""
        today = request.today or date.today()
        locations = request.locations or list(self._sheets.location_sheets)
        if not locations:
            raise ConfigurationError(
                "No daily stock sheets configured", code="NO_STOCK_SHEETS"
            )
        for location in locations:
            if location not in self._sheets.location_sheets:
                raise LocationNotConfiguredError(location)

        logger.info("daily_stock_started", today=today.isoformat(), locations=locations)
        snapshots = await asyncio.gather(
            *(self._resolve(location, today) for location in locations)
        )
        logger.info(
            "daily_stock_complete",
            matched_today=sum(1 for s in snapshots if s.matched_today),
            total=len(snapshots),
        )
        return list(snapshots)

    async def _resolve(self, location: str, today: date) -> DailyStockSnapshot:
        sheet = await self._get_row_source().get_sheet(self._sheets.location_sheets[location])
        return resolve_daily_stock(
            sheet.rows,
            today,
            classify_location(location),
            location_name=location,
            locale=self._get_locale(),
        )

    @staticmethod
    def to_response(
        snapshots: list[DailyStockSnapshot], today: date
    ) -> DailyStockListResponse:
        """Convert snapshots to API response."""
        return DailyStockListResponse(
            today=today,
            locations=[
                DailyStockResponse(
                    location=s.location_name,
                    location_kind=s.location_kind.value,
                    date=s.date,
                    matched_today=s.matched_today,
                    previous_stock=s.previous_stock,
                    entries=s.entries,
                    exits=s.exits,
                    exits_to_trucks=s.exits_to_trucks,
                    exits_to_equipment=s.exits_to_equipment,
                    current_stock=s.current_stock,
                )
                for s in snapshots
            ],
            total_current_stock=sum(s.current_stock for s in snapshots),
        )

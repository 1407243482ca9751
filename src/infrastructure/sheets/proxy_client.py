"""
Spreadsheet proxy row source.

The sheets live behind a small HTTP function that answers
``POST {"action": "getData", "sheetName": ...}`` with ``{"headers", "rows"}``
or ``{"error": ...}``. Rows come back either as header-keyed objects or as
plain lists aligned with ``headers``.
"""

from typing import Any

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.config import get_logger
from src.config.settings import SheetsSettings, get_settings
from src.core.exceptions import RowSourceError, RowSourceUnavailableError
from src.core.interfaces.row_source import IRowSource, SheetData

logger = get_logger(__name__)

# Bookkeeping columns added by the proxy
_INTERNAL_KEYS = ("_rowIndex",)


class SheetsProxyRowSource(IRowSource):
    """Reads sheets through the spreadsheet proxy function."""

    def __init__(
        self,
        settings: SheetsSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or get_settings().sheets
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._settings.api_key:
            headers["Authorization"] = f"Bearer {self._settings.api_key}"
            headers["apikey"] = self._settings.api_key
        return headers

    def _get_retry_decorator(self) -> Any:
        """Retry connect/read failures with exponential backoff."""
        delay = self._settings.retry_delay
        return retry(
            stop=stop_after_attempt(max(1, self._settings.max_retries)),
            wait=wait_exponential(multiplier=delay, min=delay, max=delay * 8),
            retry=retry_if_exception_type(httpx.TransportError),
            before_sleep=self._log_retry,
            reraise=True,
        )

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        logger.warning(
            "sheet_fetch_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def _post(self, payload: dict[str, Any]) -> Any:
        async with httpx.AsyncClient(
            timeout=self._settings.timeout, transport=self._transport
        ) as client:
            response = await client.post(
                self._settings.proxy_url, json=payload, headers=self._headers()
            )
            response.raise_for_status()
            return response.json()

    async def get_sheet(self, sheet_name: str) -> SheetData:
        payload = {"action": "getData", "sheetName": sheet_name}
        logger.info("sheet_fetch_started", sheet=sheet_name)

        try:
            data = await self._get_retry_decorator()(self._post)(payload)
        except httpx.HTTPStatusError as e:
            logger.error(
                "sheet_fetch_http_error",
                sheet=sheet_name,
                status=e.response.status_code,
            )
            raise RowSourceError(sheet_name, f"HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error("sheet_fetch_network_error", sheet=sheet_name, error=str(e))
            raise RowSourceUnavailableError(sheet_name, str(e)) from e
        except ValueError as e:
            raise RowSourceError(sheet_name, "response is not valid JSON") from e
        sheet = self._parse(sheet_name, data)
        logger.info("sheet_fetch_complete", sheet=sheet_name, rows=len(sheet.rows))
        return sheet

    @staticmethod
    def _parse(sheet_name: str, data: Any) -> SheetData:
        if not isinstance(data, dict):
            raise RowSourceError(sheet_name, "unexpected response shape")
        if data.get("error"):
            raise RowSourceError(sheet_name, str(data["error"]))

        headers = [str(h) for h in data.get("headers") or []]
        rows: list[dict[str, Any]] = []
        for raw in data.get("rows") or []:
            if isinstance(raw, dict):
                row = {k: v for k, v in raw.items() if k not in _INTERNAL_KEYS}
            elif isinstance(raw, list):
                row = dict(zip(headers, raw))
            else:
                continue
            rows.append(row)
        return SheetData(headers=headers, rows=rows)

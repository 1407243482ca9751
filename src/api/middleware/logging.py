"""
Request logging middleware.

Every request gets an ID (taken from ``X-Request-ID`` when the caller sends
one) bound into the structlog context, so the events a use case emits while
building a report share it. File downloads are logged with their name and
size.
"""

import re
import time
import uuid
from collections.abc import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from src.config import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

_FILENAME_RE = re.compile(r'filename="([^"]+)"')


def _download_name(response: Response) -> str | None:
    match = _FILENAME_RE.search(response.headers.get("content-disposition", ""))
    return match.group(1) if match else None


class LoggingMiddleware(BaseHTTPMiddleware):
    """Request/response logging with request ID propagation."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start = time.perf_counter()
        logger.debug("request_started", method=request.method, path=request.url.path)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            raise
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        duration_ms = (time.perf_counter() - start) * 1000
        filename = _download_name(response)
        if filename:
            logger.info(
                "report_downloaded",
                path=request.url.path,
                filename=filename,
                size=response.headers.get("content-length"),
                duration_ms=round(duration_ms, 2),
                request_id=request_id,
            )
        else:
            logger.info(
                "request_completed",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                duration_ms=round(duration_ms, 2),
                request_id=request_id,
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        return response

# backend/portfolio_api/middleware/correlation.py
"""
Correlation ID and access logging middleware.

For each request:
1. Takes the caller's X-Correlation-ID (or X-Request-ID) if it is a safe
   token, otherwise generates a UUID4
2. Binds it for the request so every log line carries it
3. Turns an unhandled exception into a logged 500 ErrorDetail while the ID
   is still bound
4. Logs one access line (method, path, status, duration)
5. Echoes it in the X-Correlation-ID response header, errors included

Inbound IDs end up in log lines, so only short tokens of letters, digits
and ._:- are accepted.

Client Usage:
    curl -H "X-Correlation-ID: my-trace-123" \
        "http://localhost:8000/api/portfolios/1/performance?startDate=2024-01-01&endDate=2024-01-31"
"""

import logging
import re
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from portfolio_api.schemas.errors import internal_server_error
from portfolio_api.utils.context import correlation_scope

logger = logging.getLogger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"

MAX_CORRELATION_ID_LENGTH = 128
_SAFE_CORRELATION_ID = re.compile(r"[A-Za-z0-9._:-]+")


def is_valid_correlation_id(value: str) -> bool:
    """True for a non-empty token that is safe to write into logs."""
    return (
        0 < len(value) <= MAX_CORRELATION_ID_LENGTH
        and _SAFE_CORRELATION_ID.fullmatch(value) is not None
    )


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Binds a correlation ID per request and logs the request outcome."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Response],
    ) -> Response:
        correlation_id = self._get_correlation_id(request)

        with correlation_scope(correlation_id):
            started = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception:
                logger.exception(f"Unhandled error on {request.method} {request.url.path}")
                response = JSONResponse(
                    status_code=500,
                    content=internal_server_error().model_dump(),
                )
            duration_ms = (time.perf_counter() - started) * 1000

            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} "
                f"({duration_ms:.1f} ms)"
            )

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response

    def _get_correlation_id(self, request: Request) -> str:
        for header in (CORRELATION_ID_HEADER, REQUEST_ID_HEADER):
            value = request.headers.get(header)
            if value is None:
                continue
            if is_valid_correlation_id(value):
                return value
            logger.warning(f"Ignoring malformed {header} header")

        return str(uuid.uuid4())

"""Correlation ID middleware for request tracing.

Every request runs with a correlation ID in context: the caller's
X-Correlation-ID when it looks sane, a fresh UUID otherwise. The ID is
echoed on the response and each request is logged once when it finishes.
"""

import re
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from rental_core.utils.logging import clear_correlation_id, get_logger, set_correlation_id

CORRELATION_ID_HEADER = "X-Correlation-ID"

# Header values are copied into log lines; keep them short and printable
_VALID_CORRELATION_ID = re.compile(r"[A-Za-z0-9._:-]{1,128}")

logger = get_logger(__name__)


def accepted_correlation_id(value: str | None) -> str | None:
    """Return the caller's correlation ID if it can be trusted in logs."""
    if value is None:
        return None
    value = value.strip()
    return value if _VALID_CORRELATION_ID.fullmatch(value) else None


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Attach a correlation ID to the request context and response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        correlation_id = set_correlation_id(
            accepted_correlation_id(request.headers.get(CORRELATION_ID_HEADER))
        )
        request.state.correlation_id = correlation_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = correlation_id
            logger.info(
                "%s %s -> %s (%.1f ms)",
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - started) * 1000,
            )
            return response
        finally:
            clear_correlation_id()

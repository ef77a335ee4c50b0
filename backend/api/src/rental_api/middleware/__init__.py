"""HTTP middleware for the rental API."""

from rental_api.middleware.correlation import (
    CORRELATION_ID_HEADER,
    CorrelationIdMiddleware,
    accepted_correlation_id,
)

__all__ = ["CORRELATION_ID_HEADER", "CorrelationIdMiddleware", "accepted_correlation_id"]

"""Structured logging utilities with correlation ID support.

Provides:
- Correlation ID context management for request tracing
- Structured logging formatter for consistent log output
- Helper functions for pricing and calendar operation logging

Usage:
    from rental_core.utils.logging import get_logger, set_correlation_id

    # In middleware/request handler:
    set_correlation_id(request.headers.get("X-Correlation-ID"))

    # In service code:
    logger = get_logger(__name__)
    logger.info("Pricing stay", extra={"nights": 3})
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Any

# Context variable for correlation ID - thread-safe and async-safe
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def generate_correlation_id() -> str:
    """Generate a new correlation ID.

    Returns:
        UUID-based correlation ID string
    """
    return str(uuid.uuid4())


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set the correlation ID for the current request context.

    Args:
        correlation_id: Optional existing correlation ID. If None, generates new one.

    Returns:
        The correlation ID that was set
    """
    cid = correlation_id or generate_correlation_id()
    _correlation_id.set(cid)
    return cid


def get_correlation_id() -> str | None:
    """Get the current correlation ID."""
    return _correlation_id.get()


def clear_correlation_id() -> None:
    """Clear the correlation ID context."""
    _correlation_id.set(None)


class CorrelationIdFilter(logging.Filter):
    """Logging filter that adds correlation_id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "no-correlation-id"
        return True


class StructuredFormatter(logging.Formatter):
    """Formatter for structured log output with correlation ID."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with a correlation ID prefix.

        Args:
            record: Log record to format

        Returns:
            Formatted log string
        """
        if not hasattr(record, "correlation_id"):
            record.correlation_id = get_correlation_id() or "no-correlation-id"

        base = super().format(record)

        # Prefix makes grep/filtering by request easy
        return f"[{record.correlation_id}] {base}"


def get_logger(name: str) -> logging.Logger:
    """Get a logger with correlation ID support.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not any(isinstance(f, CorrelationIdFilter) for f in logger.filters):
        logger.addFilter(CorrelationIdFilter())

    return logger


def configure_logging(level: str | int = logging.INFO) -> None:
    """Configure root logging with the structured formatter.

    Safe to call more than once; existing root handlers get the formatter.

    Args:
        level: Log level name or number
    """
    logging.basicConfig(level=level, format=DEFAULT_FORMAT)
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers:
        handler.setFormatter(StructuredFormatter(DEFAULT_FORMAT))


def _build_message(title: str, context: dict[str, Any], skip: set[str]) -> str:
    msg_parts = [title]
    for key, value in context.items():
        if key not in skip:
            msg_parts.append(f"{key}={value}")
    return " | ".join(msg_parts)


def log_pricing_operation(
    logger: logging.Logger,
    operation: str,
    *,
    rule_id: str | None = None,
    price_type: str | None = None,
    nights: int | None = None,
    total_amount: Any | None = None,
    error: str | None = None,
    **extra: Any,
) -> None:
    """Log a pricing operation with structured context.

    Args:
        logger: Logger instance
        operation: Operation name (e.g., "calculate_price", "create_rule")
        rule_id: Pricing rule ID if relevant
        price_type: Pricing rule type if relevant
        nights: Number of nights priced
        total_amount: Computed total
        error: Error message if operation failed
        **extra: Additional context fields
    """
    context: dict[str, Any] = {"operation": operation}

    if rule_id:
        context["rule_id"] = rule_id
    if price_type:
        context["price_type"] = price_type
    if nights is not None:
        context["nights"] = nights
    if total_amount is not None:
        context["total_amount"] = str(total_amount)
    if error:
        context["error"] = error

    context.update(extra)

    message = _build_message(f"Pricing operation: {operation}", context, {"operation"})

    if error:
        logger.error(message, extra=context)
    else:
        logger.info(message, extra=context)


def log_calendar_operation(
    logger: logging.Logger,
    operation: str,
    *,
    range_id: str | None = None,
    start_date: Any | None = None,
    end_date: Any | None = None,
    result: str | None = None,
    error: str | None = None,
    **extra: Any,
) -> None:
    """Log a blocked-date / calendar operation with structured context.

    Args:
        logger: Logger instance
        operation: Operation name (e.g., "block_dates", "check_stay")
        range_id: Blocked range ID if relevant
        start_date: Start of the affected period
        end_date: End of the affected period
        result: Outcome (e.g., "available", "unavailable", "not_found")
        error: Error message if operation failed
        **extra: Additional context fields
    """
    context: dict[str, Any] = {"operation": operation}

    if range_id:
        context["range_id"] = range_id
    if start_date is not None:
        context["start_date"] = str(start_date)
    if end_date is not None:
        context["end_date"] = str(end_date)
    if result:
        context["result"] = result
    if error:
        context["error"] = error

    context.update(extra)

    message = _build_message(f"Calendar operation: {operation}", context, {"operation"})

    if error:
        logger.error(message, extra=context)
    elif result == "not_found":
        logger.warning(message, extra=context)
    else:
        logger.info(message, extra=context)

"""Unit tests for structured logging helpers."""

import logging

import pytest

from rental_core.utils.logging import (
    StructuredFormatter,
    clear_correlation_id,
    get_correlation_id,
    get_logger,
    log_calendar_operation,
    log_pricing_operation,
    set_correlation_id,
)


@pytest.fixture(autouse=True)
def clean_correlation_id() -> None:
    clear_correlation_id()


class TestCorrelationId:
    """Tests for correlation id context."""

    def test_set_and_get(self) -> None:
        assert set_correlation_id("req-1") == "req-1"
        assert get_correlation_id() == "req-1"

    def test_generates_when_missing(self) -> None:
        cid = set_correlation_id()
        assert cid
        assert get_correlation_id() == cid

    def test_formatter_prefixes_id(self) -> None:
        set_correlation_id("req-2")
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "hello", None, None)
        assert StructuredFormatter("%(message)s").format(record) == "[req-2] hello"


class TestOperationLogging:
    """Tests for pricing and calendar log helpers."""

    def test_pricing_operation(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("test.pricing")
        with caplog.at_level(logging.INFO, logger="test.pricing"):
            log_pricing_operation(logger, "calculate_price", nights=3, total_amount="1050.00")

        record = caplog.records[-1]
        assert record.levelno == logging.INFO
        assert "Pricing operation: calculate_price" in record.getMessage()
        assert "nights=3" in record.getMessage()
        assert record.total_amount == "1050.00"

    def test_pricing_error_logged_as_error(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("test.pricing")
        with caplog.at_level(logging.INFO, logger="test.pricing"):
            log_pricing_operation(logger, "create_rule", error="boom")
        assert caplog.records[-1].levelno == logging.ERROR

    def test_calendar_not_found_is_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("test.calendar")
        with caplog.at_level(logging.INFO, logger="test.calendar"):
            log_calendar_operation(logger, "unblock_dates", range_id="r1", result="not_found")

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.range_id == "r1"

"""Pytest configuration and fixtures for the rental booking backend tests.

This module provides reusable fixtures for testing:
- DynamoDB mocking with moto
- Pricing rule and blocked range factories
- A FastAPI test client wired to the mocked tables
"""

import datetime as dt
import os
from decimal import Decimal
from typing import Any, Callable, Generator

import boto3
import pytest
from moto import mock_aws

# === Environment Setup ===

# Set environment variables for testing before imports
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-1")
os.environ.setdefault("DYNAMODB_TABLE_PREFIX", "test-rental")

# Only set fake credentials for moto if no real credentials are present
if not os.environ.get("AWS_PROFILE") and not os.environ.get("AWS_ACCESS_KEY_ID"):
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

from rental_core.models import BlockedDateRange, PriceType, PricingRule  # noqa: E402

TABLE_PREFIX = os.environ["DYNAMODB_TABLE_PREFIX"]


# === Service Singletons ===


@pytest.fixture(autouse=True)
def reset_service_singletons() -> Generator[None, None, None]:
    """Reset cached services before and after each test.

    Tests using mock_aws get a fresh DynamoDB service created inside the
    mock context rather than one left over from a previous test.
    """
    from rental_api.dependencies import reset_services

    reset_services()
    yield
    reset_services()


# === DynamoDB Fixtures ===


@pytest.fixture
def aws_credentials() -> None:
    """Mocked AWS Credentials for moto."""
    if not os.environ.get("AWS_PROFILE"):
        os.environ["AWS_ACCESS_KEY_ID"] = "testing"
        os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
        os.environ["AWS_SECURITY_TOKEN"] = "testing"
        os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "eu-west-1"


@pytest.fixture
def dynamodb_client(aws_credentials: None) -> Generator[Any, None, None]:
    """Create a mocked DynamoDB client."""
    with mock_aws():
        client = boto3.client("dynamodb", region_name="eu-west-1")
        yield client


@pytest.fixture
def create_tables(dynamodb_client: Any) -> None:
    """Create the pricing rule and blocked date tables."""
    tables = [
        ("pricing-rules", "rule_id"),
        ("blocked-dates", "range_id"),
    ]
    for table, key in tables:
        dynamodb_client.create_table(
            TableName=f"{TABLE_PREFIX}-{table}",
            KeySchema=[{"AttributeName": key, "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": key, "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )


@pytest.fixture
def db_service(create_tables: None) -> Any:
    """DynamoDBService bound to the mocked tables."""
    from rental_core.services.dynamodb import get_dynamodb_service

    return get_dynamodb_service()


# === Domain Factories ===


@pytest.fixture
def make_rule() -> Callable[..., PricingRule]:
    """Factory for pricing rules with sensible defaults."""
    counter = {"n": 0}

    def _make(
        price_type: PriceType,
        daily_rate: str | int,
        *,
        min_nights: int | None = None,
        start_date: dt.date | None = None,
        end_date: dt.date | None = None,
        is_active: bool = True,
        rule_id: str | None = None,
    ) -> PricingRule:
        counter["n"] += 1
        return PricingRule(
            id=rule_id or f"{price_type.value}-{counter['n']}",
            name=f"{price_type.value} rule",
            price_type=price_type,
            daily_rate=Decimal(str(daily_rate)),
            min_nights=min_nights,
            start_date=start_date,
            end_date=end_date,
            is_active=is_active,
        )

    return _make


@pytest.fixture
def make_blocked() -> Callable[..., BlockedDateRange]:
    """Factory for blocked date ranges."""

    def _make(start: dt.date | str, end: dt.date | str, reason: str | None = None) -> BlockedDateRange:
        return BlockedDateRange(start_date=start, end_date=end, reason=reason)

    return _make


@pytest.fixture
def sample_rules(make_rule: Callable[..., PricingRule]) -> list[PricingRule]:
    """A realistic rule set: base, weekend, Christmas, summer, weekly package."""
    return [
        make_rule(PriceType.BASE, "350.00", rule_id="base"),
        make_rule(PriceType.WEEKEND, "450.00", rule_id="weekend"),
        make_rule(
            PriceType.HOLIDAY,
            "600.00",
            start_date=dt.date(2025, 12, 24),
            end_date=dt.date(2025, 12, 25),
            rule_id="natal",
        ),
        make_rule(
            PriceType.HIGH_SEASON,
            "500.00",
            start_date=dt.date(2025, 12, 20),
            end_date=dt.date(2026, 2, 28),
            rule_id="verao",
        ),
        make_rule(PriceType.PACKAGE, "300.00", min_nights=7, rule_id="semana"),
    ]


# === API Fixtures ===


@pytest.fixture
def client(create_tables: None) -> Any:
    """FastAPI test client backed by the mocked DynamoDB tables."""
    from fastapi.testclient import TestClient

    from rental_api.main import app

    return TestClient(app)


@pytest.fixture
def create_rule(client: Any) -> Callable[..., dict[str, Any]]:
    """Create a pricing rule through the API and return its JSON."""

    def _create(**payload: Any) -> dict[str, Any]:
        response = client.post("/api/pricing-rules", json=payload)
        assert response.status_code == 201, response.text
        result: dict[str, Any] = response.json()
        return result

    return _create

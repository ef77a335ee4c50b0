"""Unit tests for PricingService with DynamoDB mocked by moto."""

import datetime as dt
from decimal import Decimal
from typing import Any

import pytest

from rental_core.models import (
    BookingError,
    ErrorCode,
    PriceType,
    PricingRuleCreate,
    PricingRuleUpdate,
)
from rental_core.services.pricing import PricingService


@pytest.fixture
def service(db_service: Any) -> PricingService:
    """PricingService over the mocked tables."""
    return PricingService(db_service)


class TestCreateRule:
    """Tests for PricingService.create_rule."""

    def test_create_and_get(self, service: PricingService) -> None:
        rule = service.create_rule(
            PricingRuleCreate(name="Diária", price_type=PriceType.BASE, daily_rate=Decimal("380.00"))
        )

        assert rule.id
        assert rule.created_at is not None

        stored = service.get_rule(rule.id)
        assert stored is not None
        assert stored.name == "Diária"
        assert stored.daily_rate == Decimal("380.00")
        assert stored.is_active is True
        assert stored.min_nights is None

    def test_create_holiday_keeps_window(self, service: PricingService) -> None:
        rule = service.create_rule(
            PricingRuleCreate(
                name="Natal",
                price_type=PriceType.HOLIDAY,
                daily_rate=Decimal("500.00"),
                start_date="2025-12-24",
                end_date="2025-12-26",
            )
        )
        stored = service.get_rule(rule.id)
        assert stored is not None
        assert stored.start_date == dt.date(2025, 12, 24)
        assert stored.end_date == dt.date(2025, 12, 26)

    def test_package_without_min_nights_rejected(self, service: PricingService) -> None:
        with pytest.raises(BookingError) as exc_info:
            service.create_rule(
                PricingRuleCreate(name="Semana", price_type=PriceType.PACKAGE, daily_rate=Decimal("300"))
            )
        assert exc_info.value.code == ErrorCode.INVALID_PRICING_RULE
        assert service.get_all_rules() == []

    def test_get_missing_rule(self, service: PricingService) -> None:
        assert service.get_rule("missing") is None


class TestListRules:
    """Tests for listing rules."""

    def test_active_only_filter(self, service: PricingService) -> None:
        service.create_rule(
            PricingRuleCreate(name="Base", price_type=PriceType.BASE, daily_rate=Decimal("350"))
        )
        service.create_rule(
            PricingRuleCreate(
                name="Old base",
                price_type=PriceType.BASE,
                daily_rate=Decimal("300"),
                is_active=False,
            )
        )

        assert len(service.get_all_rules()) == 2
        active = service.get_all_rules(active_only=True)
        assert [r.name for r in active] == ["Base"]

    def test_active_rules_oldest_first_within_type(
        self, service: PricingService, db_service: Any
    ) -> None:
        for rule_id, created in [("newer", "2025-05-02T10:00:00+00:00"), ("older", "2025-05-01T10:00:00+00:00")]:
            db_service.put_item(
                PricingService.TABLE,
                {
                    "rule_id": rule_id,
                    "name": rule_id,
                    "price_type": "holiday",
                    "daily_rate": Decimal("500"),
                    "start_date": "2025-12-24",
                    "end_date": "2025-12-25",
                    "is_active": "true",
                    "created_at": created,
                },
            )

        assert [r.id for r in service.get_active_rules()] == ["older", "newer"]
        assert [r.id for r in service.get_all_rules()] == ["newer", "older"]

    def test_reads_legacy_string_flags(self, service: PricingService, db_service: Any) -> None:
        db_service.put_item(
            PricingService.TABLE,
            {
                "rule_id": "legacy",
                "name": "Legacy",
                "price_type": "base",
                "daily_rate": Decimal("300"),
                "is_active": "false",
            },
        )
        rule = service.get_rule("legacy")
        assert rule is not None
        assert rule.is_active is False
        assert rule.created_at is None


class TestUpdateRule:
    """Tests for PricingService.update_rule."""

    def test_partial_update(self, service: PricingService) -> None:
        rule = service.create_rule(
            PricingRuleCreate(name="Base", price_type=PriceType.BASE, daily_rate=Decimal("350"))
        )

        updated = service.update_rule(rule.id, PricingRuleUpdate(daily_rate=Decimal("390.00")))

        assert updated.daily_rate == Decimal("390.00")
        assert updated.name == "Base"
        assert updated.updated_at is not None
        stored = service.get_rule(rule.id)
        assert stored is not None
        assert stored.daily_rate == Decimal("390.00")

    def test_deactivate(self, service: PricingService) -> None:
        rule = service.create_rule(
            PricingRuleCreate(name="Base", price_type=PriceType.BASE, daily_rate=Decimal("350"))
        )
        service.update_rule(rule.id, PricingRuleUpdate(is_active=False))
        assert service.get_active_rules() == []

    def test_clearing_required_field_rejected(self, service: PricingService) -> None:
        rule = service.create_rule(
            PricingRuleCreate(
                name="Semana",
                price_type=PriceType.PACKAGE,
                daily_rate=Decimal("300"),
                min_nights=7,
            )
        )
        with pytest.raises(BookingError) as exc_info:
            service.update_rule(rule.id, PricingRuleUpdate(min_nights=None))
        assert exc_info.value.code == ErrorCode.INVALID_PRICING_RULE

        stored = service.get_rule(rule.id)
        assert stored is not None
        assert stored.min_nights == 7

    def test_update_missing_rule(self, service: PricingService) -> None:
        with pytest.raises(BookingError) as exc_info:
            service.update_rule("missing", PricingRuleUpdate(name="x"))
        assert exc_info.value.code == ErrorCode.PRICING_RULE_NOT_FOUND


class TestDeleteRule:
    """Tests for PricingService.delete_rule."""

    def test_delete(self, service: PricingService) -> None:
        rule = service.create_rule(
            PricingRuleCreate(name="Base", price_type=PriceType.BASE, daily_rate=Decimal("350"))
        )
        service.delete_rule(rule.id)
        assert service.get_rule(rule.id) is None

    def test_delete_missing_rule(self, service: PricingService) -> None:
        with pytest.raises(BookingError) as exc_info:
            service.delete_rule("missing")
        assert exc_info.value.code == ErrorCode.PRICING_RULE_NOT_FOUND


class TestCalculatePrice:
    """Tests for PricingService.calculate_price."""

    def test_uses_stored_active_rules(self, service: PricingService) -> None:
        service.create_rule(
            PricingRuleCreate(name="Base", price_type=PriceType.BASE, daily_rate=Decimal("400"))
        )
        service.create_rule(
            PricingRuleCreate(
                name="Natal",
                price_type=PriceType.HOLIDAY,
                daily_rate=Decimal("600"),
                start_date=dt.date(2025, 12, 25),
                end_date=dt.date(2025, 12, 25),
            )
        )

        # Wednesday 24 and Thursday 25 December 2025
        calc = service.calculate_price(dt.date(2025, 12, 24), dt.date(2025, 12, 26))

        assert calc.nights == 2
        assert calc.total_amount == Decimal("1000")
        assert [n.price_type for n in calc.breakdown] == [PriceType.BASE, PriceType.HOLIDAY]

    def test_empty_store_uses_fallback(self, service: PricingService) -> None:
        calc = service.calculate_price(dt.date(2025, 6, 9), dt.date(2025, 6, 10))
        assert calc.total_amount == Decimal("350.00")

"""Pricing engine and pricing rule service.

The engine prices a stay night by night under five kinds of rules:

1. A package whose ``min_nights`` the stay reaches replaces everything: the
   whole stay is charged at the package rate. When several packages qualify,
   the one with the largest ``min_nights`` wins.
2. Otherwise each night takes, in order of precedence, the rate of a holiday
   rule whose window contains it, then a high season rule, then the weekend
   rate (Saturday/Sunday), then the base rate.

Missing base and weekend rules fall back to ``FALLBACK_BASE_RATE`` and to
``base * WEEKEND_MULTIPLIER``. When several holiday (or high season) rules
cover the same night, the first one in input order wins.

The engine functions are pure and never raise; a stay without nights
costs zero.
"""

import datetime as dt
import uuid
from collections.abc import Iterable
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from rental_core.models import (
    DATED_PRICE_TYPES,
    BookingError,
    ErrorCode,
    NightlyRate,
    PriceCalculation,
    PriceType,
    PricingRule,
    PricingRuleCreate,
    PricingRuleUpdate,
)
from rental_core.utils.dates import is_weekend, parse_timestamp, stay_nights
from rental_core.utils.logging import get_logger, log_pricing_operation

if TYPE_CHECKING:
    from .dynamodb import DynamoDBService

logger = get_logger(__name__)

FALLBACK_BASE_RATE = Decimal("350.00")
WEEKEND_MULTIPLIER = Decimal("1.2")

# Per-night precedence of the dated rule kinds
NIGHTLY_PRECEDENCE: tuple[PriceType, ...] = (PriceType.HOLIDAY, PriceType.HIGH_SEASON)

CLEARABLE_FIELDS = frozenset({"min_nights", "start_date", "end_date"})

RulesByType = dict[PriceType, list[PricingRule]]


def group_active_rules(rules: Iterable[PricingRule]) -> RulesByType:
    """Bucket active rules by price type, keeping input order.

    Every PriceType gets a bucket, even when empty.
    """
    grouped: RulesByType = {price_type: [] for price_type in PriceType}
    for rule in rules:
        if rule.is_active:
            grouped[rule.price_type].append(rule)
    return grouped


def resolve_base_rate(grouped: RulesByType) -> tuple[Decimal, str | None]:
    """Get the base nightly rate and the rule it came from."""
    base_rules = grouped[PriceType.BASE]
    if base_rules:
        return base_rules[0].daily_rate, base_rules[0].id
    return FALLBACK_BASE_RATE, None


def resolve_weekend_rate(
    grouped: RulesByType,
    base_rate: Decimal,
) -> tuple[Decimal, str | None]:
    """Get the weekend nightly rate and the rule it came from."""
    weekend_rules = grouped[PriceType.WEEKEND]
    if weekend_rules:
        return weekend_rules[0].daily_rate, weekend_rules[0].id
    return base_rate * WEEKEND_MULTIPLIER, None


def select_package(grouped: RulesByType, night_count: int) -> PricingRule | None:
    """Pick the package rule that applies to a stay of night_count nights.

    Returns:
        The qualifying package with the largest min_nights, or None
    """
    eligible = [
        rule
        for rule in grouped[PriceType.PACKAGE]
        if rule.min_nights is not None and rule.min_nights <= night_count
    ]
    if not eligible:
        return None
    # max() keeps the first of equal candidates
    return max(eligible, key=lambda rule: rule.min_nights or 0)


def _price_night(
    night: dt.date,
    grouped: RulesByType,
    base: tuple[Decimal, str | None],
    weekend: tuple[Decimal, str | None],
) -> NightlyRate:
    for price_type in NIGHTLY_PRECEDENCE:
        for rule in grouped[price_type]:
            if rule.covers(night):
                return NightlyRate(
                    date=night,
                    rate=rule.daily_rate,
                    price_type=price_type,
                    rule_id=rule.id,
                )

    if is_weekend(night):
        rate, rule_id = weekend
        return NightlyRate(date=night, rate=rate, price_type=PriceType.WEEKEND, rule_id=rule_id)

    rate, rule_id = base
    return NightlyRate(date=night, rate=rate, price_type=PriceType.BASE, rule_id=rule_id)


def compute_price_breakdown(
    check_in: dt.date,
    check_out: dt.date,
    rules: Iterable[PricingRule],
) -> PriceCalculation:
    """Price a stay and keep the per-night trace.

    Args:
        check_in: Check-in date
        check_out: Check-out date (never priced)
        rules: Pricing rules; inactive ones are ignored

    Returns:
        PriceCalculation whose total_amount is the stay price
    """
    grouped = group_active_rules(rules)
    base = resolve_base_rate(grouped)
    weekend = resolve_weekend_rate(grouped, base[0])
    nights = stay_nights(check_in, check_out)

    package = select_package(grouped, len(nights)) if nights else None
    if package is not None:
        breakdown = [
            NightlyRate(
                date=night,
                rate=package.daily_rate,
                price_type=PriceType.PACKAGE,
                rule_id=package.id,
            )
            for night in nights
        ]
        total = package.daily_rate * len(nights)
    else:
        breakdown = [_price_night(night, grouped, base, weekend) for night in nights]
        total = sum((night.rate for night in breakdown), Decimal("0"))

    return PriceCalculation(
        check_in=check_in,
        check_out=check_out,
        nights=len(nights),
        base_rate=base[0],
        weekend_rate=weekend[0],
        package_rule_id=package.id if package is not None else None,
        breakdown=breakdown,
        total_amount=total,
    )


def compute_total_price(
    check_in: dt.date,
    check_out: dt.date,
    rules: Iterable[PricingRule],
) -> Decimal:
    """Compute the total price of a stay.

    Returns 0 when check_out <= check_in.
    """
    return compute_price_breakdown(check_in, check_out, rules).total_amount


def validate_rule_shape(
    price_type: PriceType,
    min_nights: int | None,
    start_date: dt.date | None,
    end_date: dt.date | None,
) -> None:
    """Check that a rule carries the fields its price type needs.

    Raises:
        BookingError: INVALID_PRICING_RULE when a field is missing or the
            date window is inverted
    """
    if price_type == PriceType.PACKAGE and min_nights is None:
        raise BookingError(
            ErrorCode.INVALID_PRICING_RULE,
            details={"min_nights": "required for package rules"},
        )
    if price_type in DATED_PRICE_TYPES:
        if start_date is None or end_date is None:
            raise BookingError(
                ErrorCode.INVALID_PRICING_RULE,
                details={"date_window": f"start_date and end_date required for {price_type.value} rules"},
            )
        if end_date < start_date:
            raise BookingError(
                ErrorCode.INVALID_PRICING_RULE,
                details={"date_window": "end_date must not be before start_date"},
            )


class PricingService:
    """Service for pricing rules and stay price calculation."""

    TABLE = "pricing-rules"

    def __init__(self, db: "DynamoDBService") -> None:
        """Initialize pricing service.

        Args:
            db: DynamoDB service instance
        """
        self.db = db

    def get_all_rules(self, active_only: bool = False) -> list[PricingRule]:
        """Get pricing rules, newest first.

        Args:
            active_only: Only return active rules

        Returns:
            List of PricingRule objects
        """
        rules = [self._item_to_rule(item) for item in self.db.scan(self.TABLE)]
        if active_only:
            rules = [r for r in rules if r.is_active]

        return sorted(rules, key=_created_sort_key, reverse=True)

    def get_active_rules(self) -> list[PricingRule]:
        """Get active rules in the order the engine should see them.

        Ordered by price type, then oldest first, so that among overlapping
        holiday or high season rules the earliest created one wins.
        """
        rules = [r for r in self.get_all_rules() if r.is_active]
        return sorted(rules, key=lambda r: (r.price_type.value, _created_sort_key(r)))

    def get_rule(self, rule_id: str) -> PricingRule | None:
        """Get a single pricing rule.

        Args:
            rule_id: Rule identifier

        Returns:
            PricingRule or None if not found
        """
        item = self.db.get_item(self.TABLE, {"rule_id": rule_id})
        if not item:
            return None
        return self._item_to_rule(item)

    def create_rule(self, data: PricingRuleCreate) -> PricingRule:
        """Create a new pricing rule.

        Args:
            data: Rule data

        Returns:
            The stored PricingRule

        Raises:
            BookingError: INVALID_PRICING_RULE for malformed rules
        """
        validate_rule_shape(data.price_type, data.min_nights, data.start_date, data.end_date)

        now = dt.datetime.now(dt.timezone.utc)
        rule = PricingRule(
            id=str(uuid.uuid4()),
            name=data.name,
            price_type=data.price_type,
            daily_rate=data.daily_rate,
            min_nights=data.min_nights,
            start_date=data.start_date,
            end_date=data.end_date,
            is_active=data.is_active,
            created_at=now,
            updated_at=now,
        )
        self.db.create_item(self.TABLE, self._rule_to_item(rule))

        log_pricing_operation(
            logger,
            "create_rule",
            rule_id=rule.id,
            price_type=rule.price_type.value,
        )
        return rule

    def update_rule(self, rule_id: str, updates: PricingRuleUpdate) -> PricingRule:
        """Apply a partial update to a pricing rule.

        Args:
            rule_id: Rule identifier
            updates: Fields to change

        Returns:
            The updated PricingRule

        Raises:
            BookingError: PRICING_RULE_NOT_FOUND or INVALID_PRICING_RULE
        """
        existing = self.get_rule(rule_id)
        if existing is None:
            raise BookingError(ErrorCode.PRICING_RULE_NOT_FOUND, details={"rule_id": rule_id})

        # Only the optional rule fields can be cleared with an explicit null
        changes = {
            key: value
            for key, value in updates.model_dump(exclude_unset=True).items()
            if value is not None or key in CLEARABLE_FIELDS
        }
        changes["updated_at"] = dt.datetime.now(dt.timezone.utc)
        rule = existing.model_copy(update=changes)
        validate_rule_shape(rule.price_type, rule.min_nights, rule.start_date, rule.end_date)

        if not self.db.replace_item(self.TABLE, self._rule_to_item(rule)):
            raise BookingError(ErrorCode.PRICING_RULE_NOT_FOUND, details={"rule_id": rule_id})

        log_pricing_operation(
            logger,
            "update_rule",
            rule_id=rule_id,
            price_type=rule.price_type.value,
            fields=",".join(sorted(k for k in changes if k != "updated_at")),
        )
        return rule

    def delete_rule(self, rule_id: str) -> None:
        """Delete a pricing rule.

        Raises:
            BookingError: PRICING_RULE_NOT_FOUND if the rule does not exist
        """
        if not self.db.delete_item(self.TABLE, rule_id):
            raise BookingError(ErrorCode.PRICING_RULE_NOT_FOUND, details={"rule_id": rule_id})

        log_pricing_operation(logger, "delete_rule", rule_id=rule_id)

    def calculate_price(
        self,
        check_in: dt.date,
        check_out: dt.date,
    ) -> PriceCalculation:
        """Price a stay with the currently active rules.

        Args:
            check_in: Check-in date
            check_out: Check-out date

        Returns:
            PriceCalculation with per-night breakdown
        """
        calculation = compute_price_breakdown(check_in, check_out, self.get_active_rules())
        log_pricing_operation(
            logger,
            "calculate_price",
            nights=calculation.nights,
            total_amount=calculation.total_amount,
            package_rule_id=calculation.package_rule_id or "none",
        )
        return calculation

    def _item_to_rule(self, item: dict[str, Any]) -> PricingRule:
        """Convert DynamoDB item to PricingRule model."""
        # Handle is_active as string or boolean (DynamoDB may store as either)
        is_active_raw = item.get("is_active", True)
        if isinstance(is_active_raw, str):
            is_active = is_active_raw.lower() == "true"
        else:
            is_active = bool(is_active_raw)

        min_nights = item.get("min_nights")

        return PricingRule(
            id=item["rule_id"],
            name=item.get("name", ""),
            price_type=PriceType(item["price_type"]),
            daily_rate=Decimal(str(item["daily_rate"])),
            min_nights=int(min_nights) if min_nights is not None else None,
            start_date=item.get("start_date"),
            end_date=item.get("end_date"),
            is_active=is_active,
            created_at=parse_timestamp(item.get("created_at")),
            updated_at=parse_timestamp(item.get("updated_at")),
        )

    def _rule_to_item(self, rule: PricingRule) -> dict[str, Any]:
        """Convert PricingRule model to DynamoDB item."""
        item: dict[str, Any] = {
            "rule_id": rule.id,
            "name": rule.name,
            "price_type": rule.price_type.value,
            "daily_rate": rule.daily_rate,
            "is_active": rule.is_active,
        }
        if rule.min_nights is not None:
            item["min_nights"] = rule.min_nights
        if rule.start_date is not None:
            item["start_date"] = rule.start_date.isoformat()
        if rule.end_date is not None:
            item["end_date"] = rule.end_date.isoformat()
        if rule.created_at is not None:
            item["created_at"] = rule.created_at.isoformat()
        if rule.updated_at is not None:
            item["updated_at"] = rule.updated_at.isoformat()
        return item


_EPOCH = dt.datetime.min.replace(tzinfo=dt.timezone.utc)


def _created_sort_key(rule: PricingRule) -> dt.datetime:
    return rule.created_at or _EPOCH

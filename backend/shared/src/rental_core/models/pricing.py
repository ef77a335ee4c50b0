"""Pricing rule models and price calculation results.

Amounts are Decimal in the domain and serialize to JSON numbers. The
currency is whatever the configured rules are expressed in (BRL for the
property this backend was built for).
"""

import datetime as dt
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator

from rental_core.models.enums import PriceType
from rental_core.utils.dates import ranges_overlap_or_contain, to_calendar_date

Money = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]

DEFAULT_CURRENCY = "BRL"


def _normalize_optional_boundary(value: Any) -> Any:
    if value is None or value == "":
        return None
    if isinstance(value, (str, dt.date)):
        return to_calendar_date(value)
    return value


class PricingRule(BaseModel):
    """A configured pricing rule.

    ``min_nights`` only matters for packages; ``start_date``/``end_date``
    (inclusive) only matter for holiday and high season rules.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price_type: PriceType
    daily_rate: Money = Field(ge=0)
    min_nights: int | None = Field(default=None, gt=0)
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    is_active: bool = True
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalize_boundary(cls, v: Any) -> Any:
        """Reduce stored window boundaries to plain calendar dates."""
        return _normalize_optional_boundary(v)

    def covers(self, day: dt.date) -> bool:
        """Check whether the rule's date window contains day.

        Rules without a complete window cover nothing.
        """
        if self.start_date is None or self.end_date is None:
            return False
        return ranges_overlap_or_contain(day, self.start_date, self.end_date)


class PricingRuleCreate(BaseModel):
    """Data for creating a pricing rule."""

    model_config = ConfigDict(
        # strict=False allows string-to-date coercion from JSON
        strict=False,
        json_schema_extra={
            "examples": [
                {
                    "name": "Natal",
                    "price_type": "holiday",
                    "daily_rate": 500.0,
                    "start_date": "2025-12-24",
                    "end_date": "2025-12-26",
                    "is_active": True,
                }
            ]
        },
    )

    name: str = Field(..., min_length=1, max_length=120)
    price_type: PriceType
    daily_rate: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    min_nights: int | None = Field(default=None, gt=0)
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    is_active: bool = True

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalize_boundary(cls, v: Any) -> Any:
        """Reduce window boundaries to plain calendar dates."""
        return _normalize_optional_boundary(v)


class PricingRuleUpdate(BaseModel):
    """Partial update for a pricing rule. Unset fields are left untouched."""

    model_config = ConfigDict(strict=False)

    name: str | None = Field(default=None, min_length=1, max_length=120)
    price_type: PriceType | None = None
    daily_rate: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    min_nights: int | None = Field(default=None, gt=0)
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    is_active: bool | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalize_boundary(cls, v: Any) -> Any:
        """Reduce window boundaries to plain calendar dates."""
        return _normalize_optional_boundary(v)


class NightlyRate(BaseModel):
    """Price applied to one night of a stay."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    rate: Money
    price_type: PriceType
    rule_id: str | None = None


class PriceCalculation(BaseModel):
    """Priced stay with its per-night breakdown.

    When a package applies, every night carries the package rate and
    ``package_rule_id`` is set.
    """

    model_config = ConfigDict(frozen=True)

    check_in: dt.date
    check_out: dt.date
    nights: int = Field(ge=0)
    base_rate: Money
    weekend_rate: Money
    package_rule_id: str | None = None
    breakdown: list[NightlyRate] = Field(default_factory=list)
    total_amount: Money = Field(ge=0)
    currency: str = DEFAULT_CURRENCY

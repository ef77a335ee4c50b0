"""Pricing endpoints for rule management and stay price calculation.

Provides REST endpoints for:
- Listing, creating, updating and deleting pricing rules
- Pricing a stay with the active rules

Amounts are decimal currency units (BRL), e.g. 350.0.
"""

import datetime as dt

from fastapi import APIRouter, Depends, Query, Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from rental_api.dependencies import get_pricing_service
from rental_api.models.pricing import PricingRuleListResponse
from rental_core.models import (
    BookingError,
    ErrorCode,
    PriceCalculation,
    PricingRule,
    PricingRuleCreate,
    PricingRuleUpdate,
)
from rental_core.services.pricing import PricingService

router = APIRouter(tags=["pricing"])


@router.get(
    "/pricing-rules",
    summary="List pricing rules",
    description="""
List configured pricing rules, newest first.

**Notes:**
- `active_only=true` returns only the rules the price calculation uses
""",
    response_model=PricingRuleListResponse,
)
async def list_pricing_rules(
    active_only: bool = Query(False, description="Only return active rules"),
    service: PricingService = Depends(get_pricing_service),
) -> PricingRuleListResponse:
    """List pricing rules."""
    rules = service.get_all_rules(active_only=active_only)
    return PricingRuleListResponse(rules=rules, total_count=len(rules))


@router.post(
    "/pricing-rules",
    summary="Create pricing rule",
    description="""
Create a pricing rule.

**Notes:**
- `package` rules need `min_nights`
- `holiday` and `high_season` rules need `start_date` <= `end_date` (inclusive window)
""",
    status_code=HTTP_201_CREATED,
    response_model=PricingRule,
    responses={
        400: {"description": "Rule is missing fields required by its price type"},
    },
)
async def create_pricing_rule(
    data: PricingRuleCreate,
    service: PricingService = Depends(get_pricing_service),
) -> PricingRule:
    """Create a pricing rule."""
    return service.create_rule(data)


@router.patch(
    "/pricing-rules/{rule_id}",
    summary="Update pricing rule",
    description="Partially update a pricing rule. Fields left out are unchanged.",
    response_model=PricingRule,
    responses={
        400: {"description": "Updated rule is not valid for its price type"},
        404: {"description": "Pricing rule not found"},
    },
)
async def update_pricing_rule(
    rule_id: str,
    updates: PricingRuleUpdate,
    service: PricingService = Depends(get_pricing_service),
) -> PricingRule:
    """Update a pricing rule."""
    return service.update_rule(rule_id, updates)


@router.delete(
    "/pricing-rules/{rule_id}",
    summary="Delete pricing rule",
    status_code=HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Pricing rule not found"}},
)
async def delete_pricing_rule(
    rule_id: str,
    service: PricingService = Depends(get_pricing_service),
) -> Response:
    """Delete a pricing rule."""
    service.delete_rule(rule_id)
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.get(
    "/pricing/calculate",
    summary="Calculate stay price",
    description="""
Calculate the total price of a stay with the active pricing rules.

**Notes:**
- check_out is exclusive (the check-out day is never priced)
- A qualifying package prices the whole stay at the package rate
- Otherwise each night uses holiday, high season, weekend or base rate, in that order
""",
    response_description="Price with per-night breakdown",
    response_model=PriceCalculation,
    responses={
        200: {
            "description": "Price calculated successfully",
            "content": {
                "application/json": {
                    "example": {
                        "check_in": "2025-12-24",
                        "check_out": "2025-12-26",
                        "nights": 2,
                        "base_rate": 350.0,
                        "weekend_rate": 420.0,
                        "package_rule_id": None,
                        "breakdown": [
                            {"date": "2025-12-24", "rate": 350.0, "price_type": "base", "rule_id": None},
                            {"date": "2025-12-25", "rate": 500.0, "price_type": "holiday", "rule_id": "natal"},
                        ],
                        "total_amount": 850.0,
                        "currency": "BRL",
                    }
                }
            },
        },
        400: {"description": "check_out must be after check_in"},
    },
)
async def calculate_price(
    check_in: dt.date = Query(
        ...,
        description="Check-in date (YYYY-MM-DD)",
        examples=["2025-12-24"],
    ),
    check_out: dt.date = Query(
        ...,
        description="Check-out date (YYYY-MM-DD)",
        examples=["2025-12-26"],
    ),
    service: PricingService = Depends(get_pricing_service),
) -> PriceCalculation:
    """Calculate price for a date range."""
    if check_out <= check_in:
        raise BookingError(
            ErrorCode.INVALID_DATE_RANGE,
            details={"check_in": check_in.isoformat(), "check_out": check_out.isoformat()},
        )

    return service.calculate_price(check_in, check_out)

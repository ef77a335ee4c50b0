"""Backend services for rental pricing and availability."""

from .availability import (
    AvailabilityService,
    compute_disabled_predicate,
    enumerate_blocked_dates,
    find_unavailable_nights,
)
from .dynamodb import DynamoDBService, get_dynamodb_service, reset_dynamodb_service
from .holidays import (
    easter_sunday,
    get_public_holiday_calendar,
    get_public_holidays,
    holidays_for_years,
)
from .pricing import (
    FALLBACK_BASE_RATE,
    WEEKEND_MULTIPLIER,
    PricingService,
    compute_price_breakdown,
    compute_total_price,
)

__all__ = [
    "AvailabilityService",
    "DynamoDBService",
    "PricingService",
    "get_dynamodb_service",
    "reset_dynamodb_service",
    # Pricing engine
    "FALLBACK_BASE_RATE",
    "WEEKEND_MULTIPLIER",
    "compute_price_breakdown",
    "compute_total_price",
    # Availability engine
    "compute_disabled_predicate",
    "enumerate_blocked_dates",
    "find_unavailable_nights",
    # Holiday overlay
    "easter_sunday",
    "get_public_holiday_calendar",
    "get_public_holidays",
    "holidays_for_years",
]

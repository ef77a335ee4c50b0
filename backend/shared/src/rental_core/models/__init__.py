"""Pydantic models for rental booking data entities."""

from .availability import (
    BlockedDateRange,
    BlockedDateRangeCreate,
    CalendarDay,
    PublicHoliday,
    StayAvailability,
)
from .enums import DATED_PRICE_TYPES, PriceType
from .errors import (
    BookingError,
    ErrorCode,
    ERROR_MESSAGES,
    ERROR_RECOVERY,
    ErrorResponse,
)
from .pricing import (
    DEFAULT_CURRENCY,
    Money,
    NightlyRate,
    PriceCalculation,
    PricingRule,
    PricingRuleCreate,
    PricingRuleUpdate,
)

__all__ = [
    # Enums
    "DATED_PRICE_TYPES",
    "PriceType",
    # Pricing
    "DEFAULT_CURRENCY",
    "Money",
    "NightlyRate",
    "PriceCalculation",
    "PricingRule",
    "PricingRuleCreate",
    "PricingRuleUpdate",
    # Availability
    "BlockedDateRange",
    "BlockedDateRangeCreate",
    "CalendarDay",
    "PublicHoliday",
    "StayAvailability",
    # Errors
    "BookingError",
    "ErrorCode",
    "ERROR_MESSAGES",
    "ERROR_RECOVERY",
    "ErrorResponse",
]

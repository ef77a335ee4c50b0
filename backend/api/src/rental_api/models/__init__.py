"""API-specific request/response models.

Domain models (PricingRule, BlockedDateRange, PriceCalculation, ...) live in
rental_core.models and are reused here where they fit.

Modules:
- pricing: Pricing rule list responses
- availability: Blocked dates, calendar and holiday responses
"""

__all__: list[str] = []

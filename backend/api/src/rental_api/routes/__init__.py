"""API routes package.

Routers are organized by domain:

- pricing: Pricing rules and stay price calculation
- availability: Blocked dates, stay availability and monthly calendar
- holidays: Public holiday overlay for the calendar

All routers are registered in main.py with /api prefix.
"""

from rental_api.routes.availability import router as availability_router
from rental_api.routes.holidays import router as holidays_router
from rental_api.routes.pricing import router as pricing_router

__all__ = [
    "availability_router",
    "holidays_router",
    "pricing_router",
]

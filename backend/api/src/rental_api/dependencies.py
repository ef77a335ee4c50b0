"""FastAPI dependency injection providers for shared services.

Service instances are cached with @lru_cache so every request reuses the
same objects.

Service Dependency Graph:
    DynamoDBService (singleton via get_dynamodb_service)
        └── PricingService
                └── AvailabilityService

Testing:
    Use reset_services() to clear cached instances between tests.
"""

from functools import lru_cache

from rental_core.services.availability import AvailabilityService
from rental_core.services.dynamodb import get_dynamodb_service
from rental_core.services.pricing import PricingService


@lru_cache
def get_pricing_service() -> PricingService:
    """Get cached PricingService instance."""
    return PricingService(db=get_dynamodb_service())


@lru_cache
def get_availability_service() -> AvailabilityService:
    """Get cached AvailabilityService instance.

    Returns:
        AvailabilityService configured with DynamoDB and PricingService.
    """
    return AvailabilityService(
        db=get_dynamodb_service(),
        pricing=get_pricing_service(),
    )


def reset_services() -> None:
    """Clear all cached service instances.

    Also resets the underlying DynamoDB singleton.
    """
    from rental_core.services.dynamodb import reset_dynamodb_service

    get_pricing_service.cache_clear()
    get_availability_service.cache_clear()

    reset_dynamodb_service()

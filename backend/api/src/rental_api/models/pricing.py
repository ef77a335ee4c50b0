"""API models for pricing endpoints.

Response models are not strict: FastAPI re-validates the JSON-mode dump of
every response against them.
"""

from pydantic import BaseModel, ConfigDict, Field

from rental_core.models.pricing import DEFAULT_CURRENCY, PricingRule


class PricingRuleListResponse(BaseModel):
    """Configured pricing rules, newest first."""

    model_config = ConfigDict(
        strict=False,
        json_schema_extra={
            "examples": [
                {
                    "rules": [
                        {
                            "id": "5f0c7d1e-0d5b-4a53-9a43-0a3c1f0f6a11",
                            "name": "Diária padrão",
                            "price_type": "base",
                            "daily_rate": 350.0,
                            "min_nights": None,
                            "start_date": None,
                            "end_date": None,
                            "is_active": True,
                        }
                    ],
                    "total_count": 1,
                    "currency": "BRL",
                }
            ]
        },
    )

    rules: list[PricingRule] = Field(..., description="Pricing rules")
    total_count: int = Field(..., ge=0, description="Number of rules returned")
    currency: str = Field(default=DEFAULT_CURRENCY, description="Currency of the daily rates")

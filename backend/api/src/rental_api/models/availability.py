"""API models for blocked dates, calendar and holiday endpoints.

Response models are not strict: FastAPI re-validates the JSON-mode dump of
every response against them.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from rental_core.models.availability import BlockedDateRange, CalendarDay, PublicHoliday


class BlockedDatesResponse(BaseModel):
    """Blocked ranges plus every individual blocked date."""

    model_config = ConfigDict(
        strict=False,
        json_schema_extra={
            "examples": [
                {
                    "blocked_ranges": [
                        {
                            "id": "b7d5d0c2-8f5e-4d55-bb0b-3f1b2f1d9a10",
                            "start_date": "2025-07-01",
                            "end_date": "2025-07-03",
                            "reason": "Manutenção",
                            "reservation_id": None,
                            "created_at": "2025-06-01T12:00:00Z",
                        }
                    ],
                    "blocked_dates": ["2025-07-01", "2025-07-02", "2025-07-03"],
                }
            ]
        },
    )

    blocked_ranges: list[BlockedDateRange] = Field(
        ...,
        description="Blocked ranges ordered by start date",
    )
    blocked_dates: list[dt.date] = Field(
        ...,
        description="Every date covered by at least one range, ascending",
    )


class CalendarResponse(BaseModel):
    """Monthly booking calendar."""

    model_config = ConfigDict(strict=False)

    month: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}$",
        description="Month in YYYY-MM format",
        examples=["2025-07"],
    )
    days: list[CalendarDay] = Field(..., description="Days of the month in order")
    available_count: int = Field(..., ge=0, description="Selectable days")
    disabled_count: int = Field(..., ge=0, description="Past or blocked days")
    blocked_count: int = Field(..., ge=0, description="Days inside a blocked range")


class HolidaysResponse(BaseModel):
    """Public holidays used to highlight calendar days."""

    model_config = ConfigDict(strict=False)

    year: int = Field(..., description="First year covered")
    holidays: list[PublicHoliday] = Field(..., description="Holidays in date order")

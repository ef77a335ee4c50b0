"""Blocked date ranges and calendar availability models."""

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rental_core.models.pricing import Money
from rental_core.utils.dates import to_calendar_date


class BlockedDateRange(BaseModel):
    """Inclusive date interval during which the property cannot be booked.

    Ranges are created by an admin (manual block) or for a confirmed
    reservation. They may overlap; nothing merges them.
    """

    model_config = ConfigDict(frozen=True)

    start_date: dt.date
    end_date: dt.date
    id: str | None = None
    reason: str | None = None
    reservation_id: str | None = None
    created_at: dt.datetime | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalize_boundary(cls, v: Any) -> Any:
        """Map stored boundaries (UTC midnight instants, ISO strings) to dates."""
        if isinstance(v, (str, dt.date)):
            return to_calendar_date(v)
        return v

    def contains(self, day: dt.date) -> bool:
        """Check whether day lies inside the range (inclusive)."""
        return self.start_date <= day <= self.end_date


class BlockedDateRangeCreate(BaseModel):
    """Data for blocking a date range."""

    model_config = ConfigDict(
        # strict=False allows string-to-date coercion from JSON
        strict=False,
        json_schema_extra={
            "examples": [
                {
                    "start_date": "2025-07-01",
                    "end_date": "2025-07-05",
                    "reason": "Manutenção da piscina",
                }
            ]
        },
    )

    start_date: dt.date
    end_date: dt.date
    reason: str | None = Field(default=None, max_length=500)
    reservation_id: str | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalize_boundary(cls, v: Any) -> Any:
        """Map boundaries to the calendar day they denote."""
        if isinstance(v, (str, dt.date)):
            return to_calendar_date(v)
        return v


class PublicHoliday(BaseModel):
    """Public holiday used to highlight calendar days.

    Presentational only; pricing uses admin-configured holiday rules.
    """

    model_config = ConfigDict(frozen=True)

    date: dt.date
    name: str


class CalendarDay(BaseModel):
    """Single day of the booking calendar."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    is_disabled: bool
    is_past: bool
    is_blocked: bool
    is_holiday: bool = False
    holiday_name: str | None = None


class StayAvailability(BaseModel):
    """Availability and price of a requested stay."""

    model_config = ConfigDict(frozen=True)

    check_in: dt.date
    check_out: dt.date
    is_available: bool
    unavailable_dates: list[dt.date] = Field(default_factory=list)
    total_nights: int = Field(ge=0)
    total_amount: Money

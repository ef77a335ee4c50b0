"""Availability endpoints for blocked dates and the booking calendar.

Provides REST endpoints for:
- Listing, creating and deleting blocked date ranges
- Checking whether a stay can be booked (with its price)
- Monthly calendar with disabled/blocked/holiday flags

All dates are in YYYY-MM-DD format.
"""

import datetime as dt
import re

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT, HTTP_400_BAD_REQUEST

from rental_api.dependencies import get_availability_service
from rental_api.models.availability import BlockedDatesResponse, CalendarResponse
from rental_core.models import BlockedDateRange, BlockedDateRangeCreate, StayAvailability
from rental_core.services.availability import AvailabilityService, enumerate_blocked_dates

router = APIRouter(tags=["availability"])


@router.get(
    "/blocked-dates",
    summary="List blocked dates",
    description="""
List blocked date ranges ordered by start date, plus every individual
blocked date (useful for reserved-date markers).

**Notes:**
- Ranges are inclusive on both ends
- Overlapping ranges are returned as stored; `blocked_dates` has no duplicates
""",
    response_model=BlockedDatesResponse,
)
async def list_blocked_dates(
    service: AvailabilityService = Depends(get_availability_service),
) -> BlockedDatesResponse:
    """List blocked date ranges."""
    ranges = service.list_blocked_ranges()
    return BlockedDatesResponse(
        blocked_ranges=ranges,
        blocked_dates=enumerate_blocked_dates(ranges),
    )


@router.post(
    "/blocked-dates",
    summary="Block dates",
    description="Block an inclusive date range. A single day has start_date == end_date.",
    status_code=HTTP_201_CREATED,
    response_model=BlockedDateRange,
    responses={400: {"description": "end_date is before start_date"}},
)
async def create_blocked_dates(
    data: BlockedDateRangeCreate,
    service: AvailabilityService = Depends(get_availability_service),
) -> BlockedDateRange:
    """Block a date range."""
    return service.block_dates(data)


@router.delete(
    "/blocked-dates/{range_id}",
    summary="Unblock dates",
    status_code=HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Blocked range not found"}},
)
async def delete_blocked_dates(
    range_id: str,
    service: AvailabilityService = Depends(get_availability_service),
) -> Response:
    """Delete a blocked date range."""
    service.delete_blocked_range(range_id)
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.get(
    "/availability",
    summary="Check stay availability",
    description="""
Check whether a stay can be booked and price it.

**Notes:**
- check_out is exclusive (the check-out day may be blocked)
- Nights before today or inside a blocked range are listed in `unavailable_dates`
""",
    response_model=StayAvailability,
    responses={400: {"description": "check_out must be after check_in"}},
)
async def check_availability(
    check_in: dt.date = Query(
        ...,
        description="Check-in date (YYYY-MM-DD)",
        examples=["2025-07-15"],
    ),
    check_out: dt.date = Query(
        ...,
        description="Check-out date (YYYY-MM-DD)",
        examples=["2025-07-22"],
    ),
    service: AvailabilityService = Depends(get_availability_service),
) -> StayAvailability:
    """Check availability for a date range."""
    return service.check_stay(check_in, check_out)


@router.get(
    "/availability/calendar/{month}",
    summary="Get monthly calendar",
    description="""
Get the booking calendar for a month.

Each day says whether it is disabled (past or blocked), blocked, and
whether it is a public holiday (highlight only, does not affect prices).

**Notes:**
- Month format: YYYY-MM (e.g., 2025-07)
""",
    response_model=CalendarResponse,
    responses={400: {"description": "Invalid month format (expected YYYY-MM)"}},
)
async def get_calendar(
    month: str,
    service: AvailabilityService = Depends(get_availability_service),
) -> CalendarResponse:
    """Get monthly calendar view."""
    if not re.match(r"^\d{4}-\d{2}$", month):
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST,
            detail="Invalid month format. Expected YYYY-MM (e.g., 2025-07)",
        )

    year, month_num = map(int, month.split("-"))
    if month_num < 1 or month_num > 12:
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST,
            detail="Invalid month: month must be between 01 and 12",
        )

    days = service.get_calendar(year, month_num)

    return CalendarResponse(
        month=month,
        days=days,
        available_count=sum(1 for d in days if not d.is_disabled),
        disabled_count=sum(1 for d in days if d.is_disabled),
        blocked_count=sum(1 for d in days if d.is_blocked),
    )

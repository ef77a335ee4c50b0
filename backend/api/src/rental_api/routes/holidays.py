"""Public holiday endpoint for calendar highlighting."""

from fastapi import APIRouter, HTTPException, Query
from starlette.status import HTTP_400_BAD_REQUEST

from rental_api.models.availability import HolidaysResponse
from rental_core.services.holidays import holidays_for_years

router = APIRouter(tags=["holidays"])

MIN_YEAR = 1900
MAX_YEAR = 2200


@router.get(
    "/holidays/{year}",
    summary="Get public holidays",
    description="""
Get Brazilian national holidays for highlighting calendar days.

These dates are presentational only; holiday pricing comes from
`holiday` pricing rules.
""",
    response_model=HolidaysResponse,
    responses={400: {"description": "Year out of supported range"}},
)
async def get_holidays(
    year: int,
    years: int = Query(1, ge=1, le=5, description="Number of consecutive years"),
) -> HolidaysResponse:
    """Get public holidays starting at year."""
    if year < MIN_YEAR or year + years - 1 > MAX_YEAR:
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST,
            detail=f"Year must be between {MIN_YEAR} and {MAX_YEAR}",
        )

    return HolidaysResponse(year=year, holidays=holidays_for_years(year, years))

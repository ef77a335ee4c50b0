"""Availability engine and blocked date service.

A calendar date is disabled when it is before today or falls inside any
blocked range. Ranges are checked independently; overlapping or adjacent
ranges are never merged.
"""

import calendar
import datetime as dt
import uuid
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from rental_core.models import (
    BlockedDateRange,
    BlockedDateRangeCreate,
    BookingError,
    CalendarDay,
    ErrorCode,
    StayAvailability,
)
from rental_core.services.holidays import get_public_holiday_calendar
from rental_core.utils.dates import (
    each_day_of_interval,
    parse_timestamp,
    stay_nights,
    to_local_date,
)
from rental_core.utils.logging import get_logger, log_calendar_operation

if TYPE_CHECKING:
    from .dynamodb import DynamoDBService
    from .pricing import PricingService

logger = get_logger(__name__)

DisabledPredicate = Callable[[dt.date], bool]


def compute_disabled_predicate(
    today: dt.date | dt.datetime,
    blocked_ranges: Iterable[BlockedDateRange],
) -> DisabledPredicate:
    """Build the per-date disabling rule used by the booking calendar.

    Args:
        today: Current local date (time of day is ignored)
        blocked_ranges: Blocked ranges; read once, when the predicate is built

    Returns:
        Function returning True for dates that cannot be selected
    """
    first_open_day = to_local_date(today)
    spans = tuple((r.start_date, r.end_date) for r in blocked_ranges)

    def is_disabled(day: dt.date) -> bool:
        day = to_local_date(day)
        if day < first_open_day:
            return True
        return any(start <= day <= end for start, end in spans)

    return is_disabled


def enumerate_blocked_dates(blocked_ranges: Iterable[BlockedDateRange]) -> list[dt.date]:
    """List every calendar date covered by at least one blocked range.

    Returns:
        Ascending list without duplicates
    """
    covered: set[dt.date] = set()
    for blocked in blocked_ranges:
        covered.update(each_day_of_interval(blocked.start_date, blocked.end_date))
    return sorted(covered)


def find_unavailable_nights(
    check_in: dt.date,
    check_out: dt.date,
    today: dt.date | dt.datetime,
    blocked_ranges: Iterable[BlockedDateRange],
) -> list[dt.date]:
    """List the nights of a stay that the calendar would reject."""
    is_disabled = compute_disabled_predicate(today, blocked_ranges)
    return [night for night in stay_nights(check_in, check_out) if is_disabled(night)]


class AvailabilityService:
    """Service for blocked date ranges and calendar availability."""

    TABLE = "blocked-dates"

    def __init__(
        self,
        db: "DynamoDBService",
        pricing: "PricingService",
    ) -> None:
        """Initialize availability service.

        Args:
            db: DynamoDB service instance
            pricing: Pricing service instance
        """
        self.db = db
        self.pricing = pricing

    def list_blocked_ranges(self) -> list[BlockedDateRange]:
        """Get all blocked ranges ordered by start date."""
        ranges = [self._item_to_range(item) for item in self.db.scan(self.TABLE)]
        return sorted(ranges, key=lambda r: (r.start_date, r.end_date))

    def get_blocked_range(self, range_id: str) -> BlockedDateRange | None:
        """Get a single blocked range.

        Args:
            range_id: Range identifier

        Returns:
            BlockedDateRange or None if not found
        """
        item = self.db.get_item(self.TABLE, {"range_id": range_id})
        if not item:
            return None
        return self._item_to_range(item)

    def block_dates(self, data: BlockedDateRangeCreate) -> BlockedDateRange:
        """Block a date range (owner use, maintenance, confirmed reservation).

        A single-day block has start_date == end_date.

        Raises:
            BookingError: INVALID_DATE_RANGE if end_date is before start_date
        """
        if data.end_date < data.start_date:
            raise BookingError(
                ErrorCode.INVALID_DATE_RANGE,
                details={
                    "start_date": data.start_date.isoformat(),
                    "end_date": data.end_date.isoformat(),
                },
            )

        blocked = BlockedDateRange(
            id=str(uuid.uuid4()),
            start_date=data.start_date,
            end_date=data.end_date,
            reason=data.reason,
            reservation_id=data.reservation_id,
            created_at=dt.datetime.now(dt.timezone.utc),
        )
        self.db.create_item(self.TABLE, self._range_to_item(blocked))

        log_calendar_operation(
            logger,
            "block_dates",
            range_id=blocked.id,
            start_date=blocked.start_date,
            end_date=blocked.end_date,
        )
        return blocked

    def delete_blocked_range(self, range_id: str) -> None:
        """Unblock a date range.

        Raises:
            BookingError: BLOCKED_RANGE_NOT_FOUND if the range does not exist
        """
        if not self.db.delete_item(self.TABLE, range_id):
            log_calendar_operation(logger, "unblock_dates", range_id=range_id, result="not_found")
            raise BookingError(ErrorCode.BLOCKED_RANGE_NOT_FOUND, details={"range_id": range_id})

        log_calendar_operation(logger, "unblock_dates", range_id=range_id, result="deleted")

    def check_stay(
        self,
        check_in: dt.date,
        check_out: dt.date,
        today: dt.date | None = None,
    ) -> StayAvailability:
        """Check whether a stay can be booked and price it.

        Args:
            check_in: Check-in date
            check_out: Check-out date (exclusive)
            today: Reference date, defaults to the current date

        Returns:
            StayAvailability with the rejected nights and the stay price

        Raises:
            BookingError: INVALID_DATE_RANGE if check_out <= check_in
        """
        if check_out <= check_in:
            raise BookingError(
                ErrorCode.INVALID_DATE_RANGE,
                details={"check_in": check_in.isoformat(), "check_out": check_out.isoformat()},
            )

        unavailable = find_unavailable_nights(
            check_in,
            check_out,
            today or dt.date.today(),
            self.list_blocked_ranges(),
        )
        calculation = self.pricing.calculate_price(check_in, check_out)

        log_calendar_operation(
            logger,
            "check_stay",
            start_date=check_in,
            end_date=check_out,
            result="unavailable" if unavailable else "available",
        )

        return StayAvailability(
            check_in=check_in,
            check_out=check_out,
            is_available=not unavailable,
            unavailable_dates=unavailable,
            total_nights=calculation.nights,
            total_amount=calculation.total_amount,
        )

    def get_calendar(
        self,
        year: int,
        month: int,
        today: dt.date | None = None,
    ) -> list[CalendarDay]:
        """Build the booking calendar of one month.

        Args:
            year: Calendar year
            month: Month number (1-12)
            today: Reference date, defaults to the current date

        Returns:
            One CalendarDay per day of the month
        """
        today = today or dt.date.today()
        blocked_ranges = self.list_blocked_ranges()
        is_disabled = compute_disabled_predicate(today, blocked_ranges)
        holidays = {h.date: h.name for h in get_public_holiday_calendar(year)}

        _, last_day = calendar.monthrange(year, month)
        days = each_day_of_interval(dt.date(year, month, 1), dt.date(year, month, last_day))

        return [
            CalendarDay(
                date=day,
                is_disabled=is_disabled(day),
                is_past=day < today,
                is_blocked=any(r.contains(day) for r in blocked_ranges),
                is_holiday=day in holidays,
                holiday_name=holidays.get(day),
            )
            for day in days
        ]

    def _item_to_range(self, item: dict[str, Any]) -> BlockedDateRange:
        """Convert DynamoDB item to BlockedDateRange model."""
        return BlockedDateRange(
            id=item["range_id"],
            start_date=item["start_date"],
            end_date=item["end_date"],
            reason=item.get("reason"),
            reservation_id=item.get("reservation_id"),
            created_at=parse_timestamp(item.get("created_at")),
        )

    def _range_to_item(self, blocked: BlockedDateRange) -> dict[str, Any]:
        """Convert BlockedDateRange model to DynamoDB item."""
        item: dict[str, Any] = {
            "range_id": blocked.id,
            "start_date": blocked.start_date.isoformat(),
            "end_date": blocked.end_date.isoformat(),
        }
        if blocked.reason:
            item["reason"] = blocked.reason
        if blocked.reservation_id:
            item["reservation_id"] = blocked.reservation_id
        if blocked.created_at is not None:
            item["created_at"] = blocked.created_at.isoformat()
        return item

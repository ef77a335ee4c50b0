"""Utility helpers for the rental booking backend."""

from .dates import (
    each_day_of_interval,
    is_weekend,
    ranges_overlap_or_contain,
    stay_nights,
    to_calendar_date,
    to_local_date,
)

__all__ = [
    "each_day_of_interval",
    "is_weekend",
    "ranges_overlap_or_contain",
    "stay_nights",
    "to_calendar_date",
    "to_local_date",
]

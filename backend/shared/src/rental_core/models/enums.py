"""Enumeration types for rental booking data models."""

from enum import Enum


class PriceType(str, Enum):
    """Kind of pricing rule.

    Determines which branch of the pricing algorithm a rule feeds.
    """

    BASE = "base"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"
    HIGH_SEASON = "high_season"
    PACKAGE = "package"


# Rule kinds that only apply inside a [start_date, end_date] window
DATED_PRICE_TYPES: frozenset[PriceType] = frozenset(
    {PriceType.HOLIDAY, PriceType.HIGH_SEASON}
)

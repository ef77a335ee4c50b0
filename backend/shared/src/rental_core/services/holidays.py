"""Brazilian national holidays for calendar highlighting.

These dates only decorate the booking calendar. They do not change prices:
holiday pricing comes exclusively from admin-configured ``holiday`` rules.
"""

import datetime as dt
from functools import lru_cache

from rental_core.models import PublicHoliday

# (month, day, name)
FIXED_HOLIDAYS: tuple[tuple[int, int, str], ...] = (
    (1, 1, "Confraternização Universal"),
    (4, 21, "Tiradentes"),
    (5, 1, "Dia do Trabalho"),
    (9, 7, "Independência do Brasil"),
    (10, 12, "Nossa Senhora Aparecida"),
    (11, 2, "Finados"),
    (11, 15, "Proclamação da República"),
    (12, 25, "Natal"),
)

# (days from Easter Sunday, name)
MOVABLE_HOLIDAYS: tuple[tuple[int, str], ...] = (
    (-48, "Carnaval (segunda-feira)"),
    (-47, "Carnaval (terça-feira)"),
    (-2, "Paixão de Cristo"),
    (60, "Corpus Christi"),
)


@lru_cache(maxsize=None)
def easter_sunday(year: int) -> dt.date:
    """Compute Easter Sunday for a Gregorian year.

    Uses the anonymous Gregorian computus (Meeus/Jones/Butcher).
    """
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return dt.date(year, month, day + 1)


@lru_cache(maxsize=None)
def get_public_holiday_calendar(year: int) -> tuple[PublicHoliday, ...]:
    """Get the named public holidays of a year, in date order."""
    easter = easter_sunday(year)
    holidays = [
        PublicHoliday(date=dt.date(year, month, day), name=name)
        for month, day, name in FIXED_HOLIDAYS
    ]
    holidays.extend(
        PublicHoliday(date=easter + dt.timedelta(days=offset), name=name)
        for offset, name in MOVABLE_HOLIDAYS
    )
    return tuple(sorted(holidays, key=lambda h: h.date))


def get_public_holidays(year: int) -> list[dt.date]:
    """Get the public holiday dates of a year, in date order."""
    return [holiday.date for holiday in get_public_holiday_calendar(year)]


def holidays_for_years(start_year: int, count: int = 2) -> list[PublicHoliday]:
    """Get the public holidays of count consecutive years.

    The booking calendar shows the current and the next year.
    """
    return [
        holiday
        for year in range(start_year, start_year + count)
        for holiday in get_public_holiday_calendar(year)
    ]

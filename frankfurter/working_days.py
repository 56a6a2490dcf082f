"""Market calendar: the days on which the European Central Bank publishes rates."""

import datetime as dt
from collections.abc import Collection


def easter_sunday(year: int) -> dt.date:
    """Compute Easter Sunday with the anonymous Gregorian algorithm."""
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    o = h + l - 7 * m + 114
    return dt.date(year, o // 31, o % 31 + 1)


def good_friday(year: int) -> dt.date:
    return easter_sunday(year) - dt.timedelta(days=2)


def easter_monday(year: int) -> dt.date:
    return easter_sunday(year) + dt.timedelta(days=1)


def closing_days(year: int) -> list[dt.date]:
    """Return the TARGET closing days of a year.

    Args:
        year: Calendar year.

    Returns:
        New Year's Day, Good Friday, Easter Monday, Labour Day, Christmas Day and
        Christmas Holiday, in that order.
    """
    return [
        dt.date(year, 1, 1),
        good_friday(year),
        easter_monday(year),
        dt.date(year, 5, 1),
        dt.date(year, 12, 25),
        dt.date(year, 12, 26),
    ]


def is_weekend(date: dt.date) -> bool:
    return date.weekday() >= 5


def is_working_day(date: dt.date, closed: Collection[dt.date]) -> bool:
    return not is_weekend(date) and date not in closed


def years_between(start_date: dt.date, end_date: dt.date) -> list[int]:
    """Return every year from start to end, inclusive, in either argument order."""
    if start_date > end_date:
        return years_between(end_date, start_date)
    return list(range(start_date.year, end_date.year + 1))


def working_days(start_date: dt.date, end_date: dt.date) -> list[dt.date]:
    """Return the working days between two dates, inclusive, in either argument order."""
    if start_date > end_date:
        return working_days(end_date, start_date)

    closed = {day for year in years_between(start_date, end_date) for day in closing_days(year)}
    days = []
    date = start_date
    while date <= end_date:
        if is_working_day(date, closed):
            days.append(date)
        date += dt.timedelta(days=1)
    return days

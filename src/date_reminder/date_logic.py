from __future__ import annotations

import re
from datetime import date, datetime
from zoneinfo import ZoneInfo


ALLOWED_LEAP_DAY_RULES = {"feb28", "mar1"}
DATE_STRING_PATTERN = re.compile(r"(?:\d{1,4}-)?(?P<month>\d{1,2})-(?P<day>\d{1,2})", re.ASCII)


class InvalidDateError(ValueError):
    pass


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def validate_month_day(month: int, day: int) -> None:
    if month < 1 or month > 12:
        raise InvalidDateError(f"Invalid month: {month}")

    if day < 1 or day > 31:
        raise InvalidDateError(f"Invalid day: {day}")

    try:
        date(2000, month, day)
    except ValueError as exc:
        raise InvalidDateError(f"Invalid month/day combination: {month:02d}-{day:02d}") from exc


def parse_date_string(value: str) -> tuple[int, int]:
    """Return (month, day) from an ``MM-DD`` or legacy ``YYYY-MM-DD`` string.

    The year of the legacy form does not take part in the annual recurrence,
    so it is checked to be numeric and then dropped.
    """
    match = DATE_STRING_PATTERN.fullmatch(value.strip())
    if match is None:
        raise InvalidDateError(f"Date must use MM-DD or YYYY-MM-DD: {value!r}")

    month, day = int(match.group("month")), int(match.group("day"))
    validate_month_day(month, day)
    return month, day


def occurrence_in_year(month: int, day: int, year: int, leap_day_rule: str) -> date:
    if month == 2 and day == 29 and not is_leap_year(year):
        if leap_day_rule == "feb28":
            return date(year, 2, 28)
        if leap_day_rule == "mar1":
            return date(year, 3, 1)
        raise InvalidDateError(f"Unsupported leap day rule: {leap_day_rule}")
    return date(year, month, day)


def next_occurrence(month: int, day: int, today: date, leap_day_rule: str = "mar1") -> date:
    this_year = occurrence_in_year(month, day, today.year, leap_day_rule)
    if this_year >= today:
        return this_year
    return occurrence_in_year(month, day, today.year + 1, leap_day_rule)


def days_until_fixed(month: int, day: int, today: date, leap_day_rule: str = "mar1") -> int:
    nxt = next_occurrence(month, day, today, leap_day_rule)
    return (nxt - today).days


def days_until(value: str, today: date, leap_day_rule: str = "mar1") -> int:
    month, day = parse_date_string(value)
    return days_until_fixed(month, day, today, leap_day_rule)


def today_in_timezone(timezone_name: str | None) -> date:
    if timezone_name is None:
        return datetime.now().date()
    return datetime.now(ZoneInfo(timezone_name)).date()

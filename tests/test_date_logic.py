from datetime import date

import pytest

from date_reminder.date_logic import (
    InvalidDateError,
    days_until,
    days_until_fixed,
    next_occurrence,
    parse_date_string,
)


def test_days_until_fixed_future_date_same_year() -> None:
    assert days_until_fixed(3, 14, date(2026, 3, 1)) == 13


def test_days_until_fixed_rolls_to_next_year_after_passed() -> None:
    today = date(2026, 6, 1)

    assert days_until_fixed(1, 2, today) == (date(2027, 1, 2) - today).days


def test_days_until_fixed_is_zero_on_the_day() -> None:
    today = date(2026, 12, 25)

    assert days_until_fixed(today.month, today.day, today) == 0


def test_days_until_fixed_never_negative_across_year() -> None:
    today = date(2026, 7, 15)
    for month in range(1, 13):
        for day in (1, 15, 28):
            assert 0 <= days_until_fixed(month, day, today) <= 365


def test_days_until_ignores_legacy_year() -> None:
    today = date(2026, 12, 20)

    assert days_until("12-25", today) == 5
    assert days_until("1987-12-25", today) == 5
    assert days_until("2030-12-25", today) == days_until("12-25", today)


def test_days_until_yesterday_is_almost_a_year_away() -> None:
    today = date(2026, 3, 2)

    assert days_until("03-01", today) == 364


def test_parse_date_string_short_and_legacy() -> None:
    assert parse_date_string("03-14") == (3, 14)
    assert parse_date_string("1990-03-14") == (3, 14)


@pytest.mark.parametrize(
    "value",
    ["", "14", "2026-03-14-01", "ab-cd", "13-01", "02-30", "00-10", "²-25", "1" * 5000 + "-25", "12-٣"],
)
def test_parse_date_string_rejects_malformed(value: str) -> None:
    with pytest.raises(InvalidDateError):
        parse_date_string(value)


def test_feb_29_maps_to_mar_1_on_non_leap_year_by_default() -> None:
    today = date(2025, 2, 27)

    assert next_occurrence(2, 29, today) == date(2025, 3, 1)
    assert days_until("02-29", today) == 2


def test_feb_29_maps_to_feb_28_when_configured() -> None:
    today = date(2025, 2, 27)

    assert days_until("02-29", today, "feb28") == 1


def test_feb_29_keeps_date_on_leap_year() -> None:
    today = date(2028, 2, 27)

    assert next_occurrence(2, 29, today) == date(2028, 2, 29)

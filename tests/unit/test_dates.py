from __future__ import annotations

import datetime as dt

import pytest

from gymms.domain import dates
from gymms.domain.dates import NO_DATE, Date, Ordering


@pytest.mark.parametrize(
    ("day", "month", "year", "expected"),
    [
        (29, 2, 2024, True),
        (29, 2, 2023, False),
        (31, 4, 2024, False),
        (29, 2, 2000, True),
        (29, 2, 1900, False),
        (31, 12, 2100, True),
        (1, 1, 1900, True),
        (1, 1, 1899, False),
        (1, 1, 2101, False),
        (0, 1, 2024, False),
        (1, 13, 2024, False),
        (0, 0, 0, False),
    ],
)
def test_is_valid(day: int, month: int, year: int, expected: bool) -> None:
    assert dates.is_valid(day, month, year) is expected


def test_days_in_month_handles_leap_years() -> None:
    assert dates.days_in_month(2, 2024) == 29
    assert dates.days_in_month(2, 2023) == 28
    assert dates.days_in_month(4, 2023) == 30
    assert dates.days_in_month(12, 2023) == 31


def test_compare_is_lexicographic_on_year_month_day() -> None:
    a = Date(day=31, month=1, year=2024)
    b = Date(day=1, month=2, year=2024)
    assert dates.compare(a, b) is Ordering.LESS
    assert dates.compare(b, a) is Ordering.GREATER
    assert dates.compare(a, Date(day=31, month=1, year=2024)) is Ordering.EQUAL
    assert dates.compare(Date(day=1, month=1, year=2025), Date(day=31, month=12, year=2024)) is Ordering.GREATER


def test_age_counts_birthday_only_once_reached() -> None:
    dob = Date(day=15, month=6, year=2000)
    assert dates.age(dob, Date(day=14, month=6, year=2024)) == 23
    assert dates.age(dob, Date(day=15, month=6, year=2024)) == 24
    assert dates.age(dob, Date(day=1, month=1, year=2025)) == 24


def test_today_reads_the_clock() -> None:
    assert dates.today() == Date.from_date(dt.date.today())


def test_sentinel_is_not_a_valid_date() -> None:
    assert NO_DATE.is_sentinel
    assert not NO_DATE.is_valid()
    assert str(NO_DATE) == "--/--/----"


def test_date_is_immutable() -> None:
    value = Date(day=1, month=2, year=2024)
    with pytest.raises(Exception):
        value.day = 5  # type: ignore[misc]


def test_date_str_and_conversion() -> None:
    value = Date(day=5, month=3, year=2024)
    assert str(value) == "05/03/2024"
    assert value.to_date() == dt.date(2024, 3, 5)


@pytest.mark.parametrize("text", ["05/03/2024", "5 3 2024", "05-03-2024", " 5/3/2024 "])
def test_parse_date_accepts_common_separators(text: str) -> None:
    assert dates.parse_date(text) == Date(day=5, month=3, year=2024)


@pytest.mark.parametrize("text", ["2024-03-05", "31/04/2024", "hello", "29/02/2023", ""])
def test_parse_date_rejects_bad_input(text: str) -> None:
    with pytest.raises(ValueError):
        dates.parse_date(text)

"""
Date helpers for the Gym Management System.

Dates are plain ``{day, month, year}`` values. ``NO_DATE`` (all zeros) stands
for "no date", e.g. the repair ETA of operational equipment. Every other date
handled by the system must be a real calendar date between 1900 and 2100.

Usage:
    from gymms.domain import dates

    dob = dates.parse_date("15/06/2000")
    dates.age(dob, dates.today())
"""

from __future__ import annotations

import datetime as _dt
import re
from enum import IntEnum

from pydantic import BaseModel

MIN_YEAR = 1900
MAX_YEAR = 2100

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_DATE_PATTERN = re.compile(r"^\s*(\d{1,2})[\s/-]+(\d{1,2})[\s/-]+(\d{4})\s*$")


class Ordering(IntEnum):
    """Outcome of comparing two dates."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


class Date(BaseModel):
    """
    A calendar date, or the all-zero "no date" sentinel.

    Instances are immutable; updates replace the whole value.
    """

    day: int = 0
    month: int = 0
    year: int = 0

    model_config = {"frozen": True}

    @property
    def is_sentinel(self) -> bool:
        return self.day == 0 and self.month == 0 and self.year == 0

    def is_valid(self) -> bool:
        return is_valid(self.day, self.month, self.year)

    def to_date(self) -> _dt.date:
        """Convert to ``datetime.date``. Raises ``ValueError`` for the sentinel."""
        return _dt.date(self.year, self.month, self.day)

    @classmethod
    def from_date(cls, value: _dt.date) -> "Date":
        return cls(day=value.day, month=value.month, year=value.year)

    def __str__(self) -> str:
        if self.is_sentinel:
            return "--/--/----"
        return f"{self.day:02d}/{self.month:02d}/{self.year:04d}"


NO_DATE = Date()


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(month: int, year: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def is_valid(day: int, month: int, year: int) -> bool:
    """
    Check that ``day/month/year`` is a real date with year in [1900, 2100].
    """
    if year < MIN_YEAR or year > MAX_YEAR:
        return False
    if month < 1 or month > 12:
        return False
    return 1 <= day <= days_in_month(month, year)


def compare(a: Date, b: Date) -> Ordering:
    """Order two dates by (year, month, day)."""
    left = (a.year, a.month, a.day)
    right = (b.year, b.month, b.day)
    if left < right:
        return Ordering.LESS
    if left > right:
        return Ordering.GREATER
    return Ordering.EQUAL


def age(dob: Date, on: Date) -> int:
    """
    Whole years between ``dob`` and ``on``.

    A birthday later in the year than ``on`` has not happened yet, so it does
    not count.
    """
    years = on.year - dob.year
    if (on.month, on.day) < (dob.month, dob.day):
        years -= 1
    return years


def today() -> Date:
    """Read the system clock. Not cached: capture once per operation."""
    return Date.from_date(_dt.date.today())


def parse_date(text: str) -> Date:
    """
    Parse ``dd mm yyyy``, ``dd/mm/yyyy`` or ``dd-mm-yyyy`` into a valid ``Date``.

    Raises
    ------
    ValueError
        If the text is malformed or names a date that does not exist.
    """
    match = _DATE_PATTERN.match(text)
    if match is None:
        raise ValueError(f"Invalid date format '{text}'. Expected dd/mm/yyyy.")
    day, month, year = (int(part) for part in match.groups())
    if not is_valid(day, month, year):
        raise ValueError(f"Invalid date '{text}'.")
    return Date(day=day, month=month, year=year)


__all__ = [
    "Date",
    "NO_DATE",
    "Ordering",
    "MIN_YEAR",
    "MAX_YEAR",
    "is_leap_year",
    "days_in_month",
    "is_valid",
    "compare",
    "age",
    "today",
    "parse_date",
]

"""A simplified calendar of Chinese public holidays."""

from __future__ import annotations

from datetime import date

_HOLIDAY_DAYS = (
    (1, 1),
    (5, 1),
    (10, 1),
    (10, 2),
    (10, 3),
    # Spring Festival, approximated as a fixed week in mid February.
    (2, 10),
    (2, 11),
    (2, 12),
    (2, 13),
    (2, 14),
    (2, 15),
    (2, 16),
)

SATURDAY = 5


def chinese_holidays(year: int) -> list[date]:
    """The fixed holiday dates assumed for a year."""
    return [date(year, month, day) for month, day in _HOLIDAY_DAYS]


def is_holiday(day: date) -> bool:
    """Whether a day is a holiday or falls on a weekend."""
    return day in chinese_holidays(day.year) or day.weekday() >= SATURDAY
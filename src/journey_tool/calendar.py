"""Utilidades de calendario para la grilla mensual del journey."""

from __future__ import annotations

from collections.abc import Collection
from datetime import date, timedelta
from typing import Literal

import pandas as pd

StreakPosition = Literal["start", "continue", "end", "single", "none"]

_MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def month_days(year: int, month: int) -> list[date]:
    """Return every calendar day of the month, inclusive."""
    start = pd.Timestamp(year=year, month=month, day=1)
    days = pd.date_range(start=start, periods=start.days_in_month, freq="D")
    return list(days.date)


def days_in_month(year: int, month: int) -> int:
    return int(pd.Timestamp(year=year, month=month, day=1).days_in_month)


def month_name(month: int) -> str:
    return _MONTH_NAMES[month - 1]


def iso_day(year: int, month: int, day: int) -> str:
    """Format a YYYY-MM-DD key for the journey maps."""
    return date(year, month, day).isoformat()


def calendar_grid(year: int, month: int, first_weekday: int = 6) -> list[int | None]:
    """Day numbers for a month grid with leading blanks.

    Args:
        year: Year.
        month: Month (1-12).
        first_weekday: Column 0 weekday, Monday=0 ... Sunday=6 (default Sunday).

    Returns:
        ``None`` for each blank cell before day 1, then 1..N.
    """
    first = date(year, month, 1)
    blanks = (first.weekday() - first_weekday) % 7
    grid: list[int | None] = [None] * blanks
    grid.extend(range(1, days_in_month(year, month) + 1))
    return grid


def streak_position(day: date, streak_days: Collection[str]) -> StreakPosition:
    """Where a day sits inside the highlighted streak band."""
    key = day.isoformat()
    if key not in streak_days:
        return "none"
    prev_in = (day - timedelta(days=1)).isoformat() in streak_days
    next_in = (day + timedelta(days=1)).isoformat() in streak_days
    if prev_in and next_in:
        return "continue"
    if prev_in:
        return "end"
    if next_in:
        return "start"
    return "single"

"""Orquestación del journey mensual: clasificar, rachas y estadísticas."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from datetime import date
from types import MappingProxyType

from journey_tool.aggregate import aggregate
from journey_tool.classify import classify
from journey_tool.model import (
    ClassifiedDay,
    DayDetail,
    DayRecord,
    JourneyResult,
    WeightSample,
)
from journey_tool.streaks import MissingDayPolicy, compute_streaks

logger = logging.getLogger(__name__)


def build_journey(
    month_records: Sequence[DayRecord],
    year: int,
    month: int,
    reference_date: date,
    *,
    policy: MissingDayPolicy = MissingDayPolicy.BREAK,
) -> JourneyResult:
    """Build the journey for (year, month) from that month's day records.

    Args:
        month_records: Day records supplied by the month-fetch collaborator.
        year: Queried year.
        month: Queried month (1-12).
        reference_date: The viewer's "today".
        policy: How days without a record affect streaks.

    Returns:
        A freshly built JourneyResult.
    """
    records = valid_records(month_records, year, month, reference_date)

    classified = [classify(r) for r in records]
    streak_data = compute_streaks(classified, reference_date, policy=policy)
    samples = [
        WeightSample(day=r.day, weight=r.weight)
        for r in records
        if r.weight is not None
    ]
    monthly_stats = aggregate(classified, samples)

    completion_by_date: dict[str, ClassifiedDay] = {}
    for day in classified:
        key = day.day.isoformat()
        completion_by_date[key] = replace(
            day,
            is_milestone=streak_data.milestone_days.get(key),
            is_streak_day=key in streak_data.streak_days,
        )

    logger.debug(
        "Journey %04d-%02d: %d day(s), current streak %d, best %d",
        year,
        month,
        len(completion_by_date),
        streak_data.current_streak,
        streak_data.best_streak,
    )
    return JourneyResult(
        year=year,
        month=month,
        completion_by_date=MappingProxyType(completion_by_date),
        streak_data=streak_data,
        monthly_stats=monthly_stats,
    )


def valid_records(
    month_records: Sequence[DayRecord],
    year: int,
    month: int,
    reference_date: date,
) -> list[DayRecord]:
    """Drop records the engine cannot use, keeping one per date in order.

    Skipped: dates outside (year, month), dates after ``reference_date`` and
    repeated dates (the first one wins). A bad day never blocks the month.
    """
    seen: set[date] = set()
    out: list[DayRecord] = []
    for record in month_records:
        day = record.day
        if (day.year, day.month) != (year, month):
            logger.warning("Skipping record outside %04d-%02d: %s", year, month, day)
            continue
        if day > reference_date:
            logger.warning("Skipping future record: %s", day)
            continue
        if day in seen:
            logger.warning("Skipping duplicated record: %s", day)
            continue
        seen.add(day)
        out.append(record)
    out.sort(key=lambda r: r.day)
    return out


def day_detail(journey: JourneyResult, day: date, today: date) -> DayDetail:
    """Collect what the day-detail sheet shows for a selected date."""
    key = day.isoformat()
    return DayDetail(
        day=day,
        completion=journey.completion_by_date.get(key),
        milestone=journey.streak_data.milestone_days.get(key),
        in_streak=key in journey.streak_data.streak_days,
        is_today=day == today,
    )

"""Cálculo de rachas (días perfectos consecutivos) e hitos de 7/14/30 días."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, timedelta
from enum import Enum
from types import MappingProxyType
from typing import cast

from journey_tool.model import ClassifiedDay, Milestone, StreakState

MILESTONES: tuple[int, ...] = (7, 14, 30)


class MissingDayPolicy(str, Enum):
    """How a calendar day without a record affects a running streak."""

    BREAK = "break"
    SKIP = "skip"


def compute_streaks(
    days: Sequence[ClassifiedDay],
    reference_date: date,
    *,
    policy: MissingDayPolicy = MissingDayPolicy.BREAK,
) -> StreakState:
    """Compute current/best streak and milestone dates for one month.

    The scan walks the days in date order keeping the length of the run in
    progress. A day below 100% closes the run; so does a missing calendar
    day when ``policy`` is ``BREAK``. Milestones land on exactly the 7th, 14th
    and 30th day of every run.

    Which run is "current" depends on whether ``reference_date`` (today) falls
    inside the scanned month:

    - same month: records after today are ignored and the trailing run only
      counts if it reaches today or yesterday (today may not be logged yet).
      With ``SKIP`` any trailing run counts.
    - any other month: the last run in the month, wherever it ends.

    Args:
        days: Classified days of a single month, one per date.
        reference_date: The viewer's "today".
        policy: Missing-day policy.

    Returns:
        A fresh StreakState.
    """
    ordered = sorted(days, key=lambda d: d.day)
    if not ordered:
        return StreakState()

    first = ordered[0].day
    viewing_current = (reference_date.year, reference_date.month) == (
        first.year,
        first.month,
    )
    if viewing_current:
        ordered = [d for d in ordered if d.day <= reference_date]

    runs: list[list[date]] = []
    milestone_days: dict[str, Milestone] = {}
    run: list[date] = []
    previous: date | None = None

    for item in ordered:
        broken = previous is not None and not _continues(previous, item.day, policy)
        if run and (broken or not item.is_perfect):
            runs.append(run)
            run = []
        previous = item.day
        if not item.is_perfect:
            continue
        run.append(item.day)
        if len(run) in MILESTONES:
            milestone_days[item.day.isoformat()] = cast(Milestone, len(run))

    trailing_open = run
    if run:
        runs.append(run)

    best_streak = max((len(r) for r in runs), default=0)

    if viewing_current:
        current_run = (
            trailing_open
            if _is_alive(trailing_open, reference_date, policy)
            else []
        )
    else:
        current_run = runs[-1] if runs else []

    return StreakState(
        current_streak=len(current_run),
        best_streak=best_streak,
        streak_days=frozenset(d.isoformat() for d in current_run),
        milestone_days=MappingProxyType(milestone_days),
    )


def _continues(previous: date, current: date, policy: MissingDayPolicy) -> bool:
    if policy is MissingDayPolicy.SKIP:
        return True
    return current - previous == timedelta(days=1)


def _is_alive(run: list[date], reference_date: date, policy: MissingDayPolicy) -> bool:
    """Whether a run still open at the end of the scan is today's streak."""
    if not run:
        return False
    if policy is MissingDayPolicy.SKIP:
        return True
    return reference_date - run[-1] <= timedelta(days=1)

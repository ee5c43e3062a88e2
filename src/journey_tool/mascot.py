"""Selección del estado y mensaje de Pip a partir del journey.

La selección es una tabla de umbrales sobre los valores del motor; los
textos viven en ``MESSAGES`` y pueden reemplazarse sin tocar la lógica.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from journey_tool.model import ClassifiedDay


class PipState(str, Enum):
    """Mascot moods."""

    PROUD = "proud"
    CHEERFUL = "cheerful"
    ENCOURAGING = "encouraging"
    CURIOUS = "curious"
    CELEBRATING = "celebrating"
    SLEEPING = "sleeping"


class PipMessage(str, Enum):
    """Message variants; some carry parameters in MascotLine.params."""

    TODAY_EMPTY = "today_empty"
    TODAY_PERFECT = "today_perfect"
    TODAY_ONE_LEFT = "today_one_left"
    TODAY_PROGRESS = "today_progress"
    TODAY_WAITING = "today_waiting"
    MILESTONE_7 = "milestone_7"
    MILESTONE_14 = "milestone_14"
    MILESTONE_30 = "milestone_30"
    PERFECT_WITH_INJECTION = "perfect_with_injection"
    PERFECT_WITH_WEIGH_IN = "perfect_with_weigh_in"
    STREAK_DAY = "streak_day"
    PERFECT_DAY = "perfect_day"
    TWO_OF_THREE = "two_of_three"
    ONE_OF_THREE = "one_of_three"
    NO_ACTIVITY = "no_activity"
    HEADER_LONG_STREAK = "header_long_streak"
    HEADER_STREAK = "header_streak"
    HEADER_GREAT_MONTH = "header_great_month"
    HEADER_GOOD_MONTH = "header_good_month"
    HEADER_MANY_PERFECT = "header_many_perfect"
    HEADER_SOME_PERFECT = "header_some_perfect"
    HEADER_FIRST_PERFECT = "header_first_perfect"
    HEADER_DEFAULT = "header_default"


@dataclass(frozen=True)
class MascotLine:
    """A selected message variant plus its format parameters."""

    message: PipMessage
    params: dict[str, object] = field(default_factory=dict)


MESSAGES: dict[PipMessage, str] = {
    PipMessage.TODAY_EMPTY: "Today's a fresh start! What will you accomplish?",
    PipMessage.TODAY_PERFECT: "You crushed it today! All habits complete!",
    PipMessage.TODAY_ONE_LEFT: "Almost there! One more habit to go!",
    PipMessage.TODAY_PROGRESS: "Good progress today! Keep the momentum going!",
    PipMessage.TODAY_WAITING: "Your day is waiting! Let's check off some habits!",
    PipMessage.MILESTONE_7: "A whole week of progress! You built a real habit!",
    PipMessage.MILESTONE_14: "Two weeks strong! Your consistency is incredible!",
    PipMessage.MILESTONE_30: "30 days! You've proven real commitment!",
    PipMessage.PERFECT_WITH_INJECTION: "A perfect day AND you logged your injection!",
    PipMessage.PERFECT_WITH_WEIGH_IN: "All habits done and you tracked your weight!",
    PipMessage.STREAK_DAY: "Part of your streak! You were on fire!",
    PipMessage.PERFECT_DAY: "A perfect day! All three habits checked off!",
    PipMessage.TWO_OF_THREE: "Two out of three habits - solid effort!",
    PipMessage.ONE_OF_THREE: "You showed up! One habit is better than none!",
    PipMessage.NO_ACTIVITY: "Let's see what happened on day {day_number}...",
    PipMessage.HEADER_LONG_STREAK: "{streak} day streak! You're unstoppable!",
    PipMessage.HEADER_STREAK: "{streak} days in a row! Keep it going!",
    PipMessage.HEADER_GREAT_MONTH: "What an incredible month! You're crushing it!",
    PipMessage.HEADER_GOOD_MONTH: "Great consistency this month! Keep building!",
    PipMessage.HEADER_MANY_PERFECT: "{perfect_days} perfect days this month! Amazing!",
    PipMessage.HEADER_SOME_PERFECT: "{perfect_days} perfect days so far! Nice work!",
    PipMessage.HEADER_FIRST_PERFECT: "{perfect_days} perfect day{plural}! Every one counts!",
    PipMessage.HEADER_DEFAULT: "Let's look at your journey! Tap any day to see details.",
}

_MILESTONE_MESSAGES: dict[int, PipMessage] = {
    7: PipMessage.MILESTONE_7,
    14: PipMessage.MILESTONE_14,
    30: PipMessage.MILESTONE_30,
}


def journey_pip_state(completion_percent: int) -> PipState:
    """Pick the mascot mood from the monthly completion percent."""
    if completion_percent >= 80:
        return PipState.PROUD
    if completion_percent >= 60:
        return PipState.CHEERFUL
    if completion_percent >= 40:
        return PipState.ENCOURAGING
    if completion_percent >= 20:
        return PipState.CURIOUS
    return PipState.CHEERFUL


def journey_pip_message(
    day: ClassifiedDay | None, *, is_today: bool, day_number: int
) -> MascotLine:
    """Pick the message for a tapped calendar day.

    Args:
        day: Classified day, or None if the date has no record.
        is_today: Whether the tapped date is the viewer's today.
        day_number: Day of month, used by the fallback message.

    Returns:
        Selected MascotLine.
    """
    if is_today:
        return MascotLine(_today_message(day))

    if day is None:
        return MascotLine(PipMessage.NO_ACTIVITY, {"day_number": day_number})

    if day.is_milestone is not None:
        return MascotLine(_MILESTONE_MESSAGES[day.is_milestone])

    pct = day.completion_percent
    if pct == 100 and day.has_injection:
        return MascotLine(PipMessage.PERFECT_WITH_INJECTION)
    if pct == 100 and day.has_weigh_in:
        return MascotLine(PipMessage.PERFECT_WITH_WEIGH_IN)
    if pct == 100 and day.is_streak_day:
        return MascotLine(PipMessage.STREAK_DAY)
    if pct == 100:
        return MascotLine(PipMessage.PERFECT_DAY)
    if pct >= 66:
        return MascotLine(PipMessage.TWO_OF_THREE)
    if pct >= 33:
        return MascotLine(PipMessage.ONE_OF_THREE)
    return MascotLine(PipMessage.NO_ACTIVITY, {"day_number": day_number})


def _today_message(day: ClassifiedDay | None) -> PipMessage:
    if day is None:
        return PipMessage.TODAY_EMPTY
    if day.completion_percent == 100:
        return PipMessage.TODAY_PERFECT
    if day.completion_percent >= 66:
        return PipMessage.TODAY_ONE_LEFT
    if day.completion_percent >= 33:
        return PipMessage.TODAY_PROGRESS
    return PipMessage.TODAY_WAITING


def journey_header_message(
    current_streak: int, monthly_completion: int, perfect_days: int
) -> MascotLine:
    """Pick the journey header message (streak, then month, then perfect days)."""
    if current_streak >= 7:
        return MascotLine(PipMessage.HEADER_LONG_STREAK, {"streak": current_streak})
    if current_streak >= 3:
        return MascotLine(PipMessage.HEADER_STREAK, {"streak": current_streak})

    if monthly_completion >= 80:
        return MascotLine(PipMessage.HEADER_GREAT_MONTH)
    if monthly_completion >= 60:
        return MascotLine(PipMessage.HEADER_GOOD_MONTH)

    params: dict[str, object] = {"perfect_days": perfect_days}
    if perfect_days >= 10:
        return MascotLine(PipMessage.HEADER_MANY_PERFECT, params)
    if perfect_days >= 5:
        return MascotLine(PipMessage.HEADER_SOME_PERFECT, params)
    if perfect_days >= 1:
        params["plural"] = "s" if perfect_days > 1 else ""
        return MascotLine(PipMessage.HEADER_FIRST_PERFECT, params)

    return MascotLine(PipMessage.HEADER_DEFAULT)


def render(line: MascotLine, messages: dict[PipMessage, str] | None = None) -> str:
    """Format a MascotLine with the given (or default) message table."""
    table = MESSAGES if messages is None else messages
    return table[line.message].format(**line.params)

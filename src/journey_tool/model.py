"""Modelos tipados para registros diarios y resultados del journey mensual."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Literal

Milestone = Literal[7, 14, 30]
CompletionPercent = Literal[0, 33, 66, 100]


@dataclass(frozen=True)
class DayRecord:
    """Raw activity flags for one calendar day."""

    day: date
    has_injection: bool = False
    has_weigh_in: bool = False
    has_third_habit: bool = False
    weight: float | None = None


@dataclass(frozen=True)
class WeightSample:
    """One logged weight (date-based)."""

    day: date
    weight: float


@dataclass(frozen=True)
class ClassifiedDay:
    """Day with its quantized completion and streak markers."""

    day: date
    completion_percent: CompletionPercent
    has_injection: bool
    has_weigh_in: bool
    is_milestone: Milestone | None = None
    is_streak_day: bool = False

    @property
    def is_perfect(self) -> bool:
        return self.completion_percent == 100


@dataclass(frozen=True)
class StreakState:
    """Current/best streak plus the ISO dates that carry streak markers."""

    current_streak: int = 0
    best_streak: int = 0
    streak_days: frozenset[str] = frozenset()
    milestone_days: Mapping[str, Milestone] = field(
        default_factory=lambda: MappingProxyType({})
    )


@dataclass(frozen=True)
class MonthlyStats:
    """Monthly aggregate over the days that have a record."""

    completion_percent: int = 0
    perfect_days: int = 0
    partial_days: int = 0
    total_days: int = 0
    total_injections: int = 0
    total_weigh_ins: int = 0
    weight_change: float | None = None


@dataclass(frozen=True)
class JourneyResult:
    """Everything the calendar journey view needs for one month."""

    year: int
    month: int
    completion_by_date: Mapping[str, ClassifiedDay]
    streak_data: StreakState
    monthly_stats: MonthlyStats


@dataclass(frozen=True)
class DayDetail:
    """Selected-day payload read from a JourneyResult."""

    day: date
    completion: ClassifiedDay | None
    milestone: Milestone | None
    in_streak: bool
    is_today: bool

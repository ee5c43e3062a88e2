from __future__ import annotations

from datetime import date

from journey_tool.aggregate import aggregate, days_to_frame, round_half_up, weights_to_frame
from journey_tool.model import ClassifiedDay, WeightSample


def _day(day: int, pct: int, injection: bool = False, weigh_in: bool = False) -> ClassifiedDay:
    return ClassifiedDay(
        day=date(2025, 3, day),
        completion_percent=pct,  # type: ignore[arg-type]
        has_injection=injection,
        has_weigh_in=weigh_in,
    )


def test_aggregate_empty_input_is_zero_and_none() -> None:
    stats = aggregate([], [])
    assert stats.completion_percent == 0
    assert stats.perfect_days == 0
    assert stats.total_days == 0
    assert stats.total_injections == 0
    assert stats.total_weigh_ins == 0
    assert stats.weight_change is None


def test_completion_is_rounded_mean_over_recorded_days() -> None:
    days = [_day(1, 100), _day(2, 33), _day(3, 66)]
    stats = aggregate(days, [])
    # (100 + 33 + 66) / 3 = 66.33
    assert stats.completion_percent == 66
    assert stats.total_days == 3


def test_completion_rounds_half_up() -> None:
    days = [_day(1, 100), _day(2, 33)]
    # 66.5 -> 67
    assert aggregate(days, []).completion_percent == 67
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2


def test_counts_perfect_partial_and_totals() -> None:
    days = [
        _day(1, 100, injection=True, weigh_in=True),
        _day(2, 66, weigh_in=True),
        _day(3, 0),
        _day(4, 33, injection=True),
    ]
    stats = aggregate(days, [])
    assert stats.perfect_days == 1
    assert stats.partial_days == 2
    assert stats.total_injections == 2
    assert stats.total_weigh_ins == 2


def test_weight_change_last_minus_first() -> None:
    samples = [
        WeightSample(day=date(2025, 3, 20), weight=85.0),
        WeightSample(day=date(2025, 3, 3), weight=90.0),
    ]
    assert aggregate([], samples).weight_change == -5.0


def test_weight_change_needs_two_samples() -> None:
    one = [WeightSample(day=date(2025, 3, 3), weight=90.0)]
    assert aggregate([], one).weight_change is None
    assert aggregate([], []).weight_change is None


def test_weights_to_frame_drops_non_finite() -> None:
    samples = [
        WeightSample(day=date(2025, 3, 1), weight=float("nan")),
        WeightSample(day=date(2025, 3, 2), weight=80.0),
        WeightSample(day=date(2025, 3, 3), weight=float("inf")),
    ]
    df = weights_to_frame(samples)
    assert list(df["weight"]) == [80.0]


def test_days_to_frame_orders_by_date() -> None:
    df = days_to_frame([_day(5, 33), _day(2, 100)])
    assert list(df["date"]) == [date(2025, 3, 2), date(2025, 3, 5)]
    assert days_to_frame([]).empty

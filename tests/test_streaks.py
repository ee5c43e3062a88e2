from __future__ import annotations

from datetime import date

from journey_tool.model import ClassifiedDay
from journey_tool.streaks import MissingDayPolicy, compute_streaks


def _day(day: int, pct: int = 100, month: int = 3) -> ClassifiedDay:
    return ClassifiedDay(
        day=date(2025, month, day),
        completion_percent=pct,  # type: ignore[arg-type]
        has_injection=pct >= 33,
        has_weigh_in=pct >= 66,
    )


_PAST = date(2025, 5, 10)


def test_empty_days_give_empty_state() -> None:
    state = compute_streaks([], date(2025, 3, 10))
    assert state.current_streak == 0
    assert state.best_streak == 0
    assert state.streak_days == frozenset()
    assert state.milestone_days == {}


def test_single_perfect_day_has_no_milestone() -> None:
    state = compute_streaks([_day(1)], _PAST)
    assert state.current_streak == 1
    assert state.best_streak == 1
    assert state.milestone_days == {}


def test_seven_perfect_days_reach_first_milestone() -> None:
    days = [_day(d) for d in range(1, 8)]
    state = compute_streaks(days, date(2025, 3, 7))
    assert state.current_streak == 7
    assert state.best_streak == 7
    assert state.milestone_days == {"2025-03-07": 7}
    assert len(state.streak_days) == 7


def test_zero_day_resets_run() -> None:
    days = [_day(d) for d in range(1, 6)] + [_day(6, 0), _day(7)]
    state = compute_streaks(days, date(2025, 3, 7))
    assert state.current_streak == 1
    assert state.best_streak == 5
    assert state.streak_days == frozenset({"2025-03-07"})


def test_partial_day_also_breaks_run() -> None:
    days = [_day(1), _day(2), _day(3, 66), _day(4)]
    state = compute_streaks(days, _PAST)
    assert state.best_streak == 2
    assert state.current_streak == 1


def test_milestones_on_exact_day_of_each_run() -> None:
    days = [_day(d) for d in range(1, 31)]
    state = compute_streaks(days, date(2025, 3, 31))
    assert state.milestone_days == {
        "2025-03-07": 7,
        "2025-03-14": 14,
        "2025-03-30": 30,
    }
    assert state.current_streak == 30


def test_historical_run_keeps_its_milestone() -> None:
    days = [_day(d) for d in range(1, 9)] + [_day(9, 33)] + [_day(10), _day(11)]
    state = compute_streaks(days, _PAST)
    assert state.milestone_days == {"2025-03-07": 7}
    assert state.best_streak == 8
    assert state.current_streak == 2
    assert "2025-03-07" not in state.streak_days


def test_best_is_never_below_current() -> None:
    days = [_day(1), _day(2, 0), _day(3), _day(4), _day(5), _day(6, 33)]
    state = compute_streaks(days, _PAST)
    assert state.best_streak >= state.current_streak


def test_absent_day_breaks_run_by_default() -> None:
    days = [_day(1), _day(2), _day(4), _day(5)]
    state = compute_streaks(days, _PAST)
    assert state.best_streak == 2
    assert state.current_streak == 2
    assert state.streak_days == frozenset({"2025-03-04", "2025-03-05"})


def test_skip_policy_joins_runs_across_gaps() -> None:
    days = [_day(1), _day(2), _day(4), _day(5)]
    state = compute_streaks(days, _PAST, policy=MissingDayPolicy.SKIP)
    assert state.best_streak == 4
    assert state.current_streak == 4


def test_current_month_counts_run_ending_yesterday() -> None:
    days = [_day(d) for d in range(1, 5)]
    state = compute_streaks(days, date(2025, 3, 5))
    assert state.current_streak == 4


def test_current_month_drops_run_ended_before_yesterday() -> None:
    days = [_day(d) for d in range(1, 5)]
    state = compute_streaks(days, date(2025, 3, 10))
    assert state.current_streak == 0
    assert state.streak_days == frozenset()
    assert state.best_streak == 4


def test_current_month_with_skip_policy_keeps_trailing_run() -> None:
    days = [_day(d) for d in range(1, 5)]
    state = compute_streaks(days, date(2025, 3, 10), policy=MissingDayPolicy.SKIP)
    assert state.current_streak == 4


def test_current_month_trailing_imperfect_day_means_no_streak() -> None:
    days = [_day(1), _day(2), _day(3, 66)]
    state = compute_streaks(days, date(2025, 3, 3))
    assert state.current_streak == 0
    assert state.best_streak == 2


def test_current_month_ignores_days_after_today() -> None:
    days = [_day(1), _day(2), _day(3), _day(4)]
    state = compute_streaks(days, date(2025, 3, 2))
    assert state.current_streak == 2
    assert state.best_streak == 2


def test_past_month_uses_last_run_even_if_not_at_month_end() -> None:
    days = [_day(d) for d in range(1, 4)] + [_day(4, 0)] + [
        _day(d) for d in range(10, 15)
    ] + [_day(15, 33), _day(16, 0)]
    state = compute_streaks(days, _PAST)
    assert state.current_streak == 5
    assert state.best_streak == 5
    assert state.streak_days == frozenset(
        date(2025, 3, d).isoformat() for d in range(10, 15)
    )


def test_unordered_input_is_scanned_by_date() -> None:
    days = [_day(3), _day(1), _day(2)]
    state = compute_streaks(days, _PAST)
    assert state.best_streak == 3

"""Estadísticas mensuales (completitud, días perfectos, totales, peso)."""

from __future__ import annotations

import math
from collections.abc import Sequence

import pandas as pd

from journey_tool.model import ClassifiedDay, MonthlyStats, WeightSample

_DAY_COLUMNS = ["date", "completion_percent", "has_injection", "has_weigh_in"]


def days_to_frame(days: Sequence[ClassifiedDay]) -> pd.DataFrame:
    """Convert classified days to a DataFrame ordered by date."""
    rows = [
        {
            "date": d.day,
            "completion_percent": d.completion_percent,
            "has_injection": d.has_injection,
            "has_weigh_in": d.has_weigh_in,
        }
        for d in days
    ]
    df = pd.DataFrame(rows, columns=_DAY_COLUMNS)
    if df.empty:
        return df
    return df.sort_values("date").reset_index(drop=True)


def weights_to_frame(samples: Sequence[WeightSample]) -> pd.DataFrame:
    """Convert weight samples to a DataFrame, dropping missing weights."""
    df = pd.DataFrame(
        [{"date": s.day, "weight": s.weight} for s in samples],
        columns=["date", "weight"],
    )
    if df.empty:
        return df
    df["weight"] = pd.to_numeric(df["weight"], errors="coerce")
    df = df[df["weight"].map(lambda w: pd.notna(w) and math.isfinite(w))]
    return df.sort_values("date", kind="stable").reset_index(drop=True)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (for >= 0)."""
    return int(math.floor(value + 0.5))


def aggregate(
    days: Sequence[ClassifiedDay],
    weight_samples: Sequence[WeightSample],
) -> MonthlyStats:
    """Fold classified days and weight samples into monthly stats.

    The completion percent is the mean over days that have a record, so a
    month in progress is not penalized for days that have not happened yet.

    Args:
        days: Classified days with a record in the month.
        weight_samples: Weight samples within the same month.

    Returns:
        MonthlyStats (zeros and ``None`` on empty input).
    """
    frame = days_to_frame(days)
    weight_change = _weight_change(weights_to_frame(weight_samples))
    if frame.empty:
        return MonthlyStats(weight_change=weight_change)

    pct = frame["completion_percent"]
    return MonthlyStats(
        completion_percent=round_half_up(float(pct.mean())),
        perfect_days=int((pct == 100).sum()),
        partial_days=int(((pct > 0) & (pct < 100)).sum()),
        total_days=len(frame),
        total_injections=int(frame["has_injection"].sum()),
        total_weigh_ins=int(frame["has_weigh_in"].sum()),
        weight_change=weight_change,
    )


def _weight_change(weights: pd.DataFrame) -> float | None:
    if len(weights) < 2:
        return None
    first = float(weights["weight"].iloc[0])
    last = float(weights["weight"].iloc[-1])
    return last - first

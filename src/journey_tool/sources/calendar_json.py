"""Lectura de exportaciones JSON mensuales del calendario (hábitos, pesajes, inyecciones)."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, cast

import pandas as pd

from journey_tool.model import DayRecord
from journey_tool.sources.base import MonthSource, SourcePaths

logger = logging.getLogger(__name__)

_CHECK_IN_FIELDS: tuple[str, ...] = ("water", "nutrition", "exercise")


@dataclass(frozen=True)
class CalendarJsonPaths(SourcePaths):
    """Paths for monthly calendar exports."""

    # root: folder containing calendar_YYYY-MM.json


class CalendarJsonSource(MonthSource):
    """Monthly calendar JSON reading source."""

    def validate(self) -> None:
        """Validate that the export directory exists."""
        if not self._paths.root.exists():
            raise FileNotFoundError(str(self._paths.root))

    def month_file(self, year: int, month: int) -> Path:
        """Return the export file for (year, month).

        Raises:
            FileNotFoundError: If the month was never exported.
        """
        path = self._paths.root / f"calendar_{year:04d}-{month:02d}.json"
        if not path.exists():
            raise FileNotFoundError(str(path))
        return path

    def load_month(self, path: Path) -> dict[str, Any]:
        """Parse a month export file.

        Raises:
            ValueError: If the JSON is not an object.
        """
        raw = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError("Calendar JSON must be an object")
        return raw

    def month_records(self, year: int, month: int) -> list[DayRecord]:
        """Load and merge the month export into DayRecords."""
        path = self.month_file(year, month)
        records = month_to_records(self.load_month(path), year, month)
        logger.info("Loaded %d day record(s) from %s", len(records), path.name)
        return records


def month_to_records(payload: dict[str, Any], year: int, month: int) -> list[DayRecord]:
    """Merge habits/weighIns/injections lists into one DayRecord per date.

    The third habit is the daily check-in: it counts when every sub-habit of
    that day's entry is true. When a date has several weigh-ins the last one
    wins. Items without a usable date, or outside (year, month), are skipped.

    Args:
        payload: Month payload with ``habits``, ``weighIns`` and ``injections``.
        year: Queried year.
        month: Queried month.

    Returns:
        DayRecords sorted by date.
    """
    check_ins: dict[date, bool] = {}
    weights: dict[date, float | None] = {}
    injections: set[date] = set()

    for item in _items(payload, "habits"):
        day = _item_day(item, year, month)
        if day is not None:
            check_ins[day] = all(bool(item.get(f)) for f in _CHECK_IN_FIELDS)

    for item in _items(payload, "weighIns"):
        day = _item_day(item, year, month)
        if day is not None:
            weights[day] = _parse_weight(item.get("weight"))

    for item in _items(payload, "injections"):
        day = _item_day(item, year, month)
        if day is not None:
            injections.add(day)

    all_days = set(check_ins) | set(weights) | injections
    return [
        DayRecord(
            day=day,
            has_injection=day in injections,
            has_weigh_in=day in weights,
            has_third_habit=check_ins.get(day, False),
            weight=weights.get(day),
        )
        for day in sorted(all_days)
    ]


def _items(payload: dict[str, Any], key: str) -> list[dict[str, Any]]:
    raw = payload.get(key) or []
    if not isinstance(raw, list):
        logger.warning("Ignoring '%s': expected a list", key)
        return []
    out = [item for item in raw if isinstance(item, dict)]
    if len(out) != len(raw):
        logger.warning("Skipping %d malformed '%s' item(s)", len(raw) - len(out), key)
    return out


def _item_day(item: dict[str, Any], year: int, month: int) -> date | None:
    """Fecha del ítem si es válida y pertenece al mes; None si no."""
    day = _parse_day(item.get("date"))
    if day is None:
        logger.warning("Skipping item without a valid date: %r", item.get("date"))
        return None
    if (day.year, day.month) != (year, month):
        logger.warning("Skipping item outside %04d-%02d: %s", year, month, day)
        return None
    return day


def _parse_day(value: Any) -> date | None:
    if not isinstance(value, str) or not value.strip():
        return None
    parsed = pd.to_datetime(value.strip()[:10], format="%Y-%m-%d", errors="coerce")
    if pd.isna(parsed):
        return None
    return cast(date, parsed.date())


def _parse_weight(value: Any) -> float | None:
    """Peso como float; None si falta o no es numérico."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        weight = float(value)
    except (TypeError, ValueError):
        return None
    return weight if math.isfinite(weight) else None

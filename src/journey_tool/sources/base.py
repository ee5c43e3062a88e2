"""Clases base para fuentes de registros mensuales."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from journey_tool.model import DayRecord


@dataclass(frozen=True)
class SourcePaths:
    """Container for source directories."""

    root: Path


class MonthSource(ABC):
    """Abstract month-fetch collaborator: yields the DayRecords of a month."""

    def __init__(self, paths: SourcePaths) -> None:
        """Create a month source.

        Args:
            paths: Source paths configuration.
        """
        self._paths = paths

    @abstractmethod
    def validate(self) -> None:
        """Validate that required folders/files exist.

        Raises:
            FileNotFoundError: If required files are missing.
        """

    @abstractmethod
    def month_records(self, year: int, month: int) -> list[DayRecord]:
        """Return one DayRecord per logged date of (year, month)."""

"""Clasificación de un día según cuántos hábitos se completaron."""

from __future__ import annotations

from journey_tool.model import ClassifiedDay, CompletionPercent, DayRecord

# Tabla fija: 3 hábitos. Si cambia la cantidad, redefinir la tabla.
_COMPLETION_BY_COUNT: dict[int, CompletionPercent] = {0: 0, 1: 33, 2: 66, 3: 100}


def completion_percent(*flags: bool) -> CompletionPercent:
    """Map the number of completed habits to 0/33/66/100.

    Args:
        flags: Exactly three habit flags.

    Returns:
        Quantized completion percent.

    Raises:
        ValueError: If the number of flags is not three.
    """
    if len(flags) != len(_COMPLETION_BY_COUNT) - 1:
        raise ValueError(f"Expected 3 habit flags, got {len(flags)}")
    return _COMPLETION_BY_COUNT[sum(1 for flag in flags if flag)]


def classify(record: DayRecord) -> ClassifiedDay:
    """Classify one day record (streak markers are filled in later)."""
    return ClassifiedDay(
        day=record.day,
        completion_percent=completion_percent(
            record.has_injection, record.has_weigh_in, record.has_third_habit
        ),
        has_injection=record.has_injection,
        has_weigh_in=record.has_weigh_in,
    )

"""Configuración de journey_tool (archivo TOML + overrides de la CLI)."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from datetime import date, datetime, tzinfo
from pathlib import Path
from typing import Any

from dateutil import tz

from journey_tool.streaks import MissingDayPolicy

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "journey-tool" / "config.toml"
WEIGHT_UNITS: tuple[str, ...] = ("kg", "lbs")


@dataclass(frozen=True)
class JourneyConfig:
    """Settings for loading and rendering monthly journeys."""

    data_dir: Path = field(
        default_factory=lambda: Path.home() / "proyectos" / "journey" / "datos"
    )
    export_dir: Path = field(
        default_factory=lambda: Path.home() / "proyectos" / "journey" / "salidas"
    )
    timezone: str = "America/Argentina/Buenos_Aires"
    policy: MissingDayPolicy = MissingDayPolicy.BREAK
    weight_unit: str = "kg"  # solo para mostrar

    @property
    def local_tz(self) -> tzinfo:
        zone = tz.gettz(self.timezone)
        if zone is None:
            raise ValueError(f"Unknown timezone: {self.timezone}")
        return zone

    def today(self) -> date:
        """Return today's date in the configured timezone."""
        return datetime.now(tz=self.local_tz).date()

    def validate(self) -> None:
        """Raise ValueError if the timezone cannot be resolved."""
        _ = self.local_tz

    @classmethod
    def load(
        cls,
        path: Path | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> JourneyConfig:
        """Load config from a TOML file (if present), then apply overrides.

        Args:
            path: TOML file; defaults to ~/.config/journey-tool/config.toml.
            overrides: Values from the CLI; ``None`` values are ignored.

        Returns:
            The resulting configuration.

        Raises:
            ValueError: If policy, weight unit or timezone are invalid.
        """
        config = cls()
        config_path = path or DEFAULT_CONFIG_PATH
        if config_path.exists():
            with open(config_path, "rb") as f:
                config = config._apply_dict(tomllib.load(f))
        if overrides:
            config = config._apply_dict(
                {k: v for k, v in overrides.items() if v is not None}
            )
        config.validate()
        return config

    def _apply_dict(self, data: dict[str, Any]) -> JourneyConfig:
        changes: dict[str, Any] = {}
        if "data_dir" in data:
            changes["data_dir"] = Path(data["data_dir"]).expanduser()
        if "export_dir" in data:
            changes["export_dir"] = Path(data["export_dir"]).expanduser()
        if "timezone" in data:
            changes["timezone"] = str(data["timezone"])
        if "policy" in data:
            changes["policy"] = _parse_policy(data["policy"])
        if "weight_unit" in data:
            unit = str(data["weight_unit"]).lower()
            if unit not in WEIGHT_UNITS:
                raise ValueError(f"Unknown weight unit: {data['weight_unit']}")
            changes["weight_unit"] = unit
        return replace(self, **changes)


def _parse_policy(value: Any) -> MissingDayPolicy:
    if isinstance(value, MissingDayPolicy):
        return value
    try:
        return MissingDayPolicy(str(value).lower())
    except ValueError as exc:
        raise ValueError(f"Unknown missing-day policy: {value}") from exc

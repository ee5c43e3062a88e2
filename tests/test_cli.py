"""Tests for CLI entrypoints."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any

import pytest

from journey_tool import cli
from journey_tool.journey import build_journey
from journey_tool.model import DayRecord


def _write_month(root: Path) -> None:
    payload = {
        "habits": [
            {"date": f"2025-03-{d:02d}", "water": True, "nutrition": True, "exercise": True}
            for d in range(1, 8)
        ],
        "weighIns": [
            {"date": f"2025-03-{d:02d}", "weight": 90.0 if d < 7 else 88.0}
            for d in range(1, 8)
        ],
        "injections": [{"date": f"2025-03-{d:02d}"} for d in range(1, 8)],
    }
    (root / "calendar_2025-03.json").write_text(json.dumps(payload), encoding="utf-8")


def test_parse_args_custom_values() -> None:
    ns = cli.parse_args(
        [
            "--data-dir",
            "/tmp/base",
            "--year",
            "2025",
            "--month",
            "3",
            "--today",
            "2025-03-07",
        ]
    )
    assert ns.data_dir == "/tmp/base"
    assert ns.year == 2025
    assert ns.month == 3
    assert ns.today == date(2025, 3, 7)
    assert ns.policy is None
    assert ns.export is False


def test_parse_args_rejects_bad_today() -> None:
    with pytest.raises(SystemExit):
        cli.parse_args(["--today", "ayer"])


def test_main_happy_path(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    data_dir = tmp_path / "datos"
    data_dir.mkdir()
    _write_month(data_dir)

    captured: dict[str, Any] = {}

    def _write_journey_xlsx(journey: Any, out_path: Path, layout: Any) -> None:
        captured["journey"] = journey
        captured["out_path"] = out_path
        captured["layout"] = layout

    monkeypatch.setattr(cli, "write_journey_xlsx", _write_journey_xlsx)

    code = cli.main(
        [
            "--config",
            str(tmp_path / "missing.toml"),
            "--data-dir",
            str(data_dir),
            "--today",
            "2025-03-07",
            "--export",
            "--full-month",
        ]
    )
    assert code == 0
    assert captured["layout"].full_month is True
    out = capsys.readouterr().out
    assert "March 2025" in out
    assert "Racha actual: 7 | mejor: 7" in out
    assert "Cambio de peso: -2.0 kg" in out
    assert "2025-03-07 (7)" in out
    assert captured["journey"].streak_data.current_streak == 7
    assert captured["out_path"].name.startswith("journey_2025-03_")


def test_main_propagates_missing_data_dir(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        cli.main(
            [
                "--config",
                str(tmp_path / "missing.toml"),
                "--data-dir",
                str(tmp_path / "nope"),
                "--today",
                "2025-03-07",
            ]
        )


def test_main_rejects_invalid_month(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        cli.main(
            [
                "--config",
                str(tmp_path / "missing.toml"),
                "--data-dir",
                str(tmp_path),
                "--month",
                "13",
                "--today",
                "2025-03-07",
            ]
        )


def test_main_rejects_month_and_year_zero(tmp_path: Path) -> None:
    base = [
        "--config",
        str(tmp_path / "missing.toml"),
        "--data-dir",
        str(tmp_path),
        "--today",
        "2025-03-07",
    ]
    with pytest.raises(ValueError, match="Mes"):
        cli.main([*base, "--month", "0"])
    with pytest.raises(ValueError, match="Año"):
        cli.main([*base, "--year", "0"])


def test_format_summary_without_weight_or_milestones() -> None:
    journey = build_journey(
        [DayRecord(day=date(2025, 3, 2), has_injection=True)], 2025, 3, date(2025, 4, 1)
    )
    text = cli.format_summary(journey)
    assert "Cambio de peso: -" in text
    assert "Hitos" not in text
    assert "Completado: 33%" in text
    assert text.splitlines()[-1].startswith("Pip (curious):")

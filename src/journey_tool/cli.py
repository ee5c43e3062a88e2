"""CLI para calcular el journey mensual (rachas, hitos y estadísticas)."""

from __future__ import annotations

import argparse
import logging
from datetime import date, datetime
from pathlib import Path

from dateutil import parser as date_parser

from journey_tool.calendar import month_name
from journey_tool.config import JourneyConfig
from journey_tool.excel_writer import ExcelLayout, write_journey_xlsx
from journey_tool.journey import build_journey
from journey_tool.mascot import journey_header_message, journey_pip_state, render
from journey_tool.model import JourneyResult
from journey_tool.sources.calendar_json import CalendarJsonPaths, CalendarJsonSource

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argparse namespace.
    """
    parser = argparse.ArgumentParser(
        description="Journey mensual: inyección, pesaje y check-in diario."
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directorio con calendar_YYYY-MM.json (default: config).",
    )
    parser.add_argument("--year", type=int, default=None, help="Año (default: hoy).")
    parser.add_argument("--month", type=int, default=None, help="Mes 1-12 (default: hoy).")
    parser.add_argument(
        "--today",
        type=_parse_today,
        default=None,
        help="Fecha de referencia YYYY-MM-DD (default: hoy en la zona configurada).",
    )
    parser.add_argument(
        "--policy",
        choices=["break", "skip"],
        default=None,
        help="Días sin registro: cortan la racha (break) o se ignoran (skip).",
    )
    parser.add_argument(
        "--export",
        action="store_true",
        help="Exportar el journey a Excel en export_dir.",
    )
    parser.add_argument(
        "--full-month",
        action="store_true",
        help="En el Excel, listar todos los días del mes (no solo los registrados).",
    )
    parser.add_argument("--config", default=None, help="Archivo TOML de configuración.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Logging detallado.")
    return parser.parse_args(argv)


def _parse_today(value: str) -> date:
    try:
        return date_parser.isoparse(value).date()
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Fecha inválida: {value}") from exc


def main(argv: list[str] | None = None) -> int:
    """Run the journey CLI.

    Returns:
        Exit code (0 on success).
    """
    ns = parse_args(argv)
    _setup_logging(ns.verbose)

    config = JourneyConfig.load(
        Path(ns.config).expanduser() if ns.config else None,
        {"data_dir": ns.data_dir, "policy": ns.policy},
    )
    today = ns.today or config.today()
    year = today.year if ns.year is None else ns.year
    month = today.month if ns.month is None else ns.month
    if not 1 <= month <= 12:
        raise ValueError(f"Mes inválido: {month}")
    if not 1 <= year <= 9999:
        raise ValueError(f"Año inválido: {year}")

    source = CalendarJsonSource(CalendarJsonPaths(root=config.data_dir))
    source.validate()
    records = source.month_records(year, month)

    journey = build_journey(records, year, month, today, policy=config.policy)
    print(format_summary(journey, config.weight_unit))

    if ns.export:
        ts = datetime.now(tz=config.local_tz).strftime("%Y-%m-%d_%H-%M-%S")
        out_path = config.export_dir / f"journey_{year:04d}-{month:02d}_{ts}.xlsx"
        layout = ExcelLayout(weight_unit=config.weight_unit, full_month=ns.full_month)
        write_journey_xlsx(journey, out_path, layout)
        logger.info("Wrote: %s", out_path)
        print(f"OK: Output: {out_path}")
    return 0


def format_summary(journey: JourneyResult, weight_unit: str = "kg") -> str:
    """Plain-text summary of a journey for the terminal."""
    stats = journey.monthly_stats
    streaks = journey.streak_data
    header = journey_header_message(
        streaks.current_streak, stats.completion_percent, stats.perfect_days
    )
    mood = journey_pip_state(stats.completion_percent)
    change = (
        f"{stats.weight_change:+.1f} {weight_unit}"
        if stats.weight_change is not None
        else "-"
    )
    lines = [
        f"{month_name(journey.month)} {journey.year}",
        f"Completado: {stats.completion_percent}% ({stats.total_days} días con registro)",
        f"Días perfectos: {stats.perfect_days} | parciales: {stats.partial_days}",
        f"Inyecciones: {stats.total_injections} | pesajes: {stats.total_weigh_ins}",
        f"Cambio de peso: {change}",
        f"Racha actual: {streaks.current_streak} | mejor: {streaks.best_streak}",
    ]
    if streaks.milestone_days:
        hitos = ", ".join(
            f"{day} ({n})" for day, n in sorted(streaks.milestone_days.items())
        )
        lines.append(f"Hitos: {hitos}")
    lines.append(f"Pip ({mood.value}): {render(header)}")
    return "\n".join(lines)

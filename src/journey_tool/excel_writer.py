"""Generación de Excel formateado con el journey mensual."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, Side

from journey_tool.calendar import iso_day, month_days, month_name, streak_position
from journey_tool.model import ClassifiedDay, JourneyResult

_DIA_SEMANA: tuple[str, ...] = ("lun", "mar", "mie", "jue", "vie", "sab", "dom")

_DAY_COLUMNS: list[str] = [
    "weekday",
    "date",
    "completion_percent",
    "has_injection",
    "has_weigh_in",
    "is_streak_day",
    "streak_position",
    "is_milestone",
]

_HEADER_MAP: dict[str, str] = {
    "weekday": "Día",
    "date": "Fecha",
    "completion_percent": "Completado\n(%)",
    "has_injection": "Inyección",
    "has_weigh_in": "Pesaje",
    "is_streak_day": "Racha",
    "streak_position": "Posición\nracha",
    "is_milestone": "Hito\n(días)",
}


@dataclass(frozen=True)
class ExcelLayout:
    """Layout/formatting configuration for the journey workbook."""

    sheet_name: str = "Journey"
    summary_sheet_name: str = "Resumen"
    weight_unit: str = "kg"
    full_month: bool = False


def journey_to_frame(
    journey: JourneyResult, *, full_month: bool = False
) -> pd.DataFrame:
    """One row per day with a record (or per calendar day), ordered by date.

    With ``full_month`` every calendar day is listed; days without a record
    keep only weekday and date.
    """
    streak_days = journey.streak_data.streak_days
    by_date = journey.completion_by_date
    if full_month:
        rows = [
            _day_row(d, by_date.get(iso_day(d.year, d.month, d.day)), streak_days)
            for d in month_days(journey.year, journey.month)
        ]
    else:
        rows = [
            _day_row(d.day, d, streak_days)
            for d in by_date.values()
        ]
    df = pd.DataFrame(rows, columns=_DAY_COLUMNS)
    if df.empty:
        return df
    return df.sort_values("date").reset_index(drop=True)


def summary_rows(
    journey: JourneyResult, weight_unit: str = "kg"
) -> list[tuple[str, Any]]:
    """Label/value pairs for the monthly summary sheet."""
    stats = journey.monthly_stats
    streaks = journey.streak_data
    change = stats.weight_change
    return [
        ("Mes", f"{month_name(journey.month)} {journey.year}"),
        ("Completado (%)", stats.completion_percent),
        ("Días con registro", stats.total_days),
        ("Días perfectos", stats.perfect_days),
        ("Días parciales", stats.partial_days),
        ("Inyecciones", stats.total_injections),
        ("Pesajes", stats.total_weigh_ins),
        (f"Cambio de peso ({weight_unit})", "" if change is None else round(change, 2)),
        ("Racha actual", streaks.current_streak),
        ("Mejor racha", streaks.best_streak),
    ]


def write_journey_xlsx(
    journey: JourneyResult, out_path: Path, layout: ExcelLayout
) -> None:
    """Write the journey workbook (daily sheet + summary sheet).

    Args:
        journey: Journey to export.
        out_path: Output path for the XLSX file.
        layout: Excel layout parameters.
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)

    export_df = journey_to_frame(journey, full_month=layout.full_month)
    export_df = export_df.rename(columns=_HEADER_MAP)
    summary_df = pd.DataFrame(
        summary_rows(journey, layout.weight_unit), columns=["Indicador", "Valor"]
    )

    with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
        export_df.to_excel(writer, index=False, sheet_name=layout.sheet_name)
        summary_df.to_excel(writer, index=False, sheet_name=layout.summary_sheet_name)
        _format_sheet(writer.book[layout.sheet_name])
        _format_summary(writer.book[layout.summary_sheet_name])


def _day_row(
    day: date, classified: ClassifiedDay | None, streak_days: Collection[str]
) -> dict[str, object]:
    row: dict[str, object] = {"weekday": _DIA_SEMANA[day.weekday()], "date": day}
    if classified is None:
        return row
    row.update(
        {
            "completion_percent": classified.completion_percent,
            "has_injection": _yes_no(classified.has_injection),
            "has_weigh_in": _yes_no(classified.has_weigh_in),
            "is_streak_day": _yes_no(classified.is_streak_day),
            "streak_position": streak_position(day, streak_days),
            "is_milestone": classified.is_milestone,
        }
    )
    return row


def _yes_no(flag: bool) -> str:
    return "sí" if flag else ""


def _style_header_row(ws: Any) -> None:
    """Aplica fuente negrita, alineación y borde a la fila de cabecera."""
    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    header_font = Font(bold=True)
    center = Alignment(horizontal="center", vertical="center", wrap_text=True)
    for cell in ws[1]:
        cell.font = header_font
        cell.alignment = center
        cell.border = border


def _style_body_rows(ws: Any) -> None:
    """Aplica alineación y borde a las filas de datos."""
    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    center = Alignment(horizontal="center", vertical="center")
    for row in ws.iter_rows(min_row=2):
        for cell in row:
            cell.alignment = center
            cell.border = border


def _get_header_col_index(ws: Any) -> dict[str, int]:
    """Devuelve mapa nombre de cabecera -> índice de columna (1-based)."""
    headers = [str(cell.value) for cell in ws[1]]
    return {name: idx + 1 for idx, name in enumerate(headers)}


def _apply_column_widths(ws: Any, widths: list[tuple[str, int]]) -> None:
    col_index = _get_header_col_index(ws)
    for header, width in widths:
        idx = col_index.get(header)
        if idx is not None:
            letter = ws.cell(row=1, column=idx).column_letter
            ws.column_dimensions[letter].width = width


def _apply_number_formats(ws: Any) -> None:
    """Aplica formatos numéricos por cabecera."""
    col_index = _get_header_col_index(ws)
    fmt_map: dict[str, str] = {
        "Fecha": "dd/mm/yyyy",
        "Completado\n(%)": "0",
        "Hito\n(días)": "0",
    }
    for row in ws.iter_rows(min_row=2):
        for header, fmt in fmt_map.items():
            idx = col_index.get(header)
            if idx is not None:
                row[idx - 1].number_format = fmt


def _format_sheet(ws: Any) -> None:
    """Apply borders, widths and number formats to the daily sheet.

    Args:
        ws: openpyxl worksheet.
    """
    _style_header_row(ws)
    _style_body_rows(ws)
    _apply_column_widths(
        ws,
        [
            ("Día", 6),
            ("Fecha", 12),
            ("Completado\n(%)", 12),
            ("Inyección", 10),
            ("Pesaje", 8),
            ("Racha", 8),
            ("Posición\nracha", 10),
            ("Hito\n(días)", 8),
        ],
    )
    _apply_number_formats(ws)


def _format_summary(ws: Any) -> None:
    _style_header_row(ws)
    _style_body_rows(ws)
    _apply_column_widths(ws, [("Indicador", 24), ("Valor", 18)])

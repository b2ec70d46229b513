"""Date header band resolution.

Resolution runs in two phases. ``discover_date_range`` fixes the effective
column range first; ``resolve_date_header`` then reads day numbers over that
fixed range only, so range discovery never depends on what extraction saw.
"""

from __future__ import annotations

import calendar
from datetime import date

from shift_roster_importer.configuration.extraction_settings import ExtractionConfig
from shift_roster_importer.grid_access import (
    CellKind,
    CellValue,
    WorksheetGrid,
    cell_label,
    column_label,
)

from .extraction_models import AxisSample, DateColumn, Diagnostic, Resolution

MAX_MONTH_COLUMNS = 31


def discover_date_range(grid: WorksheetGrid, config: ExtractionConfig) -> tuple[int, int]:
    """Return the inclusive (first, last) date columns to scan.

    With fixed columns this is the configured range. With dynamic columns the
    range is widened to one month's span when the configured range holds no
    day number, and extended over day numbers that continue past the
    configured last column.
    """
    first, last = config.first_date_column, config.last_date_column
    if not config.dynamic_columns:
        return first, last

    ceiling = max(last, first + MAX_MONTH_COLUMNS - 1)
    row = config.date_row
    if not any(_holds_day(grid, row, col) for col in range(first, last + 1)):
        return first, ceiling

    effective_last = last
    while effective_last < ceiling and _holds_day(grid, row, effective_last + 1):
        effective_last += 1
    return first, effective_last


def resolve_date_header(
    grid: WorksheetGrid, config: ExtractionConfig, month: int, year: int
) -> Resolution[tuple[DateColumn, ...]]:
    """Map date-row columns to calendar dates of ``month``/``year``."""
    first, last = discover_date_range(grid, config)
    row = config.date_row
    days_in_month = calendar.monthrange(year, month)[1]

    columns: list[DateColumn] = []
    diagnostics: list[Diagnostic] = []
    samples: list[AxisSample] = []
    seen_days: dict[int, int] = {}

    for col in range(first, last + 1):
        value = grid.value_at(row, col)
        if value.is_empty:
            continue
        samples.append(AxisSample(index=col, value=value.raw, value_type=value.kind.value))
        cell = cell_label(row, col)
        day = day_number(value)
        if day is None:
            diagnostics.append(
                Diagnostic.warning(
                    f"non-date value in date row at {cell}: {value.display!r}", row, col
                )
            )
            continue
        if day > days_in_month:
            diagnostics.append(
                Diagnostic.error(
                    f"day {day} at {cell} does not exist in {year}-{month:02d}", row, col
                )
            )
            continue
        if day in seen_days:
            diagnostics.append(
                Diagnostic.warning(
                    f"duplicate day {day} in date row at {cell}, "
                    f"already read at {cell_label(row, seen_days[day])}",
                    row,
                    col,
                )
            )
            continue
        seen_days[day] = col
        columns.append(DateColumn(column=col, day=day, date=date(year, month, day)))

    if not columns:
        diagnostics.append(
            Diagnostic.error(
                f"no data found in date row {row + 1} "
                f"(columns {column_label(first)}-{column_label(last)})"
            )
        )
    return Resolution(value=tuple(columns), diagnostics=tuple(diagnostics), samples=tuple(samples))


def day_number(value: CellValue) -> int | None:
    """Day of month for integral numbers in [1, 31], else None."""
    if value.kind != CellKind.NUMBER or value.number is None:
        return None
    number = value.number
    if isinstance(number, float):
        if not number.is_integer():
            return None
        number = int(number)
    if 1 <= number <= MAX_MONTH_COLUMNS:
        return number
    return None


def _holds_day(grid: WorksheetGrid, row: int, col: int) -> bool:
    return day_number(grid.value_at(row, col)) is not None

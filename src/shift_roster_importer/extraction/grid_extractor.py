"""Schedule grid extraction service."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from shift_roster_importer.configuration.extraction_settings import ColorLegend, ExtractionConfig
from shift_roster_importer.configuration.loader import check_coordinates
from shift_roster_importer.grid_access import WorksheetGrid, cell_label

from .color_classifier import classify_by_color, classify_by_text
from .date_header import resolve_date_header
from .extraction_models import (
    DateColumn,
    Diagnostic,
    ExtractedEntry,
    ExtractionResult,
    NameRow,
    Resolution,
    SampleCell,
    Severity,
    ValidationReport,
    order_diagnostics,
)
from .name_band import resolve_name_band
from .skip_rules import matches_skip_value

logger = logging.getLogger(__name__)

SAMPLE_ROWS = 3
SAMPLE_COLUMNS = 7


@dataclass(frozen=True)
class _ScanContext:
    """Read-only inputs shared by every cell scan."""

    grid: WorksheetGrid
    config: ExtractionConfig
    legend: ColorLegend
    date_columns: tuple[DateColumn, ...]


def extract_schedule(
    grid: WorksheetGrid,
    config: ExtractionConfig,
    legend: ColorLegend,
    month: int,
    year: int,
    *,
    max_workers: int = 1,
) -> ExtractionResult:
    """Extract (person, date, shift) entries from the configured rectangle.

    Configuration errors reject the run before any cell is read. Errors from
    the date or name band abort the run after resolution. In both cases the
    result carries no entries.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")

    config_errors = check_coordinates(config)
    if config_errors:
        logger.warning("Rejected configuration '%s': %s", config.name, "; ".join(config_errors))
        return ExtractionResult(report=ValidationReport(errors=tuple(config_errors)))

    dates = resolve_date_header(grid, config, month, year)
    names = resolve_name_band(grid, config)
    samples = _collect_sample_cells(grid, config)
    header_diagnostics = [*dates.diagnostics, *names.diagnostics]

    if dates.has_errors or names.has_errors:
        report = _build_report(header_diagnostics, dates, names, samples)
        logger.warning(
            "Extraction aborted for '%s' with %d error(s)", config.name, len(report.errors)
        )
        return ExtractionResult(report=report, date_columns=dates.value, name_rows=names.value)

    people = [
        person for person in names.value if not (config.exclude_flagged_names and person.flagged)
    ]
    context = _ScanContext(grid=grid, config=config, legend=legend, date_columns=dates.value)
    entries = _scan(context, people, max_workers)
    cell_diagnostics = [
        Diagnostic.warning(message, *entry.source_cell)
        for entry in entries
        for message in entry.warnings
    ]
    report = _build_report([*header_diagnostics, *cell_diagnostics], dates, names, samples)
    for message in report.warnings:
        logger.debug("Warning: %s", message)
    logger.info(
        "Extracted %d entries for %d people over %d days from sheet '%s' (%d warnings)",
        len(entries),
        len(people),
        len(dates.value),
        grid.title,
        len(report.warnings),
    )
    return ExtractionResult(
        report=report,
        entries=tuple(entries),
        date_columns=dates.value,
        name_rows=names.value,
    )


def _scan(
    context: _ScanContext, people: Sequence[NameRow], max_workers: int
) -> list[ExtractedEntry]:
    """Scan every person row; rows are independent so they may run in parallel."""
    workers = max(1, min(max_workers, len(people)))
    if workers == 1:
        row_results = [_scan_row(context, person) for person in people]
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            row_results = list(executor.map(lambda person: _scan_row(context, person), people))
    entries = [entry for row_entries in row_results for entry in row_entries]
    entries.sort(key=lambda entry: entry.source_cell)
    return entries


def _scan_row(context: _ScanContext, person: NameRow) -> list[ExtractedEntry]:
    entries: list[ExtractedEntry] = []
    for date_column in context.date_columns:
        entry = _extract_cell(context, person, date_column)
        if entry is not None:
            entries.append(entry)
    return entries


def _extract_cell(
    context: _ScanContext, person: NameRow, date_column: DateColumn
) -> ExtractedEntry | None:
    config = context.config
    row, col = person.row, date_column.column
    value = context.grid.value_at(row, col)
    text = value.display
    if matches_skip_value(text, config.skip_values, config.skip_match):
        return None

    cell = cell_label(row, col)
    if config.color_detection:
        resolution = classify_by_color(
            context.grid.style_key_at(row, col),
            context.legend,
            config.default_shift,
            has_value=not value.is_empty,
            cell=cell,
        )
    else:
        resolution = classify_by_text(text, context.legend, cell=cell)

    return ExtractedEntry(
        person_name=person.name,
        date=date_column.date,
        shift_name=resolution.shift_name,
        source_cell=(row, col),
        warnings=resolution.warnings,
        raw_value=text,
        color_key=resolution.color_key,
        flagged=person.flagged,
    )


def _collect_sample_cells(grid: WorksheetGrid, config: ExtractionConfig) -> tuple[SampleCell, ...]:
    row_count = min(SAMPLE_ROWS, config.last_name_row - config.first_name_row + 1)
    column_count = min(SAMPLE_COLUMNS, config.last_date_column - config.first_date_column + 1)
    samples: list[SampleCell] = []
    for row in range(config.first_name_row, config.first_name_row + row_count):
        for col in range(config.first_date_column, config.first_date_column + column_count):
            value = grid.value_at(row, col)
            if value.is_empty:
                continue
            samples.append(
                SampleCell(
                    row=row,
                    column=col,
                    value=value.raw,
                    has_style=grid.style_key_at(row, col) is not None,
                )
            )
    return tuple(samples)


def _build_report(
    diagnostics: Sequence[Diagnostic],
    dates: Resolution,
    names: Resolution,
    samples: tuple[SampleCell, ...],
) -> ValidationReport:
    ordered = order_diagnostics(diagnostics)
    return ValidationReport(
        errors=tuple(item.message for item in ordered if item.severity == Severity.ERROR),
        warnings=tuple(item.message for item in ordered if item.severity == Severity.WARNING),
        date_row_samples=dates.samples,
        name_column_samples=names.samples,
        sample_cells=samples,
    )

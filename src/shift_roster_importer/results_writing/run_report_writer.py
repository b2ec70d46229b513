"""Validation report rendering: JSON-shaped dictionaries and report workbooks."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from shift_roster_importer.extraction.extraction_models import (
    ExtractedEntry,
    ExtractionResult,
    ValidationReport,
)
from shift_roster_importer.grid_access import cell_label, column_label

from .report_models import EntryStatus, RunMetadata

ENTRIES_SHEET_NAME = "Entries"
DIAGNOSTICS_SHEET_NAME = "Diagnostics"
SAMPLES_SHEET_NAME = "Samples"
RUN_INFO_SHEET_NAME = "RunInfo"

ENTRY_COLUMNS: tuple[str, ...] = ("Person", "Date", "Shift", "Cell", "Value", "Colour", "Status")


def report_to_dict(report: ValidationReport) -> dict[str, Any]:
    """Render the dry-run validation output with spreadsheet-style positions."""
    return {
        "dateRowData": [
            {"column": sample.index, "value": sample.value, "type": sample.value_type}
            for sample in report.date_row_samples
        ],
        "nameColumnData": [
            {"row": sample.index, "value": sample.value, "type": sample.value_type}
            for sample in report.name_column_samples
        ],
        "sampleScheduleData": [
            {
                "row": cell.row + 1,
                "col": column_label(cell.column),
                "value": cell.value,
                "hasStyle": cell.has_style,
            }
            for cell in report.sample_cells
        ],
        "errors": list(report.errors),
        "warnings": list(report.warnings),
    }


def result_to_dict(result: ExtractionResult) -> dict[str, Any]:
    """Render the report plus the extracted entries."""
    return {
        "validation": report_to_dict(result.report),
        "entries": [_entry_to_dict(entry) for entry in result.entries],
    }


def write_report_workbook(
    result: ExtractionResult, output_path: Path | str, run_metadata: RunMetadata
) -> Path:
    """Write Entries, Diagnostics, Samples and RunInfo sheets for operator review."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = ENTRIES_SHEET_NAME

    _write_header(sheet, ENTRY_COLUMNS)
    _write_entry_rows(sheet, result.entries)
    _write_diagnostics_sheet(workbook, result.report)
    _write_samples_sheet(workbook, result.report)
    _write_run_info_sheet(workbook, run_metadata, result)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()


def _entry_to_dict(entry: ExtractedEntry) -> dict[str, Any]:
    row, col = entry.source_cell
    return {
        "personName": entry.person_name,
        "date": entry.date.isoformat(),
        "shiftName": entry.shift_name,
        "sourceCell": {"row": row, "column": col},
        "rawValue": entry.raw_value,
        "colorKey": entry.color_key,
        "flagged": entry.flagged,
        "warnings": list(entry.warnings),
    }


def _write_header(sheet, columns: Sequence[str]) -> None:
    for column_index, name in enumerate(columns, start=1):
        sheet.cell(row=1, column=column_index, value=name)
        sheet.cell(row=1, column=column_index).style = "Headline 1"
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(name) + 6, 40)
        )


def _write_entry_rows(sheet, entries: Sequence[ExtractedEntry]) -> None:
    for row_index, entry in enumerate(entries, start=2):
        values = (
            entry.person_name,
            entry.date.isoformat(),
            entry.shift_name or "",
            cell_label(*entry.source_cell),
            entry.raw_value,
            entry.color_key or "",
            _entry_status(entry).value,
        )
        for column_index, value in enumerate(values, start=1):
            sheet.cell(row=row_index, column=column_index, value=value)


def _entry_status(entry: ExtractedEntry) -> EntryStatus:
    if entry.flagged:
        return EntryStatus.FLAGGED
    if entry.shift_name is None:
        return EntryStatus.UNASSIGNED
    return EntryStatus.ASSIGNED


def _write_diagnostics_sheet(workbook: Workbook, report: ValidationReport) -> None:
    sheet = workbook.create_sheet(DIAGNOSTICS_SHEET_NAME)
    _write_header(sheet, ("Severity", "Message"))
    rows = [("error", message) for message in report.errors]
    rows.extend(("warning", message) for message in report.warnings)
    for row_index, (severity, message) in enumerate(rows, start=2):
        sheet.cell(row=row_index, column=1, value=severity)
        sheet.cell(row=row_index, column=2, value=message)
    sheet.column_dimensions["B"].width = 80


def _write_samples_sheet(workbook: Workbook, report: ValidationReport) -> None:
    sheet = workbook.create_sheet(SAMPLES_SHEET_NAME)
    _write_header(sheet, ("Source", "Cell", "Value", "Type / Styled"))
    rows: list[tuple[str, str, Any, Any]] = []
    rows.extend(
        ("date row", column_label(sample.index), sample.value, sample.value_type)
        for sample in report.date_row_samples
    )
    rows.extend(
        ("name column", f"row {sample.index + 1}", sample.value, sample.value_type)
        for sample in report.name_column_samples
    )
    rows.extend(
        ("grid", cell_label(cell.row, cell.column), cell.value, cell.has_style)
        for cell in report.sample_cells
    )
    for row_index, values in enumerate(rows, start=2):
        for column_index, value in enumerate(values, start=1):
            sheet.cell(row=row_index, column=column_index, value=value)


def _write_run_info_sheet(
    workbook: Workbook, run_metadata: RunMetadata, result: ExtractionResult
) -> None:
    sheet = workbook.create_sheet(RUN_INFO_SHEET_NAME)
    entries = (
        ("run_start", run_metadata.run_start.isoformat()),
        ("input_path", str(run_metadata.input_path)),
        ("configuration", run_metadata.configuration_name),
        ("role", run_metadata.role),
        ("period", f"{run_metadata.year}-{run_metadata.month:02d}"),
        ("dry_run", run_metadata.dry_run),
        ("entries", len(result.entries)),
        ("assigned", len(result.assigned_entries)),
        ("errors", len(result.report.errors)),
        ("warnings", len(result.report.warnings)),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)

"""Run report writer tests."""

from __future__ import annotations

from datetime import UTC, date, datetime
from pathlib import Path

from openpyxl import load_workbook
from shift_roster_importer.extraction import (
    AxisSample,
    ExtractedEntry,
    ExtractionResult,
    SampleCell,
    ValidationReport,
)
from shift_roster_importer.results_writing import (
    RunMetadata,
    report_to_dict,
    result_to_dict,
    write_report_workbook,
)


def _result() -> ExtractionResult:
    report = ValidationReport(
        errors=(),
        warnings=("colour #123456 at D11 is not in the colour legend",),
        date_row_samples=(AxisSample(index=2, value=1, value_type="number"),),
        name_column_samples=(AxisSample(index=10, value="John Roe", value_type="text"),),
        sample_cells=(SampleCell(row=10, column=2, value="M", has_style=True),),
    )
    entries = (
        ExtractedEntry(
            person_name="John Roe",
            date=date(2025, 3, 1),
            shift_name="Morning",
            source_cell=(10, 2),
            raw_value="M",
            color_key="#FFCC00",
        ),
        ExtractedEntry(
            person_name="John Roe",
            date=date(2025, 3, 2),
            shift_name=None,
            source_cell=(10, 3),
            warnings=("colour #123456 at D11 is not in the colour legend",),
            color_key="#123456",
        ),
        ExtractedEntry(
            person_name="Coord Ana",
            date=date(2025, 3, 1),
            shift_name="Night",
            source_cell=(11, 2),
            flagged=True,
        ),
    )
    return ExtractionResult(report=report, entries=entries)


def test_report_to_dict_uses_spreadsheet_positions() -> None:
    payload = report_to_dict(_result().report)

    assert payload["dateRowData"] == [{"column": 2, "value": 1, "type": "number"}]
    assert payload["nameColumnData"] == [{"row": 10, "value": "John Roe", "type": "text"}]
    assert payload["sampleScheduleData"] == [
        {"row": 11, "col": "C", "value": "M", "hasStyle": True}
    ]
    assert payload["errors"] == []
    assert payload["warnings"] == ["colour #123456 at D11 is not in the colour legend"]


def test_result_to_dict_lists_entries() -> None:
    payload = result_to_dict(_result())

    first = payload["entries"][0]
    assert first["personName"] == "John Roe"
    assert first["date"] == "2025-03-01"
    assert first["shiftName"] == "Morning"
    assert first["sourceCell"] == {"row": 10, "column": 2}
    assert payload["entries"][1]["shiftName"] is None


def test_write_report_workbook_creates_review_sheets(tmp_path: Path) -> None:
    metadata = RunMetadata(
        run_start=datetime(2025, 3, 5, 8, 30, tzinfo=UTC),
        input_path=tmp_path / "roster.xlsx",
        configuration_name="PRODUCER Schedule Configuration",
        role="PRODUCER",
        month=3,
        year=2025,
        dry_run=True,
    )

    output = write_report_workbook(_result(), tmp_path / "out" / "review.xlsx", metadata)

    workbook = load_workbook(output)
    assert workbook.sheetnames == ["Entries", "Diagnostics", "Samples", "RunInfo"]
    entries = workbook["Entries"]
    assert [cell.value for cell in entries[1]] == [
        "Person",
        "Date",
        "Shift",
        "Cell",
        "Value",
        "Colour",
        "Status",
    ]
    assert [cell.value for cell in entries[2]] == [
        "John Roe",
        "2025-03-01",
        "Morning",
        "C11",
        "M",
        "#FFCC00",
        "ASSIGNED",
    ]
    assert entries["G3"].value == "UNASSIGNED"
    assert entries["G4"].value == "FLAGGED"

    diagnostics = workbook["Diagnostics"]
    assert diagnostics["A2"].value == "warning"
    assert diagnostics["B2"].value == "colour #123456 at D11 is not in the colour legend"

    samples = workbook["Samples"]
    assert [samples.cell(row=row, column=2).value for row in range(2, 5)] == [
        "C",
        "row 11",
        "C11",
    ]

    run_info = {row[0].value: row[1].value for row in workbook["RunInfo"].iter_rows()}
    assert run_info["period"] == "2025-03"
    assert run_info["entries"] == 3
    assert run_info["assigned"] == 2
    assert run_info["dry_run"] is True

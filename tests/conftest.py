"""Shared workbook builders for tests."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest
import yaml
from openpyxl import Workbook
from openpyxl.styles import PatternFill
from shift_roster_importer.configuration import ExtractionConfig, parse_extraction_config
from shift_roster_importer.grid_access import WorksheetGrid

Cells = Mapping[tuple[int, int], object]
Fills = Mapping[tuple[int, int], str]


def build_workbook(cells: Cells, fills: Fills | None = None, title: str = "Schedule") -> Workbook:
    """Build a workbook from zero-based cell values and hex fill colours."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = title
    for (row, col), value in cells.items():
        sheet.cell(row=row + 1, column=col + 1, value=value)
    for (row, col), color in (fills or {}).items():
        sheet.cell(row=row + 1, column=col + 1).fill = PatternFill(
            fill_type="solid", fgColor=color.lstrip("#")
        )
    return workbook


@pytest.fixture
def make_grid() -> Callable[..., WorksheetGrid]:
    def _make(cells: Cells, fills: Fills | None = None) -> WorksheetGrid:
        workbook = build_workbook(cells, fills)
        return WorksheetGrid.from_worksheet(workbook.active)

    return _make


@pytest.fixture
def write_workbook(tmp_path: Path) -> Callable[..., Path]:
    def _write(cells: Cells, fills: Fills | None = None, name: str = "roster.xlsx") -> Path:
        path = tmp_path / name
        build_workbook(cells, fills).save(path)
        return path

    return _write


def producer_config_data(**overrides: object) -> dict[str, object]:
    """Configuration record shaped like the stored PRODUCER configuration."""
    data: dict[str, object] = {
        "name": "PRODUCER Schedule Configuration",
        "role": "PRODUCER",
        "dateRow": 8,
        "nameColumn": 1,
        "firstNameRow": 9,
        "lastNameRow": 11,
        "firstDateColumn": 2,
        "lastDateColumn": 31,
        "dynamicColumns": True,
        "skipValues": ["co"],
        "validPatterns": ["coordonator", "coordinator", "producer", "coord"],
        "colorDetection": True,
        "defaultShift": None,
    }
    data.update(overrides)
    return data


@pytest.fixture
def producer_config() -> Callable[..., ExtractionConfig]:
    def _config(**overrides: object) -> ExtractionConfig:
        return parse_extraction_config(producer_config_data(**overrides))

    return _config


@pytest.fixture
def write_inputs(tmp_path: Path) -> Callable[..., tuple[Path, Path]]:
    """Write a PRODUCER configuration file and a two-shift colour legend."""

    def _write(**config_overrides: object) -> tuple[Path, Path]:
        config_path = tmp_path / "extraction-config.yaml"
        config_path.write_text(
            yaml.safe_dump(producer_config_data(**config_overrides)), encoding="utf-8"
        )
        legend_path = tmp_path / "legend.json"
        legend_path.write_text(json.dumps(LEGEND_RECORDS), encoding="utf-8")
        return config_path, legend_path

    return _write


LEGEND_RECORDS = [
    {"colorCode": "#FFCC00", "shiftName": "Morning", "startTime": "06:00", "endTime": "14:00"},
    {"colorCode": "#00B0F0", "shiftName": "Night", "startTime": "22:00", "endTime": "06:00"},
]

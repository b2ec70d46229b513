"""Read-only, zero-based view over a parsed worksheet."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from .cell_values import CellValue
from .style_keys import style_key_from_fill


class GridLoadError(Exception):
    """Raised when a workbook or worksheet cannot be opened."""


@dataclass(frozen=True)
class GridCell:
    """Snapshot of one populated or styled worksheet cell."""

    value: CellValue
    style_key: str | None = None


class WorksheetGrid:
    """Cell value and style lookup by zero-based (row, column).

    The worksheet is copied into memory once; lookups never touch openpyxl
    and out-of-range coordinates read as empty.
    """

    def __init__(
        self,
        cells: Mapping[tuple[int, int], GridCell],
        *,
        title: str = "",
    ) -> None:
        self._cells = dict(cells)
        self.title = title
        self.row_count = max((row for row, _ in self._cells), default=-1) + 1
        self.column_count = max((col for _, col in self._cells), default=-1) + 1

    @classmethod
    def from_worksheet(cls, sheet: Worksheet) -> WorksheetGrid:
        cells: dict[tuple[int, int], GridCell] = {}
        for row in sheet.iter_rows():
            for cell in row:
                value = CellValue.from_raw(cell.value)
                style_key = style_key_from_fill(getattr(cell, "fill", None))
                if value.is_empty and style_key is None:
                    continue
                cells[(cell.row - 1, cell.column - 1)] = GridCell(value=value, style_key=style_key)
        return cls(cells, title=sheet.title)

    def value_at(self, row: int, col: int) -> CellValue:
        cell = self._cells.get((row, col))
        return cell.value if cell else CellValue.empty()

    def style_key_at(self, row: int, col: int) -> str | None:
        cell = self._cells.get((row, col))
        return cell.style_key if cell else None


def load_grid(workbook_path: Path | str, sheet_name: str | None = None) -> WorksheetGrid:
    """Open a workbook and snapshot one worksheet (the first one by default)."""
    path = Path(workbook_path)
    if not path.exists():
        raise GridLoadError(f"Workbook file not found: {path}")
    try:
        workbook = load_workbook(path, data_only=True)
    except (InvalidFileException, BadZipFile, OSError, ValueError, KeyError) as exc:
        raise GridLoadError(f"Failed to open workbook {path.name}: {exc}") from exc

    if sheet_name is None:
        sheet = workbook.worksheets[0] if workbook.worksheets else None
    elif sheet_name in workbook.sheetnames:
        sheet = workbook[sheet_name]
    else:
        raise GridLoadError(f"Worksheet '{sheet_name}' not found in {path.name}.")
    if sheet is None:
        raise GridLoadError(f"Workbook {path.name} has no worksheet.")
    assert isinstance(sheet, Worksheet)
    return WorksheetGrid.from_worksheet(sheet)


def column_label(col: int) -> str:
    """Spreadsheet letters for a zero-based column index."""
    return get_column_letter(col + 1)


def cell_label(row: int, col: int) -> str:
    """A1-style reference for a zero-based coordinate."""
    return f"{column_label(col)}{row + 1}"

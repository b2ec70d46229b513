"""Grid access exports."""

from .cell_values import CellKind, CellValue
from .style_keys import normalize_color_code, style_key_from_fill
from .worksheet_grid import (
    GridCell,
    GridLoadError,
    WorksheetGrid,
    cell_label,
    column_label,
    load_grid,
)

__all__ = [
    "CellKind",
    "CellValue",
    "GridCell",
    "GridLoadError",
    "WorksheetGrid",
    "cell_label",
    "column_label",
    "load_grid",
    "normalize_color_code",
    "style_key_from_fill",
]

"""Extraction domain entities."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class Severity(str, Enum):
    """Diagnostic severity; errors block reconciliation."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """One message tied to an optional zero-based cell coordinate."""

    severity: Severity
    message: str
    row: int | None = None
    column: int | None = None

    @classmethod
    def error(cls, message: str, row: int | None = None, column: int | None = None) -> Diagnostic:
        return cls(Severity.ERROR, message, row, column)

    @classmethod
    def warning(
        cls, message: str, row: int | None = None, column: int | None = None
    ) -> Diagnostic:
        return cls(Severity.WARNING, message, row, column)

    @property
    def position(self) -> tuple[int, int]:
        return (
            -1 if self.row is None else self.row,
            -1 if self.column is None else self.column,
        )


def order_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Sort by (row, column); sheet-wide diagnostics first, ties keep input order."""
    return sorted(diagnostics, key=lambda item: item.position)


@dataclass(frozen=True)
class AxisSample:
    """Raw value read along the date row or the name column."""

    index: int
    value: float | int | str | None
    value_type: str


@dataclass(frozen=True)
class Resolution(Generic[T]):
    """Resolver output: a value plus the diagnostics gathered producing it."""

    value: T
    diagnostics: tuple[Diagnostic, ...] = ()
    samples: tuple[AxisSample, ...] = ()

    @property
    def has_errors(self) -> bool:
        return any(item.severity == Severity.ERROR for item in self.diagnostics)


@dataclass(frozen=True)
class DateColumn:
    """Worksheet column resolved to a calendar date."""

    column: int
    day: int
    date: date


@dataclass(frozen=True)
class NameRow:
    """Person resolved from the name band.

    ``row`` is the row holding the person's shift cells; ``source_rows`` lists
    every row that contributed a name fragment.
    """

    row: int
    name: str
    source_rows: tuple[int, ...]
    flagged: bool = False
    matched_pattern: str | None = None


@dataclass(frozen=True)
class ExtractedEntry:  # pylint: disable=too-many-instance-attributes
    """One (person, date, shift) record produced from a grid cell."""

    person_name: str
    date: date
    shift_name: str | None
    source_cell: tuple[int, int]
    warnings: tuple[str, ...] = ()
    raw_value: str = ""
    color_key: str | None = None
    flagged: bool = False

    @property
    def is_assigned(self) -> bool:
        return self.shift_name is not None


@dataclass(frozen=True)
class SampleCell:
    """Preview of one cell inside the extraction rectangle."""

    row: int
    column: int
    value: float | int | str | None
    has_style: bool


@dataclass(frozen=True)
class ValidationReport:
    """Errors, warnings and bounded previews of one extraction run."""

    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    date_row_samples: tuple[AxisSample, ...] = ()
    name_column_samples: tuple[AxisSample, ...] = ()
    sample_cells: tuple[SampleCell, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class ExtractionResult:
    """Entries plus the report; entries are empty whenever the report has errors."""

    report: ValidationReport
    entries: tuple[ExtractedEntry, ...] = ()
    date_columns: tuple[DateColumn, ...] = field(default=())
    name_rows: tuple[NameRow, ...] = field(default=())

    @property
    def assigned_entries(self) -> tuple[ExtractedEntry, ...]:
        return tuple(entry for entry in self.entries if entry.is_assigned)

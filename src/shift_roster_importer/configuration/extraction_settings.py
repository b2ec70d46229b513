"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Organizational role a schedule sheet belongs to."""

    OPERATOR = "OPERATOR"
    PRODUCER = "PRODUCER"


class SkipMatch(str, Enum):
    """How skip values are compared against cell text."""

    EXACT = "exact"
    CONTAINS = "contains"


@dataclass(frozen=True)
class ExtractionConfig:  # pylint: disable=too-many-instance-attributes
    """Coordinates and processing rules for one role's schedule sheet.

    All coordinates are zero-based. ``skip_values`` and ``valid_patterns`` are
    stored lower-cased so comparisons are case-insensitive.
    """

    name: str
    role: Role
    date_row: int
    name_column: int
    first_name_row: int
    last_name_row: int
    first_date_column: int
    last_date_column: int
    dynamic_columns: bool = True
    skip_values: tuple[str, ...] = ()
    valid_patterns: tuple[str, ...] = ()
    color_detection: bool = True
    default_shift: str | None = None
    description: str = ""
    active: bool = True
    day_label_row: int | None = None
    multi_row_names: bool = False
    exclude_flagged_names: bool = False
    skip_match: SkipMatch = SkipMatch.EXACT


@dataclass(frozen=True)
class ColorLegendEntry:
    """Fill colour to shift definition mapping."""

    color_code: str
    color_name: str
    shift_name: str
    start_time: str
    end_time: str
    description: str = ""
    role: Role | None = None


class ColorLegend(Mapping[str, ColorLegendEntry]):
    """Read-only legend keyed by normalized colour code, in source order."""

    def __init__(self, entries: tuple[ColorLegendEntry, ...] = ()) -> None:
        self._entries = entries
        self._by_code = {entry.color_code: entry for entry in entries}

    def __getitem__(self, key: str) -> ColorLegendEntry:
        return self._by_code[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_code)

    def __len__(self) -> int:
        return len(self._by_code)

    @property
    def entries(self) -> tuple[ColorLegendEntry, ...]:
        return self._entries

    def find_shift(self, shift_name: str) -> ColorLegendEntry | None:
        """Return the entry whose shift name matches case-insensitively."""
        wanted = shift_name.strip().lower()
        for entry in self._entries:
            if entry.shift_name.strip().lower() == wanted:
                return entry
        return None

"""Reconciliation domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date

from shift_roster_importer.configuration.extraction_settings import Role


@dataclass(frozen=True)
class PersistedEntry:
    """Schedule entry already held by the persistence collaborator."""

    entry_id: str
    role: Role
    person_name: str
    date: date
    shift_name: str | None = None


@dataclass(frozen=True)
class NewScheduleEntry:
    """Schedule entry to insert."""

    role: Role
    person_name: str
    date: date
    shift_name: str | None
    source_cell: tuple[int, int] | None = None


@dataclass(frozen=True)
class MergePlan:
    """One atomic write: retire every id in ``retire_ids``, then insert ``inserts``."""

    role: Role
    window_start: date | None
    window_end: date | None
    retire_ids: tuple[str, ...] = ()
    inserts: tuple[NewScheduleEntry, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.retire_ids and not self.inserts


@dataclass(frozen=True)
class RosterMatchReport:
    """Outcome of matching extracted names against known people."""

    total_entries: int
    matched_entries: int
    unmatched_entries: int
    matched_names: Mapping[str, str] = field(default_factory=dict)
    unmatched_names: tuple[str, ...] = ()
    duplicates: tuple[str, ...] = ()

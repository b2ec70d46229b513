"""Persistence collaborator contract and the in-memory adapter."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from shift_roster_importer.configuration.extraction_settings import Role
from shift_roster_importer.extraction.skip_rules import person_key
from shift_roster_importer.reconciliation.merge_models import (
    MergePlan,
    NewScheduleEntry,
    PersistedEntry,
)


class CommitError(Exception):
    """Raised when a merge plan cannot be applied; prior state is left unchanged."""


@dataclass(frozen=True)
class CommitSummary:
    """Counts of one applied merge plan."""

    retired: int
    inserted: int


class ScheduleStore(Protocol):
    """Store that reads schedule entries and applies merge plans atomically."""

    def entries_for_role(
        self, role: Role, start: date | None = None, end: date | None = None
    ) -> list[PersistedEntry]:
        """Return persisted entries of ``role``, optionally within [start, end]."""

    def apply_merge_plan(self, plan: MergePlan) -> CommitSummary:
        """Apply all retirements and inserts, or none of them."""


def entry_id_for(entry: NewScheduleEntry) -> str:
    """Natural key of an entry: one row per role, person and day."""
    person = person_key(entry.person_name)
    return f"{entry.role.value}:{entry.date.isoformat()}:{person}"


def apply_plan(
    entries: Mapping[str, PersistedEntry], plan: MergePlan
) -> dict[str, PersistedEntry]:
    """Return the state after ``plan``; ``entries`` itself is never modified."""
    missing = [entry_id for entry_id in plan.retire_ids if entry_id not in entries]
    if missing:
        raise CommitError(f"Cannot retire unknown schedule entries: {', '.join(missing)}")

    updated = {
        entry_id: entry for entry_id, entry in entries.items() if entry_id not in plan.retire_ids
    }
    for new_entry in plan.inserts:
        entry_id = entry_id_for(new_entry)
        if entry_id in updated:
            raise CommitError(f"Schedule entry {entry_id} already exists outside the retired set.")
        updated[entry_id] = PersistedEntry(
            entry_id=entry_id,
            role=new_entry.role,
            person_name=new_entry.person_name,
            date=new_entry.date,
            shift_name=new_entry.shift_name,
        )
    return updated


def select_entries(
    entries: Iterable[PersistedEntry], role: Role, start: date | None, end: date | None
) -> list[PersistedEntry]:
    selected = [
        entry
        for entry in entries
        if entry.role == role
        and (start is None or entry.date >= start)
        and (end is None or entry.date <= end)
    ]
    return sorted(selected, key=lambda entry: (entry.date, entry.entry_id))


class InMemoryScheduleStore:
    """Schedule store kept in process memory."""

    def __init__(self, entries: Iterable[PersistedEntry] = ()) -> None:
        self._entries = {entry.entry_id: entry for entry in entries}
        self._lock = threading.Lock()

    def entries_for_role(
        self, role: Role, start: date | None = None, end: date | None = None
    ) -> list[PersistedEntry]:
        with self._lock:
            return select_entries(self._entries.values(), role, start, end)

    def apply_merge_plan(self, plan: MergePlan) -> CommitSummary:
        with self._lock:
            self._entries = apply_plan(self._entries, plan)
        return CommitSummary(retired=len(plan.retire_ids), inserted=len(plan.inserts))

    def snapshot(self) -> tuple[PersistedEntry, ...]:
        with self._lock:
            return tuple(sorted(self._entries.values(), key=lambda entry: entry.entry_id))

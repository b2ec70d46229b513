"""Merge planner tests."""

from __future__ import annotations

from datetime import date

import pytest
from shift_roster_importer.configuration import Role
from shift_roster_importer.extraction import ExtractedEntry, ExtractionResult, ValidationReport
from shift_roster_importer.reconciliation import (
    PersistedEntry,
    ReconciliationError,
    plan_import,
    plan_merge,
)


def _entry(name: str, day: int, shift: str | None = "Morning", row: int = 9) -> ExtractedEntry:
    return ExtractedEntry(
        person_name=name,
        date=date(2025, 3, day),
        shift_name=shift,
        source_cell=(row, 1 + day),
    )


def _persisted(entry_id: str, role: Role, day: int, month: int = 3) -> PersistedEntry:
    return PersistedEntry(
        entry_id=entry_id,
        role=role,
        person_name="Someone",
        date=date(2025, month, day),
        shift_name="Night",
    )


def test_retires_role_entries_inside_batch_window_only() -> None:
    persisted = [
        _persisted("p-before", Role.PRODUCER, 1),
        _persisted("p-inside-b", Role.PRODUCER, 5),
        _persisted("p-inside-a", Role.PRODUCER, 3),
        _persisted("p-after", Role.PRODUCER, 20),
        _persisted("o-inside", Role.OPERATOR, 4),
        _persisted("p-other-month", Role.PRODUCER, 4, month=4),
    ]
    entries = [_entry("John Roe", 10), _entry("Jane Doe", 2, row=10), _entry("Jane Doe", 3)]

    plan = plan_merge(entries, Role.PRODUCER, 3, 2025, persisted)

    assert (plan.window_start, plan.window_end) == (date(2025, 3, 2), date(2025, 3, 10))
    assert plan.retire_ids == ("p-inside-a", "p-inside-b")
    assert [(item.person_name, item.date.day) for item in plan.inserts] == [
        ("Jane Doe", 2),
        ("Jane Doe", 3),
        ("John Roe", 10),
    ]
    assert all(item.role is Role.PRODUCER for item in plan.inserts)


def test_empty_batch_yields_empty_plan() -> None:
    plan = plan_merge([], Role.OPERATOR, 3, 2025, [_persisted("o-1", Role.OPERATOR, 4)])

    assert plan.is_empty
    assert plan.window_start is None


def test_unassigned_entries_are_inserted_as_unassigned() -> None:
    plan = plan_merge([_entry("John Roe", 4, shift=None)], Role.PRODUCER, 3, 2025, [])

    assert plan.inserts[0].shift_name is None


def test_duplicate_person_day_is_rejected() -> None:
    entries = [_entry("John Roe", 4), _entry("john  roe", 4, row=11)]

    with pytest.raises(ReconciliationError, match="Duplicate schedule entries: john  roe"):
        plan_merge(entries, Role.PRODUCER, 3, 2025, [])


def test_entries_outside_month_are_rejected() -> None:
    with pytest.raises(ReconciliationError, match="fall outside 2025-04"):
        plan_merge([_entry("John Roe", 4)], Role.PRODUCER, 4, 2025, [])


def test_plan_import_refuses_reports_with_errors() -> None:
    result = ExtractionResult(
        report=ValidationReport(errors=("no data found in date row 9 (columns C-AG)",))
    )

    with pytest.raises(ReconciliationError, match="refusing to reconcile"):
        plan_import(result, Role.PRODUCER, 3, 2025, [])


def test_plan_import_plans_valid_results() -> None:
    result = ExtractionResult(report=ValidationReport(), entries=(_entry("John Roe", 1),))

    plan = plan_import(result, Role.PRODUCER, 3, 2025, [_persisted("p-1", Role.PRODUCER, 1)])

    assert plan.retire_ids == ("p-1",)
    assert len(plan.inserts) == 1


def test_names_sharing_a_store_key_are_duplicates() -> None:
    entries = [_entry("Ana Maria", 1), _entry("Ana-Maria", 1, row=10)]

    with pytest.raises(ReconciliationError, match="Duplicate schedule entries: Ana-Maria"):
        plan_merge(entries, Role.PRODUCER, 3, 2025, [])

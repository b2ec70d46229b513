"""Full-replace-within-window merge planning.

Every persisted entry of the imported role whose date falls inside the
min-max date span of the incoming batch is retired, and the whole batch is
inserted. Applying the same plan twice leaves the same final state.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import date

from shift_roster_importer.configuration.extraction_settings import Role
from shift_roster_importer.extraction.extraction_models import ExtractedEntry, ExtractionResult
from shift_roster_importer.extraction.skip_rules import person_key

from .merge_models import MergePlan, NewScheduleEntry, PersistedEntry

logger = logging.getLogger(__name__)


class ReconciliationError(Exception):
    """Raised when a batch cannot be turned into a merge plan."""


def plan_import(
    result: ExtractionResult,
    role: Role,
    month: int,
    year: int,
    persisted: Iterable[PersistedEntry],
) -> MergePlan:
    """Plan the merge of an extraction run; refuses runs whose report has errors."""
    if not result.report.is_valid:
        raise ReconciliationError(
            "Extraction report has errors; refusing to reconcile: "
            + "; ".join(result.report.errors)
        )
    return plan_merge(result.entries, role, month, year, persisted)


def plan_merge(
    entries: Sequence[ExtractedEntry],
    role: Role,
    month: int,
    year: int,
    persisted: Iterable[PersistedEntry],
) -> MergePlan:
    """Build the retire/insert plan for ``entries`` of ``role`` in ``month``/``year``."""
    if not entries:
        return MergePlan(role=role, window_start=None, window_end=None)

    _ensure_within_month(entries, month, year)
    _ensure_unique_person_days(entries)

    window_start = min(entry.date for entry in entries)
    window_end = max(entry.date for entry in entries)
    retire_ids = tuple(
        sorted(
            item.entry_id
            for item in persisted
            if item.role == role and window_start <= item.date <= window_end
        )
    )
    inserts = tuple(
        NewScheduleEntry(
            role=role,
            person_name=entry.person_name,
            date=entry.date,
            shift_name=entry.shift_name,
            source_cell=entry.source_cell,
        )
        for entry in sorted(entries, key=lambda item: (item.date, item.source_cell))
    )
    logger.info(
        "Planned %s merge for %s..%s: retire %d, insert %d",
        role.value,
        window_start.isoformat(),
        window_end.isoformat(),
        len(retire_ids),
        len(inserts),
    )
    return MergePlan(
        role=role,
        window_start=window_start,
        window_end=window_end,
        retire_ids=retire_ids,
        inserts=inserts,
    )


def _ensure_within_month(entries: Sequence[ExtractedEntry], month: int, year: int) -> None:
    outside = [entry for entry in entries if (entry.date.year, entry.date.month) != (year, month)]
    if outside:
        first = outside[0]
        raise ReconciliationError(
            f"{len(outside)} entries fall outside {year}-{month:02d}, "
            f"first: {first.person_name} on {first.date.isoformat()}"
        )


def _ensure_unique_person_days(entries: Sequence[ExtractedEntry]) -> None:
    seen: set[tuple[str, date]] = set()
    duplicates: list[str] = []
    for entry in entries:
        key = (person_key(entry.person_name), entry.date)
        if key in seen:
            duplicates.append(f"{entry.person_name} on {entry.date.isoformat()}")
        seen.add(key)
    if duplicates:
        raise ReconciliationError("Duplicate schedule entries: " + ", ".join(duplicates))

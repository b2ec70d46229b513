"""Schedule store persisted as one JSON document."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Iterable
from datetime import date
from pathlib import Path
from typing import Any

from shift_roster_importer.configuration.extraction_settings import Role
from shift_roster_importer.reconciliation.merge_models import MergePlan, PersistedEntry

from .store_contracts import CommitError, CommitSummary, apply_plan, select_entries

logger = logging.getLogger(__name__)


class JsonFileScheduleStore:
    """Schedule store writing the whole document through a temp file and atomic replace."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def entries_for_role(
        self, role: Role, start: date | None = None, end: date | None = None
    ) -> list[PersistedEntry]:
        return select_entries(self._load().values(), role, start, end)

    def apply_merge_plan(self, plan: MergePlan) -> CommitSummary:
        updated = apply_plan(self._load(), plan)
        self._write(updated.values())
        logger.info(
            "Committed %s plan to %s: retired %d, inserted %d",
            plan.role.value,
            self.path,
            len(plan.retire_ids),
            len(plan.inserts),
        )
        return CommitSummary(retired=len(plan.retire_ids), inserted=len(plan.inserts))

    def snapshot(self) -> tuple[PersistedEntry, ...]:
        return tuple(sorted(self._load().values(), key=lambda entry: entry.entry_id))

    def _load(self) -> dict[str, PersistedEntry]:
        if not self.path.exists():
            return {}
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
            records = document.get("entries", []) if isinstance(document, dict) else document
            entries = [_decode_entry(record) for record in records]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
            raise CommitError(f"Schedule store {self.path} is unreadable: {exc}") from exc
        return {entry.entry_id: entry for entry in entries}

    def _write(self, entries: Iterable[PersistedEntry]) -> None:
        ordered = sorted(entries, key=lambda entry: entry.entry_id)
        payload = {"entries": [_encode_entry(entry) for entry in ordered]}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        handle = tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            delete=False,
        )
        try:
            with handle:
                json.dump(payload, handle, ensure_ascii=False, indent=2)
            os.replace(handle.name, self.path)
        except OSError as exc:
            Path(handle.name).unlink(missing_ok=True)
            raise CommitError(f"Failed to write schedule store {self.path}: {exc}") from exc


def _encode_entry(entry: PersistedEntry) -> dict[str, Any]:
    return {
        "id": entry.entry_id,
        "role": entry.role.value,
        "personName": entry.person_name,
        "date": entry.date.isoformat(),
        "shiftName": entry.shift_name,
    }


def _decode_entry(record: dict[str, Any]) -> PersistedEntry:
    return PersistedEntry(
        entry_id=str(record["id"]),
        role=Role(record["role"]),
        person_name=str(record["personName"]),
        date=date.fromisoformat(record["date"]),
        shift_name=record.get("shiftName"),
    )

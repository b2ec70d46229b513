"""Schedule store exports."""

from .json_file_store import JsonFileScheduleStore
from .store_contracts import (
    CommitError,
    CommitSummary,
    InMemoryScheduleStore,
    ScheduleStore,
    entry_id_for,
)

__all__ = [
    "CommitError",
    "CommitSummary",
    "InMemoryScheduleStore",
    "JsonFileScheduleStore",
    "ScheduleStore",
    "entry_id_for",
]

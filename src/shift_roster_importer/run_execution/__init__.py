"""Run execution domain exports."""

from .import_run_use_case import (
    ExtractionRejectedError,
    RunExecutionError,
    execute_schedule_import,
)
from .run_contracts import ImportArtifacts, ImportOutcome, ImportRequest

__all__ = [
    "ImportRequest",
    "ImportOutcome",
    "ImportArtifacts",
    "RunExecutionError",
    "ExtractionRejectedError",
    "execute_schedule_import",
]

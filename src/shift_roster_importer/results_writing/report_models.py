"""Results writing entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path


class EntryStatus(str, Enum):
    """Rendered status of an extracted entry in the report workbook."""

    ASSIGNED = "ASSIGNED"
    UNASSIGNED = "UNASSIGNED"
    FLAGGED = "FLAGGED"


@dataclass(frozen=True)
class RunMetadata:
    """Metadata rendered into the RunInfo sheet."""

    run_start: datetime
    input_path: Path
    configuration_name: str
    role: str
    month: int
    year: int
    dry_run: bool

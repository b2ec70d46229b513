"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from shift_roster_importer.configuration.extraction_settings import ColorLegend, ExtractionConfig
from shift_roster_importer.extraction.extraction_models import ExtractionResult
from shift_roster_importer.grid_access import WorksheetGrid
from shift_roster_importer.reconciliation.merge_models import MergePlan, RosterMatchReport
from shift_roster_importer.schedule_store.store_contracts import CommitSummary


@dataclass(frozen=True)
class ImportRequest:  # pylint: disable=too-many-instance-attributes
    """Input contract for extracting, and optionally committing, one sheet."""

    config_path: str
    input_path: str
    month: int
    year: int
    role: str | None = None
    legend_path: str | None = None
    roster_path: str | None = None
    store_path: str | None = None
    report_path: str | None = None
    sheet_name: str | None = None
    dry_run: bool = True
    max_workers: int = 1


@dataclass(frozen=True)
class ImportArtifacts:
    """Loaded inputs required during one run."""

    configuration: ExtractionConfig
    legend: ColorLegend
    grid: WorksheetGrid
    roster: tuple[str, ...] | None


@dataclass(frozen=True)
class ImportOutcome:
    """Output contract for one completed run."""

    result: ExtractionResult
    dry_run: bool
    report_path: Path | None = None
    roster_report: RosterMatchReport | None = None
    plan: MergePlan | None = None
    commit: CommitSummary | None = None

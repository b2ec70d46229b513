"""Schedule import use-case service."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from shift_roster_importer.configuration import (
    ColorLegend,
    ConfigurationError,
    load_color_legend,
    load_extraction_config,
    load_roster,
)
from shift_roster_importer.extraction import ExtractionResult, ValidationReport, extract_schedule
from shift_roster_importer.grid_access import GridLoadError, load_grid
from shift_roster_importer.reconciliation import (
    ReconciliationError,
    RosterMatchReport,
    match_roster,
    plan_import,
)
from shift_roster_importer.results_writing import RunMetadata, write_report_workbook
from shift_roster_importer.schedule_store import CommitError, JsonFileScheduleStore, ScheduleStore

from .run_contracts import ImportArtifacts, ImportOutcome, ImportRequest

logger = logging.getLogger(__name__)


class RunExecutionError(Exception):
    """Raised when an import run cannot be completed."""


class ExtractionRejectedError(RunExecutionError):
    """Raised in commit mode when the validation report holds errors."""

    def __init__(self, report: ValidationReport) -> None:
        super().__init__("Extraction failed validation: " + "; ".join(report.errors))
        self.report = report


def execute_schedule_import(
    request: ImportRequest, *, store: ScheduleStore | None = None
) -> ImportOutcome:
    """Extract one sheet and, outside dry-run mode, commit it in a single write."""
    run_start = datetime.now(UTC)
    artifacts = _load_import_artifacts(request)
    try:
        result = extract_schedule(
            artifacts.grid,
            artifacts.configuration,
            artifacts.legend,
            request.month,
            request.year,
            max_workers=request.max_workers,
        )
    except ValueError as exc:
        raise RunExecutionError(str(exc)) from exc

    report_path = _write_report(request, artifacts, result, run_start)
    if request.dry_run:
        return ImportOutcome(result=result, dry_run=True, report_path=report_path)

    if not result.report.is_valid:
        raise ExtractionRejectedError(result.report)

    resolved_store = store if store is not None else _open_store(request.store_path)
    result, roster_report = _apply_roster(result, artifacts.roster)
    role = artifacts.configuration.role
    try:
        plan = plan_import(
            result,
            role,
            request.month,
            request.year,
            resolved_store.entries_for_role(role),
        )
        commit = resolved_store.apply_merge_plan(plan)
    except (ReconciliationError, CommitError) as exc:
        raise RunExecutionError(str(exc)) from exc

    logger.info(
        "Imported %s schedule for %d-%02d: retired %d, inserted %d",
        role.value,
        request.year,
        request.month,
        commit.retired,
        commit.inserted,
    )
    return ImportOutcome(
        result=result,
        dry_run=False,
        report_path=report_path,
        roster_report=roster_report,
        plan=plan,
        commit=commit,
    )


def _load_import_artifacts(request: ImportRequest) -> ImportArtifacts:
    try:
        configuration = load_extraction_config(request.config_path, request.role)
        legend = (
            load_color_legend(request.legend_path, configuration.role)
            if request.legend_path
            else ColorLegend()
        )
        roster = load_roster(request.roster_path) if request.roster_path else None
        grid = load_grid(request.input_path, request.sheet_name)
    except (ConfigurationError, GridLoadError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc
    if configuration.color_detection and not legend:
        logger.warning("Colour detection is on but the colour legend is empty")
    return ImportArtifacts(configuration=configuration, legend=legend, grid=grid, roster=roster)


def _apply_roster(
    result: ExtractionResult, roster: tuple[str, ...] | None
) -> tuple[ExtractionResult, RosterMatchReport | None]:
    if roster is None:
        return result, None
    entries, roster_report = match_roster(result.entries, roster)
    if result.entries and not entries:
        raise RunExecutionError("No entries could be matched to the roster.")
    if roster_report.unmatched_names:
        logger.warning("Unmatched names: %s", ", ".join(roster_report.unmatched_names))
    matched = ExtractionResult(
        report=result.report,
        entries=entries,
        date_columns=result.date_columns,
        name_rows=result.name_rows,
    )
    return matched, roster_report


def _open_store(store_path: str | None) -> ScheduleStore:
    if not store_path:
        raise RunExecutionError("Commit mode requires a schedule store path.")
    return JsonFileScheduleStore(store_path)


def _write_report(
    request: ImportRequest,
    artifacts: ImportArtifacts,
    result: ExtractionResult,
    run_start: datetime,
) -> Path | None:
    if not request.report_path:
        return None
    metadata = RunMetadata(
        run_start=run_start,
        input_path=Path(request.input_path).resolve(),
        configuration_name=artifacts.configuration.name,
        role=artifacts.configuration.role.value,
        month=request.month,
        year=request.year,
        dry_run=request.dry_run,
    )
    try:
        return write_report_workbook(result, request.report_path, metadata)
    except OSError as exc:
        raise RunExecutionError(f"Failed to write report workbook: {exc}") from exc

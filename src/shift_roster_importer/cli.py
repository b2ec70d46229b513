"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys

import click

from shift_roster_importer.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Role,
    write_placeholder_configuration,
)
from shift_roster_importer.results_writing import result_to_dict
from shift_roster_importer.run_execution import (
    ExtractionRejectedError,
    ImportRequest,
    RunExecutionError,
    execute_schedule_import,
)


class CliError(Exception):
    """Custom CLI error."""


def _common_run_options(command):
    options = (
        click.option(
            "--config",
            "config_path",
            required=True,
            type=click.Path(path_type=str),
            help="Path to the YAML/JSON extraction configuration file",
        ),
        click.option(
            "--input",
            "input_path",
            required=True,
            type=click.Path(path_type=str),
            help="Path to the schedule workbook",
        ),
        click.option(
            "--month", required=True, type=click.IntRange(1, 12), help="Month of the sheet"
        ),
        click.option("--year", required=True, type=click.IntRange(1900, 9999), help="Year"),
        click.option(
            "--role",
            required=False,
            type=click.Choice([role.value for role in Role], case_sensitive=False),
            help="Role whose active configuration is used",
        ),
        click.option(
            "--legend",
            "legend_path",
            required=False,
            type=click.Path(path_type=str),
            help="Path to the YAML/JSON colour legend",
        ),
        click.option(
            "--sheet",
            "sheet_name",
            required=False,
            help="Worksheet name; defaults to the first sheet",
        ),
        click.option(
            "--report",
            "report_path",
            required=False,
            type=click.Path(path_type=str),
            help="Optional path for a report workbook",
        ),
        click.option(
            "--workers",
            "max_workers",
            default=1,
            show_default=True,
            type=click.IntRange(min=1),
            help="Threads used to scan person rows",
        ),
    )
    for option in reversed(options):
        command = option(command)
    return command


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="shift-roster-importer")
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level written to stderr",
)
def cli(log_level: str) -> None:
    """Configuration-driven schedule spreadsheet importer."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML extraction configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML extraction configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="check")
@_common_run_options
def check_schedule(**options) -> None:
    """Dry run: extract the sheet and print the validation report as JSON."""
    request = ImportRequest(dry_run=True, **options)
    try:
        outcome = execute_schedule_import(request)
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(json.dumps(result_to_dict(outcome.result), ensure_ascii=False, indent=2))
    if not outcome.result.report.is_valid:
        raise CliError(f"{len(outcome.result.report.errors)} error(s) found.")


@cli.command(name="import")
@_common_run_options
@click.option(
    "--store",
    "store_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON schedule store to update",
)
@click.option(
    "--roster",
    "roster_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional YAML/JSON list of known names to match against",
)
def import_schedule(**options) -> None:
    """Extract the sheet and replace the stored schedule for its date window."""
    request = ImportRequest(dry_run=False, **options)
    try:
        outcome = execute_schedule_import(request)
    except ExtractionRejectedError as exc:
        for message in exc.report.errors:
            click.echo(f"error: {message}", err=True)
        for message in exc.report.warnings:
            click.echo(f"warning: {message}", err=True)
        raise CliError(str(exc)) from exc
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc

    for message in outcome.result.report.warnings:
        click.echo(f"warning: {message}", err=True)
    if outcome.roster_report and outcome.roster_report.unmatched_names:
        unmatched = ", ".join(outcome.roster_report.unmatched_names)
        click.echo(f"warning: unmatched names: {unmatched}", err=True)
    commit = outcome.commit
    retired = commit.retired if commit else 0
    inserted = commit.inserted if commit else 0
    click.echo(f"retired {retired}, inserted {inserted}")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

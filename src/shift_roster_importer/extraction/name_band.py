"""Name band resolution."""

from __future__ import annotations

from dataclasses import replace

from shift_roster_importer.configuration.extraction_settings import ExtractionConfig, SkipMatch
from shift_roster_importer.grid_access import CellKind, WorksheetGrid, cell_label, column_label

from .extraction_models import AxisSample, Diagnostic, NameRow, Resolution
from .skip_rules import find_pattern, matches_skip_value, person_key


def resolve_name_band(
    grid: WorksheetGrid, config: ExtractionConfig
) -> Resolution[tuple[NameRow, ...]]:
    """Read person names from the configured column and row band.

    Empty rows and rows whose whole text is a skip value are passed over silently.
    Rows containing a ``valid_patterns`` token are kept but flagged; whether
    flagged rows take part in shift accounting is the caller's decision.
    """
    diagnostics: list[Diagnostic] = []
    samples: list[AxisSample] = []
    fragments: list[tuple[int, str]] = []
    col = config.name_column

    for row in range(config.first_name_row, config.last_name_row + 1):
        value = grid.value_at(row, col)
        if value.is_empty:
            continue
        samples.append(AxisSample(index=row, value=value.raw, value_type=value.kind.value))
        if value.kind == CellKind.NUMBER:
            diagnostics.append(
                Diagnostic.warning(
                    f"non-text value in name column at {cell_label(row, col)}: {value.display}",
                    row,
                    col,
                )
            )
            continue
        text = " ".join(value.display.split())
        # Name cells match skip values whole, never by substring.
        if matches_skip_value(text, config.skip_values, SkipMatch.EXACT):
            continue
        fragments.append((row, text))

    people = _group_fragments(fragments, multi_row=config.multi_row_names)
    resolved: list[NameRow] = []
    seen_names: dict[str, int] = {}
    for person in people:
        pattern = find_pattern(person.name, config.valid_patterns)
        if pattern is not None:
            person = replace(person, flagged=True, matched_pattern=pattern)
            diagnostics.append(
                Diagnostic.warning(
                    f"name row {person.row + 1} '{person.name}' matches designation "
                    f"pattern '{pattern}'",
                    person.row,
                    col,
                )
            )
        key = person_key(person.name)
        if key in seen_names:
            diagnostics.append(
                Diagnostic.warning(
                    f"duplicate name '{person.name}' in rows {seen_names[key] + 1} "
                    f"and {person.row + 1}",
                    person.row,
                    col,
                )
            )
        else:
            seen_names[key] = person.row
        resolved.append(person)

    if not resolved:
        diagnostics.append(
            Diagnostic.error(
                f"no names found in configured name band (column {column_label(col)}, "
                f"rows {config.first_name_row + 1}-{config.last_name_row + 1})"
            )
        )
    return Resolution(value=tuple(resolved), diagnostics=tuple(diagnostics), samples=tuple(samples))


def _group_fragments(fragments: list[tuple[int, str]], *, multi_row: bool) -> list[NameRow]:
    """Pair a first-name row with an immediately following last-name row."""
    people: list[NameRow] = []
    index = 0
    while index < len(fragments):
        row, text = fragments[index]
        following = fragments[index + 1] if index + 1 < len(fragments) else None
        if multi_row and following is not None and following[0] == row + 1:
            people.append(
                NameRow(row=row, name=f"{text} {following[1]}", source_rows=(row, following[0]))
            )
            index += 2
            continue
        people.append(NameRow(row=row, name=text, source_rows=(row,)))
        index += 1
    return people

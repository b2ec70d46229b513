"""Name band resolution tests."""

from __future__ import annotations

from shift_roster_importer.extraction import resolve_name_band

NAME_COLUMN = 1


def _names(*values: object, start: int = 9) -> dict[tuple[int, int], object]:
    return {(start + offset, NAME_COLUMN): value for offset, value in enumerate(values)}


def test_reads_names_and_skips_empty_rows(make_grid, producer_config) -> None:
    grid = make_grid(_names("  Jane   Doe ", None, "John Roe"))

    resolution = resolve_name_band(grid, producer_config())

    assert [(person.row, person.name) for person in resolution.value] == [
        (9, "Jane Doe"),
        (11, "John Roe"),
    ]
    assert resolution.diagnostics == ()


def test_numeric_names_are_warnings(make_grid, producer_config) -> None:
    grid = make_grid(_names(42, "John Roe"))

    resolution = resolve_name_band(grid, producer_config())

    assert [person.name for person in resolution.value] == ["John Roe"]
    assert [item.message for item in resolution.diagnostics] == [
        "non-text value in name column at B10: 42"
    ]


def test_skip_values_in_name_column_are_passed_over(make_grid, producer_config) -> None:
    grid = make_grid(_names("CO", "John Roe"))

    resolution = resolve_name_band(grid, producer_config())

    assert [person.name for person in resolution.value] == ["John Roe"]
    assert resolution.diagnostics == ()


def test_designation_rows_are_flagged_not_dropped(make_grid, producer_config) -> None:
    grid = make_grid(_names("Coordonator Ana", "John Roe"))

    resolution = resolve_name_band(grid, producer_config())

    coordinator, person = resolution.value
    assert coordinator.flagged is True
    assert coordinator.matched_pattern == "coordonator"
    assert person.flagged is False
    assert not resolution.has_errors
    assert resolution.diagnostics[0].message == (
        "name row 10 'Coordonator Ana' matches designation pattern 'coordonator'"
    )


def test_duplicate_names_are_warnings(make_grid, producer_config) -> None:
    grid = make_grid(_names("John Roe", "john  roe"))

    resolution = resolve_name_band(grid, producer_config())

    assert len(resolution.value) == 2
    assert resolution.diagnostics[0].message == "duplicate name 'john roe' in rows 10 and 11"


def test_multi_row_names_join_adjacent_rows(make_grid, producer_config) -> None:
    grid = make_grid(_names("Jane", "Doe", None, "John", "Roe"))
    config = producer_config(lastNameRow=13, multiRowNames=True)

    resolution = resolve_name_band(grid, config)

    assert [(person.row, person.name, person.source_rows) for person in resolution.value] == [
        (9, "Jane Doe", (9, 10)),
        (12, "John Roe", (12, 13)),
    ]


def test_empty_band_is_an_error(make_grid, producer_config) -> None:
    grid = make_grid({(2, NAME_COLUMN): "Outside the band"})

    resolution = resolve_name_band(grid, producer_config())

    assert resolution.value == ()
    assert [item.message for item in resolution.diagnostics] == [
        "no names found in configured name band (column B, rows 10-12)"
    ]


def test_contains_skip_mode_keeps_names_holding_a_skip_token(make_grid, producer_config) -> None:
    grid = make_grid(_names("Nicole Popescu", "John Roe", "co"))

    resolution = resolve_name_band(grid, producer_config(skipMatch="contains"))

    assert [person.name for person in resolution.value] == ["Nicole Popescu", "John Roe"]
    assert resolution.diagnostics == ()


def test_hyphenated_spelling_is_a_duplicate_name(make_grid, producer_config) -> None:
    grid = make_grid(_names("Ana Maria", "Ana-Maria"))

    resolution = resolve_name_band(grid, producer_config())

    assert [item.message for item in resolution.diagnostics] == [
        "duplicate name 'Ana-Maria' in rows 10 and 11"
    ]

"""Extraction configuration loader tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from shift_roster_importer.configuration import (
    ConfigurationError,
    ExtractionConfig,
    Role,
    SkipMatch,
    check_coordinates,
    load_extraction_config,
    load_roster,
    parse_extraction_config,
)


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def test_loads_yaml_configuration_with_defaults(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml",
        """
name: "PRODUCER Schedule Configuration"
role: producer
dateRow: 8
nameColumn: 1
firstNameRow: 9
lastNameRow: 11
firstDateColumn: 2
lastDateColumn: 31
skipValues: ["CO", " co ", "Concediu"]
""",
    )

    configuration = load_extraction_config(config_path)

    assert configuration.role is Role.PRODUCER
    assert configuration.date_row == 8
    assert configuration.last_date_column == 31
    assert configuration.skip_values == ("co", "concediu")
    assert configuration.dynamic_columns is True
    assert configuration.color_detection is True
    assert configuration.default_shift is None
    assert configuration.skip_match is SkipMatch.EXACT
    assert configuration.active is True
    assert configuration.multi_row_names is False


def test_loads_json_configuration_with_snake_case_keys(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.json",
        json.dumps(
            {
                "name": "Operators",
                "role": "OPERATOR",
                "date_row": 12,
                "name_column": 1,
                "first_name_row": 14,
                "last_name_row": 17,
                "first_date_column": 2,
                "last_date_column": 32,
                "dynamic_columns": False,
                "color_detection": False,
                "default_shift": "Day",
                "skip_match": "contains",
            }
        ),
    )

    configuration = load_extraction_config(config_path, role="operator")

    assert configuration.role is Role.OPERATOR
    assert configuration.dynamic_columns is False
    assert configuration.color_detection is False
    assert configuration.default_shift == "Day"
    assert configuration.skip_match is SkipMatch.CONTAINS


def test_selects_single_active_configuration_for_role(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml",
        """
configurations:
  - {name: old, role: PRODUCER, active: false, dateRow: 1, nameColumn: 0,
     firstNameRow: 2, lastNameRow: 5, firstDateColumn: 1, lastDateColumn: 10}
  - {name: current, role: PRODUCER, dateRow: 8, nameColumn: 1,
     firstNameRow: 9, lastNameRow: 11, firstDateColumn: 2, lastDateColumn: 31}
  - {name: operators, role: OPERATOR, dateRow: 12, nameColumn: 1,
     firstNameRow: 14, lastNameRow: 17, firstDateColumn: 2, lastDateColumn: 32}
""",
    )

    configuration = load_extraction_config(config_path, Role.PRODUCER)

    assert configuration.name == "current"


def test_rejects_two_active_configurations_for_one_role(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml",
        """
configurations:
  - {name: a, role: OPERATOR, dateRow: 1, nameColumn: 0,
     firstNameRow: 2, lastNameRow: 5, firstDateColumn: 1, lastDateColumn: 10}
  - {name: b, role: OPERATOR, dateRow: 1, nameColumn: 0,
     firstNameRow: 2, lastNameRow: 5, firstDateColumn: 1, lastDateColumn: 10}
""",
    )

    with pytest.raises(ConfigurationError, match="More than one active configuration"):
        load_extraction_config(config_path, "OPERATOR")


def test_rejects_configuration_for_another_role(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml",
        """
name: operators
role: OPERATOR
dateRow: 12
nameColumn: 1
firstNameRow: 14
lastNameRow: 17
firstDateColumn: 2
lastDateColumn: 32
""",
    )

    with pytest.raises(ConfigurationError, match="not PRODUCER"):
        load_extraction_config(config_path, "PRODUCER")


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"dateRow": None}, "dateRow is required"),
        ({"dateRow": -1}, "dateRow must be >= 0"),
        ({"nameColumn": "B"}, "nameColumn must be an integer"),
        ({"firstNameRow": True}, "firstNameRow must be an integer"),
        ({"role": "MANAGER"}, "role must be one of OPERATOR, PRODUCER"),
        ({"skipValues": "co"}, "skipValues must be a list of strings"),
        ({"skipMatch": "fuzzy"}, "skipMatch must be 'exact' or 'contains'"),
        ({"colorDetection": "yes"}, "colorDetection must be a boolean"),
    ],
)
def test_rejects_invalid_fields(overrides: dict[str, object], message: str) -> None:
    data: dict[str, object] = {
        "name": "cfg",
        "role": "PRODUCER",
        "dateRow": 8,
        "nameColumn": 1,
        "firstNameRow": 9,
        "lastNameRow": 11,
        "firstDateColumn": 2,
        "lastDateColumn": 31,
    }
    data.update(overrides)

    with pytest.raises(ConfigurationError, match=message):
        parse_extraction_config(data)


def test_missing_configuration_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_extraction_config(tmp_path / "missing.yaml")


def test_check_coordinates_reports_both_inverted_ranges() -> None:
    configuration = ExtractionConfig(
        name="broken",
        role=Role.PRODUCER,
        date_row=8,
        name_column=1,
        first_name_row=11,
        last_name_row=9,
        first_date_column=31,
        last_date_column=31,
    )

    assert check_coordinates(configuration) == [
        "First name row must be less than last name row",
        "First date column must be less than last date column",
    ]


def test_check_coordinates_accepts_ordered_ranges(producer_config) -> None:
    assert check_coordinates(producer_config()) == []


def test_load_roster_accepts_people_mapping(tmp_path: Path) -> None:
    roster_path = _write_file(
        tmp_path / "roster.yaml",
        "people:\n  - John Roe\n  - Jane Doe\n  - John Roe\n",
    )

    assert load_roster(roster_path) == ("John Roe", "Jane Doe")


def test_load_roster_rejects_non_string_names(tmp_path: Path) -> None:
    roster_path = _write_file(tmp_path / "roster.json", json.dumps(["John Roe", 7]))

    with pytest.raises(ConfigurationError, match=r"roster\[2\] must be a string"):
        load_roster(roster_path)

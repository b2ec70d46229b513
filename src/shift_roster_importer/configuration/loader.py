"""Configuration loader service."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from shift_roster_importer.grid_access.style_keys import normalize_color_code

from .extraction_settings import (
    ColorLegend,
    ColorLegendEntry,
    ExtractionConfig,
    Role,
    SkipMatch,
)

# Keys follow the persisted configuration records (camelCase); snake_case is accepted too.
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("name",),
    "role": ("role",),
    "description": ("description",),
    "active": ("active",),
    "date_row": ("dateRow", "date_row"),
    "day_label_row": ("dayLabelRow", "day_label_row"),
    "name_column": ("nameColumn", "name_column"),
    "first_name_row": ("firstNameRow", "first_name_row"),
    "last_name_row": ("lastNameRow", "last_name_row"),
    "first_date_column": ("firstDateColumn", "first_date_column"),
    "last_date_column": ("lastDateColumn", "last_date_column"),
    "dynamic_columns": ("dynamicColumns", "dynamic_columns"),
    "skip_values": ("skipValues", "skip_values"),
    "valid_patterns": ("validPatterns", "valid_patterns"),
    "color_detection": ("colorDetection", "color_detection"),
    "default_shift": ("defaultShift", "default_shift"),
    "multi_row_names": ("multiRowNames", "multi_row_names"),
    "exclude_flagged_names": ("excludeFlaggedNames", "exclude_flagged_names"),
    "skip_match": ("skipMatch", "skip_match"),
}

_LEGEND_ALIASES: dict[str, tuple[str, ...]] = {
    "color_code": ("colorCode", "color_code"),
    "color_name": ("colorName", "color_name"),
    "shift_name": ("shiftName", "shift_name"),
    "start_time": ("startTime", "start_time"),
    "end_time": ("endTime", "end_time"),
    "description": ("description",),
    "role": ("role",),
}


class ConfigurationError(Exception):
    """Raised when an extraction configuration or colour legend is invalid."""


def load_extraction_config(
    config_path: Path | str, role: Role | str | None = None
) -> ExtractionConfig:
    """Load one extraction configuration from a YAML or JSON file.

    The file holds either a single configuration mapping or a ``configurations``
    list. With a list, ``role`` selects the single active configuration for
    that role; without ``role`` the list must hold exactly one active entry.
    """
    parsed = _read_document(config_path)
    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    candidates = parsed.get("configurations")
    if candidates is None:
        config = parse_extraction_config(parsed)
        if role is not None and config.role != _parse_role(role, "role"):
            raise ConfigurationError(
                f"Configuration '{config.name}' is for role {config.role.value}, not {role}."
            )
        return config

    if not isinstance(candidates, Sequence) or isinstance(candidates, str):
        raise ConfigurationError("configurations must be a list of mappings.")
    configs = [parse_extraction_config(item) for item in candidates]
    return select_active_config(configs, role)


def select_active_config(
    configs: Sequence[ExtractionConfig], role: Role | str | None
) -> ExtractionConfig:
    """Pick the single active configuration for ``role``."""
    wanted = _parse_role(role, "role") if role is not None else None
    active = [
        config for config in configs if config.active and (wanted is None or config.role == wanted)
    ]
    label = wanted.value if wanted else "any role"
    if not active:
        raise ConfigurationError(f"No active configuration found for {label}.")
    if len(active) > 1:
        names = ", ".join(config.name for config in active)
        raise ConfigurationError(f"More than one active configuration for {label}: {names}.")
    return active[0]


def parse_extraction_config(value: Any) -> ExtractionConfig:
    """Validate a JSON-shaped configuration object."""
    section = _require_mapping(value, "configuration")
    fields = {key: _lookup(section, aliases) for key, aliases in _FIELD_ALIASES.items()}

    skip_match_raw = fields["skip_match"]
    try:
        skip_match = SkipMatch(skip_match_raw or SkipMatch.EXACT.value)
    except ValueError as exc:
        raise ConfigurationError("skipMatch must be 'exact' or 'contains'.") from exc

    return ExtractionConfig(
        name=_optional_string(fields["name"], "name") or "unnamed",
        role=_parse_role(fields["role"], "role"),
        date_row=_require_coordinate(fields["date_row"], "dateRow"),
        name_column=_require_coordinate(fields["name_column"], "nameColumn"),
        first_name_row=_require_coordinate(fields["first_name_row"], "firstNameRow"),
        last_name_row=_require_coordinate(fields["last_name_row"], "lastNameRow"),
        first_date_column=_require_coordinate(fields["first_date_column"], "firstDateColumn"),
        last_date_column=_require_coordinate(fields["last_date_column"], "lastDateColumn"),
        dynamic_columns=_optional_bool(fields["dynamic_columns"], "dynamicColumns", True),
        skip_values=_normalize_tokens(fields["skip_values"], "skipValues"),
        valid_patterns=_normalize_tokens(fields["valid_patterns"], "validPatterns"),
        color_detection=_optional_bool(fields["color_detection"], "colorDetection", True),
        default_shift=_optional_string(fields["default_shift"], "defaultShift"),
        description=_optional_string(fields["description"], "description") or "",
        active=_optional_bool(fields["active"], "active", True),
        day_label_row=_optional_coordinate(fields["day_label_row"], "dayLabelRow"),
        multi_row_names=_optional_bool(fields["multi_row_names"], "multiRowNames", False),
        exclude_flagged_names=_optional_bool(
            fields["exclude_flagged_names"], "excludeFlaggedNames", False
        ),
        skip_match=skip_match,
    )


def check_coordinates(config: ExtractionConfig) -> list[str]:
    """Return the fatal errors of the configured extraction rectangle."""
    errors: list[str] = []
    if config.first_name_row >= config.last_name_row:
        errors.append("First name row must be less than last name row")
    if config.first_date_column >= config.last_date_column:
        errors.append("First date column must be less than last date column")
    return errors


def load_color_legend(legend_path: Path | str, role: Role | str | None = None) -> ColorLegend:
    """Load a colour legend from a YAML or JSON file.

    The file holds a list of legend records or a mapping with a ``legend``
    list. Entries tagged with another role are left out when ``role`` is set.
    """
    parsed = _read_document(legend_path)
    if isinstance(parsed, Mapping):
        parsed = parsed.get("legend")
    if parsed is None:
        return ColorLegend()
    if not isinstance(parsed, Sequence) or isinstance(parsed, str):
        raise ConfigurationError("Colour legend must be a list of records.")
    return parse_color_legend(parsed, role=role)


def parse_color_legend(records: Sequence[Any], role: Role | str | None = None) -> ColorLegend:
    """Validate legend records; colour codes must be unique."""
    wanted = _parse_role(role, "role") if role is not None else None
    entries: list[ColorLegendEntry] = []
    seen: dict[str, str] = {}
    for index, record in enumerate(records, start=1):
        entry = _parse_legend_entry(record, index)
        if wanted is not None and entry.role is not None and entry.role != wanted:
            continue
        if entry.color_code in seen:
            raise ConfigurationError(
                f"Colour code {entry.color_code} is mapped to both "
                f"'{seen[entry.color_code]}' and '{entry.shift_name}'."
            )
        seen[entry.color_code] = entry.shift_name
        entries.append(entry)
    return ColorLegend(tuple(entries))


def load_roster(roster_path: Path | str) -> tuple[str, ...]:
    """Load known person names from a YAML/JSON list or a ``people`` mapping."""
    parsed = _read_document(roster_path)
    if isinstance(parsed, Mapping):
        parsed = parsed.get("people")
    if not isinstance(parsed, Sequence) or isinstance(parsed, str):
        raise ConfigurationError("Roster must be a list of names.")
    names: list[str] = []
    for index, item in enumerate(parsed, start=1):
        name = _require_non_empty_string(item, f"roster[{index}]")
        if name not in names:
            names.append(name)
    return tuple(names)


def _parse_legend_entry(record: Any, index: int) -> ColorLegendEntry:
    section = _require_mapping(record, f"legend entry {index}")
    fields = {key: _lookup(section, aliases) for key, aliases in _LEGEND_ALIASES.items()}
    prefix = f"legend[{index}]"
    raw_code = _require_non_empty_string(fields["color_code"], f"{prefix}.colorCode")
    color_code = normalize_color_code(raw_code)
    if color_code is None:
        raise ConfigurationError(f"{prefix}.colorCode '{raw_code}' is not a hex colour.")
    role = fields["role"]
    return ColorLegendEntry(
        color_code=color_code,
        color_name=_optional_string(fields["color_name"], f"{prefix}.colorName") or color_code,
        shift_name=_require_non_empty_string(fields["shift_name"], f"{prefix}.shiftName"),
        start_time=_require_non_empty_string(fields["start_time"], f"{prefix}.startTime"),
        end_time=_require_non_empty_string(fields["end_time"], f"{prefix}.endTime"),
        description=_optional_string(fields["description"], f"{prefix}.description") or "",
        role=_parse_role(role, f"{prefix}.role") if role is not None else None,
    )


def _read_document(path_value: Path | str) -> Any:
    path = Path(path_value)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Failed to parse {path.name}: {exc}") from exc
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse {path.name}: {exc}") from exc


def _lookup(section: Mapping[str, Any], aliases: tuple[str, ...]) -> Any:
    for alias in aliases:
        if alias in section:
            return section[alias]
    return None


def _parse_role(value: Any, field_name: str) -> Role:
    if isinstance(value, Role):
        return value
    text = _require_non_empty_string(value, field_name)
    try:
        return Role(text.upper())
    except ValueError as exc:
        allowed = ", ".join(role.value for role in Role)
        raise ConfigurationError(f"{field_name} must be one of {allowed}.") from exc


def _normalize_tokens(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ConfigurationError(f"{field_name} must be a list of strings.")
    tokens: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ConfigurationError(f"{field_name} entries must be strings.")
        stripped = item.strip().lower()
        if stripped and stripped not in tokens:
            tokens.append(stripped)
    return tuple(tokens)


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _optional_bool(value: Any, field_name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value


def _require_coordinate(value: Any, field_name: str) -> int:
    if value is None:
        raise ConfigurationError(f"{field_name} is required.")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value < 0:
        raise ConfigurationError(f"{field_name} must be >= 0.")
    return value


def _optional_coordinate(value: Any, field_name: str) -> int | None:
    if value is None:
        return None
    return _require_coordinate(value, field_name)

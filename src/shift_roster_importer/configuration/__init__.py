"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .extraction_settings import ColorLegend, ColorLegendEntry, ExtractionConfig, Role, SkipMatch
from .loader import (
    ConfigurationError,
    check_coordinates,
    load_color_legend,
    load_extraction_config,
    load_roster,
    parse_color_legend,
    parse_extraction_config,
    select_active_config,
)

__all__ = [
    "ColorLegend",
    "ColorLegendEntry",
    "ExtractionConfig",
    "Role",
    "SkipMatch",
    "ConfigurationError",
    "check_coordinates",
    "load_color_legend",
    "load_extraction_config",
    "load_roster",
    "parse_color_legend",
    "parse_extraction_config",
    "select_active_config",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]

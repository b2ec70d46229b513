"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "extraction-config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Extraction configuration template for shift-roster-importer.
# All coordinates are zero-based: row 1 in the spreadsheet is 0, column A is 0.
# Keep exactly one active configuration per role.

configurations:
  - name: "OPERATOR Schedule Configuration"
    role: OPERATOR
    description: "Names in column B (rows 15-18), dates in row 13 (columns C-AG)."
    active: true
    dateRow: 12
    nameColumn: 1
    firstNameRow: 14
    lastNameRow: 17
    firstDateColumn: 2
    lastDateColumn: 32
    # Re-derive the date band width from the populated cells of each month.
    dynamicColumns: true
    skipValues: []
    # Rows containing one of these tokens are flagged as designation rows.
    validPatterns: ["coordonator", "coordinator", "operator"]
    colorDetection: true
    defaultShift: null

  - name: "PRODUCER Schedule Configuration"
    role: PRODUCER
    description: "Names in column B (rows 10-12), dates in row 9 (columns C-AF)."
    active: true
    dateRow: 8
    nameColumn: 1
    firstNameRow: 9
    lastNameRow: 11
    firstDateColumn: 2
    lastDateColumn: 31
    dynamicColumns: true
    # Cells holding a skip value (holiday markers) produce no entry.
    skipValues: ["co"]
    # skipMatch: exact | contains
    skipMatch: exact
    validPatterns: ["coordonator", "coordinator", "producer", "coord"]
    colorDetection: true
    defaultShift: null
    # multiRowNames: first-name row followed by a last-name row form one person.
    multiRowNames: false
    excludeFlaggedNames: false
"""


def build_placeholder_configuration() -> str:
    """Build a YAML extraction configuration template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the extraction configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()

"""Cell fill normalization into comparable style keys."""

from __future__ import annotations

import re

from openpyxl.styles.colors import COLOR_INDEX, Color
from openpyxl.styles.fills import PatternFill

_HEX_PATTERN = re.compile(r"^#?(?:[0-9A-Fa-f]{2})?([0-9A-Fa-f]{6})$")
# Indexes 64 and 65 are the system foreground/background, not palette colours.
_SYSTEM_INDEXES = frozenset({64, 65})


def normalize_color_code(value: str) -> str | None:
    """Return ``#RRGGBB`` in upper case for ``#RRGGBB``, ``RRGGBB`` or ``AARRGGBB``."""
    match = _HEX_PATTERN.fullmatch(value.strip())
    if not match:
        return None
    return f"#{match.group(1).upper()}"


def style_key_from_fill(fill: object) -> str | None:
    """Derive the style key of a cell fill, or None when the cell is unfilled.

    Solid and patterned fills resolve to the foreground colour first, then the
    background colour. Palette (indexed) colours are mapped through the
    default palette; theme colours become ``THEME:<n>``.
    """
    if not isinstance(fill, PatternFill) or fill.fill_type in (None, "none"):
        return None
    for color in (fill.fgColor, fill.bgColor):
        key = _color_key(color)
        if key is not None:
            return key
    return None


def _color_key(color: Color | None) -> str | None:
    if color is None:
        return None
    if color.type == "rgb" and isinstance(color.rgb, str):
        # "00000000" is openpyxl's unset default.
        if color.rgb == "00000000":
            return None
        return normalize_color_code(color.rgb)
    if color.type == "indexed" and isinstance(color.indexed, int):
        if color.indexed in _SYSTEM_INDEXES or color.indexed >= len(COLOR_INDEX):
            return None
        return normalize_color_code(COLOR_INDEX[color.indexed])
    if color.type == "theme" and isinstance(color.theme, int):
        return f"THEME:{color.theme}"
    return None

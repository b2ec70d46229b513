"""Skip-value matching shared by the name band and grid scans."""

from __future__ import annotations

from collections.abc import Sequence

from shift_roster_importer.configuration.extraction_settings import SkipMatch


def normalize_text(value: str) -> str:
    """Trim, collapse inner whitespace and lower-case."""
    return " ".join(value.split()).lower()


def person_key(name: str) -> str:
    """Identity of a person name: normalized, with spaces and hyphens folded together."""
    return normalize_text(name.replace("-", " ")).replace(" ", "-")


def matches_skip_value(text: str, skip_values: Sequence[str], mode: SkipMatch) -> bool:
    normalized = normalize_text(text)
    if not normalized or not skip_values:
        return False
    if mode == SkipMatch.CONTAINS:
        return any(token in normalized for token in skip_values)
    return normalized in skip_values


def find_pattern(text: str, patterns: Sequence[str]) -> str | None:
    """Return the first pattern contained in ``text``, case-insensitively."""
    normalized = normalize_text(text)
    for pattern in patterns:
        if pattern in normalized:
            return pattern
    return None

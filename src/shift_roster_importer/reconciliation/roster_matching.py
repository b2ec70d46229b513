"""Fuzzy matching of extracted names against the known roster."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from datetime import date

from rapidfuzz import fuzz, process, utils

from shift_roster_importer.extraction.extraction_models import ExtractedEntry

from .merge_models import RosterMatchReport

DEFAULT_SCORE_CUTOFF = 75.0


def match_roster(
    entries: Sequence[ExtractedEntry],
    roster: Sequence[str],
    *,
    score_cutoff: float = DEFAULT_SCORE_CUTOFF,
) -> tuple[tuple[ExtractedEntry, ...], RosterMatchReport]:
    """Rename entries to their best roster match and drop unmatched ones.

    A second entry for the same roster person on the same day is reported as
    a duplicate and dropped.
    """
    matched_names: dict[str, str] = {}
    unmatched_names: list[str] = []
    duplicates: list[str] = []
    kept: list[ExtractedEntry] = []
    seen: set[tuple[str, date]] = set()
    unmatched_entries = 0

    for entry in entries:
        roster_name = _best_match(entry.person_name, roster, score_cutoff, matched_names)
        if roster_name is None:
            unmatched_entries += 1
            if entry.person_name not in unmatched_names:
                unmatched_names.append(entry.person_name)
            continue
        key = (roster_name, entry.date)
        if key in seen:
            duplicates.append(f"{entry.person_name} on {entry.date.isoformat()}")
            continue
        seen.add(key)
        kept.append(replace(entry, person_name=roster_name))

    report = RosterMatchReport(
        total_entries=len(entries),
        matched_entries=len(kept),
        unmatched_entries=unmatched_entries,
        matched_names=matched_names,
        unmatched_names=tuple(unmatched_names),
        duplicates=tuple(duplicates),
    )
    return tuple(kept), report


def _best_match(
    name: str, roster: Sequence[str], score_cutoff: float, cache: dict[str, str]
) -> str | None:
    if name in cache:
        return cache[name]
    if not roster:
        return None
    result = process.extractOne(
        name,
        roster,
        scorer=fuzz.WRatio,
        processor=utils.default_process,
        score_cutoff=score_cutoff,
    )
    if result is None:
        return None
    choice = result[0]
    cache[name] = choice
    return choice

"""Reconciliation domain exports."""

from .merge_models import MergePlan, NewScheduleEntry, PersistedEntry, RosterMatchReport
from .merge_planner import ReconciliationError, plan_import, plan_merge
from .roster_matching import DEFAULT_SCORE_CUTOFF, match_roster

__all__ = [
    "DEFAULT_SCORE_CUTOFF",
    "MergePlan",
    "NewScheduleEntry",
    "PersistedEntry",
    "ReconciliationError",
    "RosterMatchReport",
    "match_roster",
    "plan_import",
    "plan_merge",
]

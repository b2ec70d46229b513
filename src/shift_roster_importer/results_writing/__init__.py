"""Results writing domain exports."""

from .report_models import EntryStatus, RunMetadata
from .run_report_writer import report_to_dict, result_to_dict, write_report_workbook

__all__ = [
    "EntryStatus",
    "RunMetadata",
    "report_to_dict",
    "result_to_dict",
    "write_report_workbook",
]

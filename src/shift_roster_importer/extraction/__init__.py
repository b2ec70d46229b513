"""Schedule extraction domain exports."""

from .color_classifier import ShiftResolution, classify_by_color, classify_by_text
from .date_header import discover_date_range, resolve_date_header
from .extraction_models import (
    AxisSample,
    DateColumn,
    Diagnostic,
    ExtractedEntry,
    ExtractionResult,
    NameRow,
    Resolution,
    SampleCell,
    Severity,
    ValidationReport,
)
from .grid_extractor import extract_schedule
from .name_band import resolve_name_band

__all__ = [
    "AxisSample",
    "DateColumn",
    "Diagnostic",
    "ExtractedEntry",
    "ExtractionResult",
    "NameRow",
    "Resolution",
    "SampleCell",
    "Severity",
    "ShiftResolution",
    "ValidationReport",
    "classify_by_color",
    "classify_by_text",
    "discover_date_range",
    "extract_schedule",
    "resolve_date_header",
    "resolve_name_band",
]

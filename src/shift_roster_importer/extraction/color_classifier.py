"""Shift classification from cell fill colour or cell text."""

from __future__ import annotations

from dataclasses import dataclass

from shift_roster_importer.configuration.extraction_settings import ColorLegend


@dataclass(frozen=True)
class ShiftResolution:
    """Shift resolved for one cell; ``shift_name`` is None when unassigned."""

    shift_name: str | None
    color_key: str | None = None
    warnings: tuple[str, ...] = ()


def classify_by_color(
    style_key: str | None,
    legend: ColorLegend,
    default_shift: str | None,
    *,
    has_value: bool,
    cell: str,
) -> ShiftResolution:
    """Resolve a shift from a normalized fill colour.

    A blank, unfilled cell means nobody is on shift and stays unassigned
    without a default. Any other cell without a legend match falls back to
    ``default_shift``.
    """
    if style_key is None:
        if not has_value:
            return ShiftResolution(shift_name=None)
        if default_shift is not None:
            return ShiftResolution(shift_name=default_shift)
        return ShiftResolution(shift_name=None, warnings=(f"no style on colored cell {cell}",))

    entry = legend.get(style_key)
    if entry is not None:
        return ShiftResolution(shift_name=entry.shift_name, color_key=style_key)
    return ShiftResolution(
        shift_name=default_shift,
        color_key=style_key,
        warnings=(f"colour {style_key} at {cell} is not in the colour legend",),
    )


def classify_by_text(text: str, legend: ColorLegend, *, cell: str) -> ShiftResolution:
    """Resolve a shift by matching cell text against legend shift names."""
    if not text:
        return ShiftResolution(shift_name=None)
    entry = legend.find_shift(text)
    if entry is not None:
        return ShiftResolution(shift_name=entry.shift_name)
    return ShiftResolution(
        shift_name=None,
        warnings=(f"text {text!r} at {cell} does not name a legend shift",),
    )

"""Grid access entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum


class CellKind(str, Enum):
    """Tag of a cell value read from a worksheet."""

    EMPTY = "empty"
    NUMBER = "number"
    TEXT = "text"


@dataclass(frozen=True)
class CellValue:
    """Tagged cell value; exactly one payload is set for non-empty kinds."""

    kind: CellKind
    number: float | int | None = None
    text: str | None = None

    @classmethod
    def empty(cls) -> CellValue:
        return _EMPTY

    @classmethod
    def of_number(cls, number: float | int) -> CellValue:
        return cls(kind=CellKind.NUMBER, number=number)

    @classmethod
    def of_text(cls, text: str) -> CellValue:
        return cls(kind=CellKind.TEXT, text=text)

    @classmethod
    def from_raw(cls, raw: object) -> CellValue:
        """Tag a raw openpyxl cell value."""
        if raw is None:
            return _EMPTY
        if isinstance(raw, bool):
            return cls.of_text("TRUE" if raw else "FALSE")
        if isinstance(raw, int | float):
            return cls.of_number(raw)
        if isinstance(raw, datetime | date | time):
            return cls.of_text(raw.isoformat())
        text = str(raw).strip()
        if not text:
            return _EMPTY
        return cls.of_text(text)

    @property
    def is_empty(self) -> bool:
        return self.kind == CellKind.EMPTY

    @property
    def display(self) -> str:
        """Text rendering used for matching and diagnostics."""
        if self.kind == CellKind.NUMBER:
            number = self.number
            if isinstance(number, float) and number.is_integer():
                return str(int(number))
            return str(number)
        if self.kind == CellKind.TEXT:
            return self.text or ""
        return ""

    @property
    def raw(self) -> float | int | str | None:
        """Payload in its native type, for JSON-shaped samples."""
        if self.kind == CellKind.NUMBER:
            return self.number
        if self.kind == CellKind.TEXT:
            return self.text
        return None


_EMPTY = CellValue(kind=CellKind.EMPTY)

"""Data models for the expense ledger domain."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import IntEnum
from typing import Any, Dict, Optional, Union

from .exceptions import ValidationError

__all__ = ["Expense", "Month", "format_date", "parse_date"]

DISPLAY_DATE_FORMAT = "%d.%m.%Y"


def parse_date(value: str) -> Optional[date]:
    """Parse ``YYYY-MM-DD`` (or the display form ``DD.MM.YYYY``) into a date.

    Blank input returns ``None`` so callers can treat it as a missing field.
    """
    text = (value or "").strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.strptime(text, DISPLAY_DATE_FORMAT).date()
    except ValueError as exc:
        raise ValueError(f"Invalid date '{text}'. Expected format YYYY-MM-DD.") from exc


def format_date(value: date) -> str:
    return value.strftime(DISPLAY_DATE_FORMAT)


class Month(IntEnum):
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, value: Union["Month", int, str]) -> "Month":
        """Coerce a month number, numeric string or English name to a Month."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip()
            if text.isascii() and text.isdigit():
                value = int(text)
            else:
                canonical = text.upper()
                for month in cls:
                    if canonical and (canonical == month.name or canonical == month.name[:3]):
                        return month
                raise ValidationError("month must be between 1 and 12")
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError("month must be between 1 and 12")
        try:
            return cls(value)
        except ValueError as exc:
            raise ValidationError("month must be between 1 and 12") from exc


@dataclass(frozen=True)
class Expense:
    name: str
    amount: float
    date: date

    @property
    def month(self) -> Month:
        return Month(self.date.month)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the expense to JSON-friendly natives."""
        return {
            "name": self.name,
            "amount": self.amount,
            "date": self.date.isoformat(),
        }

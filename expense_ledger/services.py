"""Framework-agnostic business services for the expense ledger."""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional, Tuple, Union

from .exceptions import ValidationError
from .models import Expense, Month
from .validators import parse_amount, validate_date, validate_name

logger = logging.getLogger(__name__)


class ExpenseLedger:
    """Owns the recorded expenses and the active month filter.

    Entries are append-only and kept in insertion order. Nothing is
    recomputed on mutation; callers read :meth:`filtered_entries` and
    :meth:`total` again after each change.
    """

    def __init__(self) -> None:
        self._entries: List[Expense] = []
        self._month_filter: Optional[Month] = None

    # Public API -----------------------------------------------------------
    def add_expense(
        self, name: object, amount_text: object, date: Optional[date]
    ) -> Expense:
        try:
            # The amount is checked first, so a bad amount wins over a missing name.
            amount = parse_amount(amount_text)
            expense = Expense(name=validate_name(name), amount=amount, date=validate_date(date))
        except ValidationError as exc:
            logger.info("Rejected expense %r: %s", name, exc)
            raise
        self._entries.append(expense)
        logger.debug("Recorded expense %s", expense)
        return expense

    def set_month_filter(self, month: Optional[Union[Month, int, str]]) -> None:
        self._month_filter = None if month is None else Month.parse(month)
        logger.debug("Month filter set to %s", self._month_filter)

    def clear_month_filter(self) -> None:
        self.set_month_filter(None)

    def filtered_entries(self) -> List[Expense]:
        if self._month_filter is None:
            return list(self._entries)
        return [expense for expense in self._entries if expense.month == self._month_filter]

    def total(self) -> float:
        return sum((expense.amount for expense in self.filtered_entries()), 0.0)

    def snapshot(self) -> Dict[str, object]:
        """Return a serialisable view of the filtered rows and their total."""
        return {
            "month": int(self._month_filter) if self._month_filter is not None else None,
            "items": [expense.to_dict() for expense in self.filtered_entries()],
            "total": self.total(),
        }

    @property
    def month_filter(self) -> Optional[Month]:
        return self._month_filter

    @property
    def entries(self) -> Tuple[Expense, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

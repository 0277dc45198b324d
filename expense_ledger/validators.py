"""Validation helpers shared across the expense ledger front-ends."""

from __future__ import annotations

import math
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from .exceptions import InvalidAmountError, MissingRequiredFieldError

AMOUNT_ERROR = "amount is not a number"
REQUIRED_FIELDS_ERROR = "empty name or date"


def parse_amount(raw: object) -> float:
    """Convert raw input to a finite float; sign and magnitude are not checked."""
    if isinstance(raw, bool):
        raise InvalidAmountError(AMOUNT_ERROR)
    if isinstance(raw, str):
        # float() also reads digit-group underscores.
        if "_" in raw:
            raise InvalidAmountError(AMOUNT_ERROR)
        raw = raw.strip()
    elif not isinstance(raw, (int, float, Decimal)):
        raise InvalidAmountError(AMOUNT_ERROR)

    try:
        amount = float(raw)
    except (OverflowError, ValueError) as exc:
        raise InvalidAmountError(AMOUNT_ERROR) from exc

    if not math.isfinite(amount):
        raise InvalidAmountError(AMOUNT_ERROR)
    return amount


def validate_name(value: object) -> str:
    if not isinstance(value, str):
        raise MissingRequiredFieldError(REQUIRED_FIELDS_ERROR)
    trimmed = value.strip()
    if not trimmed:
        raise MissingRequiredFieldError(REQUIRED_FIELDS_ERROR)
    return trimmed


def validate_date(value: Optional[object]) -> date:
    # datetime is a date subclass; keep only the calendar part.
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise MissingRequiredFieldError(REQUIRED_FIELDS_ERROR)

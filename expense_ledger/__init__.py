"""Core business logic package for the expense tracker."""

from .models import Expense, Month, format_date, parse_date
from .services import ExpenseLedger
from .log import configure_logging
from .exceptions import InvalidAmountError, MissingRequiredFieldError, ValidationError

__all__ = [
    "Expense",
    "Month",
    "format_date",
    "parse_date",
    "ExpenseLedger",
    "configure_logging",
    "InvalidAmountError",
    "MissingRequiredFieldError",
    "ValidationError",
]

"""Domain-specific exceptions for the expense ledger."""

class ValidationError(ValueError):
    """Raised when provided data does not meet validation requirements."""


class InvalidAmountError(ValidationError):
    """Raised when the amount text cannot be read as a finite number."""


class MissingRequiredFieldError(ValidationError):
    """Raised when an expense is submitted without a name or a date."""

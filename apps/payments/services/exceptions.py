"""Domain-specific exceptions for payment services."""


class PaymentsServiceError(Exception):
    """Base exception for payment services."""
    pass


class InvalidPeriodError(PaymentsServiceError):
    """Raised when a period string is not YYYY-MM."""
    pass

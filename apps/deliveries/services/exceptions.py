"""Domain-specific exceptions for delivery services."""


class DeliveriesServiceError(Exception):
    """Base exception for delivery services."""
    pass


class DeliveryNotFoundError(DeliveriesServiceError):
    """Raised when delivery does not exist."""
    pass


class InvalidQuantityError(DeliveriesServiceError):
    """Raised when quantity is below the minimum."""
    pass


class InvalidQualityError(DeliveriesServiceError):
    """Raised when the quality grade is not A, B or C."""
    pass

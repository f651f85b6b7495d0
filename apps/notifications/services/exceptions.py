"""Domain-specific exceptions for notification services."""


class NotificationServiceError(Exception):
    """Base exception for notification services."""
    pass


class TextGenerationError(NotificationServiceError):
    """Raised when the generative text service fails or returns nothing."""
    pass


class UnknownSmsProviderError(NotificationServiceError):
    """Raised when SystemSettings names a provider with no gateway."""
    pass

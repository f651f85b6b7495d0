"""Domain-specific exceptions for farmer services."""


class FarmersServiceError(Exception):
    """Base exception for farmer services."""
    pass


class FarmerNotFoundError(FarmersServiceError):
    """Raised when farmer does not exist."""
    pass


class DuplicatePhoneError(FarmersServiceError):
    """Raised when the phone number already belongs to a farmer or a login."""
    pass

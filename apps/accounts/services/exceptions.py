"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    pass


class UserNotFoundError(AccountsServiceError):
    """Raised when user does not exist."""
    pass


class DuplicateUsernameError(AccountsServiceError):
    """Raised when the username is already taken."""
    pass


class PasswordConfirmationError(AccountsServiceError):
    """Raised when the current password does not match."""
    pass


class SelfDeletionError(AccountsServiceError):
    """Raised when an admin tries to delete their own account."""
    pass


class FarmerAccountChangeError(AccountsServiceError):
    """Raised when a farmer login's username or role would be changed."""
    pass

"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    InvalidCredentialsError,
    InactiveAccountError,
    UserNotFoundError,
    DuplicateUsernameError,
    PasswordConfirmationError,
    SelfDeletionError,
    FarmerAccountChangeError,
)
from .user_authentication import authenticate_user
from .user_management import (
    create_user_account,
    update_user_account,
    delete_user_account,
    change_password,
    set_user_password,
)

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'UserNotFoundError',
    'DuplicateUsernameError',
    'PasswordConfirmationError',
    'SelfDeletionError',
    'FarmerAccountChangeError',
    # Services
    'authenticate_user',
    'create_user_account',
    'update_user_account',
    'delete_user_account',
    'change_password',
    'set_user_password',
]

"""Services for farmer records."""

from .exceptions import (
    FarmersServiceError,
    FarmerNotFoundError,
    DuplicatePhoneError,
)
from .farmer_management import (
    get_farmer,
    register_farmer,
    update_farmer,
    delete_farmer,
)

__all__ = [
    # Exceptions
    'FarmersServiceError',
    'FarmerNotFoundError',
    'DuplicatePhoneError',
    # Services
    'get_farmer',
    'register_farmer',
    'update_farmer',
    'delete_farmer',
]

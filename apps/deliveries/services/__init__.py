"""Services for milk deliveries."""

from .exceptions import (
    DeliveriesServiceError,
    DeliveryNotFoundError,
    InvalidQuantityError,
    InvalidQualityError,
)
from .pricing import calculate_amount, current_price_per_liter
from .delivery_management import (
    record_delivery,
    update_delivery,
    delete_delivery,
)

__all__ = [
    # Exceptions
    'DeliveriesServiceError',
    'DeliveryNotFoundError',
    'InvalidQuantityError',
    'InvalidQualityError',
    # Pricing
    'calculate_amount',
    'current_price_per_liter',
    # Services
    'record_delivery',
    'update_delivery',
    'delete_delivery',
]

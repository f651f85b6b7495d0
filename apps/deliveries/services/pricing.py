"""Delivery amount calculation."""

from decimal import Decimal, ROUND_HALF_UP

from apps.system.models import SystemSettings

from ..models import GRADE_MULTIPLIERS, MIN_QUANTITY
from .exceptions import InvalidQualityError, InvalidQuantityError

TWO_PLACES = Decimal('0.01')


def calculate_amount(quantity, quality: str, price_per_liter) -> Decimal:
    """
    Price a delivery.

    amount = round(quantity x price_per_liter x multiplier(quality), 2)

    Args:
        quantity: Liters (>= 0.1)
        quality: Grade A, B or C
        price_per_liter: UGX per liter of grade A milk

    Returns:
        Amount in UGX rounded half-up to 2 decimals

    Raises:
        InvalidQuantityError: If quantity < 0.1
        InvalidQualityError: If quality is not a known grade
    """
    quantity = Decimal(str(quantity))
    if quantity < MIN_QUANTITY:
        raise InvalidQuantityError(f"Quantity must be at least {MIN_QUANTITY}L")

    try:
        multiplier = GRADE_MULTIPLIERS[quality]
    except KeyError:
        raise InvalidQualityError(f"Unknown quality grade: {quality}")

    amount = quantity * Decimal(str(price_per_liter)) * multiplier
    return amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def current_price_per_liter() -> Decimal:
    return SystemSettings.load().milk_price_per_liter

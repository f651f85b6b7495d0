"""Recording, editing and removing deliveries."""

import logging
from datetime import date, time
from uuid import UUID

from django.db import transaction

from apps.farmers.services import get_farmer
from apps.notifications.services import send_delivery_notification
from apps.payments.services import sync_payments_for_deliveries

from ..models import Delivery
from .exceptions import DeliveryNotFoundError
from .pricing import calculate_amount, current_price_per_liter

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('farmer_id', 'quantity', 'quality', 'date', 'time', 'notes')


def _notify(delivery: Delivery) -> None:
    farmer = delivery.farmer
    send_delivery_notification(
        farmer_name=farmer.name,
        phone_number=farmer.phone,
        quantity=delivery.quantity,
        quality=delivery.quality,
        amount=delivery.amount,
    )


@transaction.atomic
def record_delivery(
    *,
    farmer_id: UUID,
    quantity,
    quality: str,
    date: date,
    time: time,
    notes: str = '',
) -> Delivery:
    """
    Record a delivery and add it to the farmer's payment for the month.

    The farmer is notified by SMS after commit; a failed SMS never
    undoes the delivery.

    Args:
        farmer_id: Farmer's ID
        quantity: Liters (>= 0.1)
        quality: Grade A, B or C
        date: Delivery date
        time: Delivery time
        notes: Optional free text

    Returns:
        Created Delivery instance

    Raises:
        FarmerNotFoundError: If the farmer does not exist
        InvalidQuantityError: If quantity < 0.1
        InvalidQualityError: If grade is unknown
    """
    farmer = get_farmer(farmer_id)
    amount = calculate_amount(quantity, quality, current_price_per_liter())

    delivery = Delivery.objects.create(
        farmer=farmer,
        quantity=quantity,
        quality=quality,
        date=date,
        time=time,
        notes=notes,
        amount=amount,
    )
    sync_payments_for_deliveries((farmer.id, delivery.period))

    logger.info(
        "Recorded delivery %s: %sL grade %s for %s, UGX %s",
        delivery.id, quantity, quality, farmer.name, amount,
    )
    transaction.on_commit(lambda: _notify(delivery))
    return delivery


@transaction.atomic
def update_delivery(*, delivery_id: UUID, **fields) -> Delivery:
    """
    Apply a partial update and re-price the delivery at today's price.

    Both the old and the new (farmer, period) ledger rows are re-synced,
    so moving a delivery between farmers or months keeps both correct.

    Raises:
        DeliveryNotFoundError: If the delivery does not exist
        FarmerNotFoundError: If a new farmer_id does not exist
    """
    try:
        delivery = Delivery.objects.select_for_update().get(id=delivery_id)
    except Delivery.DoesNotExist:
        raise DeliveryNotFoundError(f"Delivery not found: {delivery_id}")

    previous = (delivery.farmer_id, delivery.period)

    if 'farmer_id' in fields and fields['farmer_id'] != delivery.farmer_id:
        fields['farmer_id'] = get_farmer(fields['farmer_id']).id

    for field in UPDATABLE_FIELDS:
        if field in fields:
            setattr(delivery, field, fields[field])

    delivery.amount = calculate_amount(delivery.quantity, delivery.quality, current_price_per_liter())
    delivery.save()

    sync_payments_for_deliveries(previous, (delivery.farmer_id, delivery.period))

    logger.info("Updated delivery %s: amount UGX %s", delivery.id, delivery.amount)
    return delivery


@transaction.atomic
def delete_delivery(*, delivery_id: UUID) -> None:
    """
    Remove a delivery and take it out of the payment ledger.

    Raises:
        DeliveryNotFoundError: If the delivery does not exist
    """
    try:
        delivery = Delivery.objects.select_for_update().get(id=delivery_id)
    except Delivery.DoesNotExist:
        raise DeliveryNotFoundError(f"Delivery not found: {delivery_id}")

    affected = (delivery.farmer_id, delivery.period)
    delivery.delete()
    sync_payments_for_deliveries(affected)

    logger.info("Deleted delivery %s", delivery_id)

"""
Payment ledger synchronisation.

The ledger row for a (farmer, period) is recomputed from the deliveries
table rather than patched with deltas, so it can never drift from the
deliveries it summarises. Callers run it inside their own transaction.
"""
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Count, Sum
from django.db.models.functions import Coalesce

from apps.deliveries.models import Delivery
from apps.farmers.models import Farmer

from ..models import Payment, PaymentStatus
from .exceptions import InvalidPeriodError

logger = logging.getLogger(__name__)


def period_for(day: date) -> str:
    """Return the YYYY-MM period a date falls in."""
    return day.strftime('%Y-%m')


def parse_period(period: str) -> date:
    """
    Return the first day of a YYYY-MM period.

    Raises:
        InvalidPeriodError: If the string is not a valid period
    """
    try:
        return datetime.strptime(period, '%Y-%m').date()
    except (TypeError, ValueError):
        raise InvalidPeriodError(f"Invalid period: {period!r}. Expected YYYY-MM.")


@transaction.atomic
def sync_payment_for_period(*, farmer_id: UUID, period: str) -> Optional[Payment]:
    """
    Recompute the ledger row of one farmer for one period.

    Creates the row the first time a delivery lands in the period and
    removes it once the period has no deliveries left, unless money was
    already paid against it. Status follows the totals: paid while
    amount_paid covers amount_due, pending otherwise.

    Args:
        farmer_id: Farmer's ID
        period: YYYY-MM

    Returns:
        The up-to-date Payment, or None when no row is needed

    Raises:
        InvalidPeriodError: If period is malformed
    """
    first_day = parse_period(period)

    # The farmer row serialises writers for all of its periods, including
    # the first delivery of a period when no payment row exists yet.
    Farmer.objects.select_for_update().filter(id=farmer_id).first()

    totals = Delivery.objects.filter(
        farmer_id=farmer_id,
        date__year=first_day.year,
        date__month=first_day.month,
    ).aggregate(
        liters=Coalesce(Sum('quantity'), Decimal('0.00')),
        amount=Coalesce(Sum('amount'), Decimal('0.00')),
        count=Count('id'),
    )

    payment = (
        Payment.objects
        .select_for_update()
        .filter(farmer_id=farmer_id, period=period)
        .first()
    )

    if totals['count'] == 0:
        if payment is None:
            return None
        if payment.amount_paid == 0:
            payment.delete()
            logger.info("Removed empty payment for farmer %s, %s", farmer_id, period)
            return None

    if payment is None:
        payment = Payment(farmer_id=farmer_id, period=period)

    payment.total_liters = totals['liters']
    payment.amount_due = totals['amount']

    previous_status = payment.status
    if payment.amount_paid > 0 and payment.amount_due <= payment.amount_paid:
        payment.status = PaymentStatus.PAID
    else:
        payment.status = PaymentStatus.PENDING

    if payment.status != previous_status:
        logger.info(
            "Payment for farmer %s, %s is now %s: due %s, paid %s",
            farmer_id, period, payment.status, payment.amount_due, payment.amount_paid,
        )

    payment.save()
    return payment


def sync_payments_for_deliveries(*pairs) -> None:
    """Re-sync every distinct (farmer_id, period) pair given."""
    for farmer_id, period in dict.fromkeys(pairs):
        sync_payment_for_period(farmer_id=farmer_id, period=period)

"""
Settling pending payments.

Outcomes are reported as result dicts rather than exceptions so the
caller can show the message as-is:

    {'success': bool, 'message': str, 'payment': Payment | None}
    {'success': bool, 'message': str, 'count': int}
"""
import logging
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.utils import timezone

from apps.notifications.services import send_payment_notification

from ..models import Payment, PaymentMethod, PaymentStatus

logger = logging.getLogger(__name__)

PAYMENT_ALREADY_PROCESSED = "Payment already processed."
PAYMENT_NOT_FOUND = "Payment record not found."
NO_PENDING_PAYMENTS = "No pending payments to process."


def _notify(payment: Payment) -> None:
    send_payment_notification(
        phone_number=payment.farmer.phone,
        amount=payment.amount_paid,
        period=payment.period_label,
    )


def _settle(payment: Payment, payment_method: str, transaction_id: str) -> None:
    payment.status = PaymentStatus.PAID
    payment.amount_paid = payment.amount_due
    payment.last_payment_date = timezone.localdate()
    payment.payment_method = payment_method
    payment.transaction_id = transaction_id
    payment.save(update_fields=[
        'status',
        'amount_paid',
        'last_payment_date',
        'payment_method',
        'transaction_id',
        'updated_at',
    ])
    transaction.on_commit(lambda: _notify(payment))


def process_payment(
    payment_id: UUID,
    *,
    payment_method: str = PaymentMethod.CASH,
    transaction_id: str = '',
) -> dict:
    """
    Mark one pending payment as paid and notify the farmer.

    Args:
        payment_id: Payment's ID
        payment_method: PaymentMethod value
        transaction_id: Optional bank / mobile money reference

    Returns:
        Result dict with success, message and payment
    """
    with transaction.atomic():
        try:
            payment = (
                Payment.objects
                .select_for_update()
                .select_related('farmer')
                .get(id=payment_id)
            )
        except (Payment.DoesNotExist, DjangoValidationError):
            return {'success': False, 'message': PAYMENT_NOT_FOUND, 'payment': None}

        if payment.status == PaymentStatus.PAID:
            return {'success': False, 'message': PAYMENT_ALREADY_PROCESSED, 'payment': payment}

        _settle(payment, payment_method, transaction_id)

    logger.info(
        "Processed payment %s for %s: UGX %s (%s)",
        payment.id, payment.farmer.name, payment.amount_paid, payment.period,
    )
    return {
        'success': True,
        'message': f"Payment for {payment.farmer.name} ({payment.period_label}) processed.",
        'payment': payment,
    }


def process_all_pending_payments(*, payment_method: str = PaymentMethod.CASH) -> dict:
    """
    Mark every pending payment as paid and notify each farmer.

    Returns:
        Result dict with success, message and count
    """
    with transaction.atomic():
        pending = list(
            Payment.objects
            .select_for_update()
            .select_related('farmer')
            .filter(status=PaymentStatus.PENDING)
        )
        if not pending:
            return {'success': False, 'message': NO_PENDING_PAYMENTS, 'count': 0}

        for payment in pending:
            _settle(payment, payment_method, '')

    count = len(pending)
    logger.info("Processed %d pending payments", count)
    return {
        'success': True,
        'message': f"{count} payment(s) processed successfully.",
        'count': count,
    }

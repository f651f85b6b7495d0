"""
Notification entry points used by the business services.

Each function composes the message, picks the gateway from SystemSettings
and sends. Any error is logged and turned into a failed result dict.
"""
import logging
from typing import Callable, Dict

from apps.system.models import SystemSettings

from .message_composer import (
    compose_delivery_message,
    compose_payment_message,
    compose_welcome_message,
)
from .sms_gateway import get_sms_gateway

logger = logging.getLogger(__name__)


def _dispatch(kind: str, phone_number: str, compose: Callable[[], str]) -> Dict:
    try:
        message = compose()
        if not message or not message.strip():
            logger.error("Empty %s notification for %s", kind, phone_number)
            return {
                'success': False,
                'status_message': 'Failed to generate SMS content.',
                'message_id': None,
                'error_details': None,
            }

        gateway = get_sms_gateway(SystemSettings.load())
        result = gateway.send(phone_number, message)
    except Exception as e:
        logger.exception("Failed to send %s notification to %s", kind, phone_number)
        return {
            'success': False,
            'status_message': f'Failed to send {kind} notification.',
            'message_id': None,
            'error_details': str(e),
        }

    if not result['success']:
        logger.warning(
            "%s notification to %s not sent: %s",
            kind.capitalize(), phone_number, result['status_message'],
        )
    return result


def send_delivery_notification(*, farmer_name: str, phone_number: str, quantity, quality: str, amount) -> Dict:
    """
    Notify a farmer that a delivery was recorded.

    Args:
        farmer_name: Farmer's display name
        phone_number: E.164 phone number
        quantity: Liters delivered
        quality: Grade A/B/C
        amount: Computed amount (UGX)

    Returns:
        Result dict with success, status_message, message_id, error_details
    """
    return _dispatch(
        'delivery',
        phone_number,
        lambda: compose_delivery_message(
            farmer_name=farmer_name,
            quantity=quantity,
            quality=quality,
            amount=amount,
        ),
    )


def send_payment_notification(*, phone_number: str, amount, period: str) -> Dict:
    """Notify a farmer that a payment for `period` (e.g. "May 2024") was processed."""
    return _dispatch(
        'payment',
        phone_number,
        lambda: compose_payment_message(amount=amount, period=period),
    )


def send_welcome_notification(*, farmer_name: str, phone_number: str, default_password: str) -> Dict:
    """Send login details to a newly registered farmer."""
    return _dispatch(
        'welcome',
        phone_number,
        lambda: compose_welcome_message(
            farmer_name=farmer_name,
            phone_number=phone_number,
            default_password=default_password,
        ),
    )

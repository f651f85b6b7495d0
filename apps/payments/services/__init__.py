"""Services for the payment ledger."""

from .exceptions import PaymentsServiceError, InvalidPeriodError
from .ledger import (
    period_for,
    parse_period,
    sync_payment_for_period,
    sync_payments_for_deliveries,
)
from .payment_processing import (
    process_payment,
    process_all_pending_payments,
    PAYMENT_ALREADY_PROCESSED,
    PAYMENT_NOT_FOUND,
    NO_PENDING_PAYMENTS,
)

__all__ = [
    # Exceptions
    'PaymentsServiceError',
    'InvalidPeriodError',
    # Ledger
    'period_for',
    'parse_period',
    'sync_payment_for_period',
    'sync_payments_for_deliveries',
    # Processing
    'process_payment',
    'process_all_pending_payments',
    'PAYMENT_ALREADY_PROCESSED',
    'PAYMENT_NOT_FOUND',
    'NO_PENDING_PAYMENTS',
]

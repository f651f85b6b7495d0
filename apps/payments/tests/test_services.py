from datetime import date, time
from decimal import Decimal
from unittest.mock import patch

import pytest

from apps.deliveries.services import record_delivery, delete_delivery
from apps.farmers.models import Farmer
from apps.payments.models import Payment, PaymentMethod, PaymentStatus
from apps.payments.services import (
    period_for,
    parse_period,
    process_payment,
    process_all_pending_payments,
    sync_payment_for_period,
    InvalidPeriodError,
    PAYMENT_ALREADY_PROCESSED,
    PAYMENT_NOT_FOUND,
    NO_PENDING_PAYMENTS,
)


class TestPeriods:
    """Tests for YYYY-MM period helpers."""

    def test_period_for(self):
        assert period_for(date(2024, 5, 31)) == '2024-05'

    def test_parse_period(self):
        assert parse_period('2024-12') == date(2024, 12, 1)

    @pytest.mark.parametrize('value', ['2024-13', '2024/05', 'May 2024', ''])
    def test_parse_invalid_period(self, value):
        with pytest.raises(InvalidPeriodError):
            parse_period(value)


@pytest.mark.django_db
class TestLedgerSync:
    """Tests for sync_payment_for_period."""

    def test_no_deliveries_no_row(self, farmer):
        assert sync_payment_for_period(farmer_id=farmer.id, period='2024-05') is None
        assert not Payment.objects.exists()

    def test_sync_is_idempotent(self, farmer, payment):
        again = sync_payment_for_period(farmer_id=farmer.id, period='2024-05')

        assert again.id == payment.id
        assert again.amount_due == Decimal('36000.00')
        assert Payment.objects.filter(farmer=farmer).count() == 1

    def test_sync_locks_farmer_before_reading_totals(self, farmer, milk_price):
        """Writers for one farmer are serialised even before a payment row exists."""
        record_delivery(
            farmer_id=farmer.id,
            quantity=Decimal('10'),
            quality='A',
            date=date(2024, 5, 1),
            time=time(7, 0),
        )
        Payment.objects.all().delete()

        with patch.object(
            Farmer.objects, 'select_for_update', wraps=Farmer.objects.select_for_update
        ) as lock:
            payment = sync_payment_for_period(farmer_id=farmer.id, period='2024-05')

        lock.assert_called_once_with()
        assert payment.amount_due == Decimal('12000.00')

    def test_paid_payment_reopens_on_new_delivery(self, farmer, payment):
        """A delivery after settlement puts the month back to pending."""
        process_payment(payment.id)

        record_delivery(
            farmer_id=farmer.id,
            quantity=Decimal('5'),
            quality='A',
            date=date(2024, 5, 25),
            time=time(7, 0),
        )

        payment.refresh_from_db()
        assert payment.status == PaymentStatus.PENDING
        assert payment.amount_due == Decimal('42000.00')
        assert payment.amount_paid == Decimal('36000.00')
        assert payment.outstanding_amount == Decimal('6000.00')

    def test_paid_payment_restored_when_reopening_delivery_deleted(self, farmer, payment):
        """Undoing the extra delivery puts the month back to paid."""
        process_payment(payment.id)
        extra = record_delivery(
            farmer_id=farmer.id,
            quantity=Decimal('5'),
            quality='A',
            date=date(2024, 5, 25),
            time=time(7, 0),
        )

        delete_delivery(delivery_id=extra.id)

        payment.refresh_from_db()
        assert payment.status == PaymentStatus.PAID
        assert payment.amount_due == Decimal('36000.00')
        assert payment.outstanding_amount == Decimal('0.00')
        assert process_all_pending_payments() == {
            'success': False,
            'message': NO_PENDING_PAYMENTS,
            'count': 0,
        }

    def test_paid_payment_survives_deleting_all_deliveries(self, farmer, payment):
        """A row with money paid against it is never removed."""
        process_payment(payment.id, payment_method=PaymentMethod.BANK, transaction_id='TX-1')

        for delivery in list(farmer.deliveries.all()):
            delete_delivery(delivery_id=delivery.id)

        payment.refresh_from_db()
        assert payment.status == PaymentStatus.PAID
        assert payment.amount_due == Decimal('0.00')
        assert payment.amount_paid == Decimal('36000.00')
        assert payment.transaction_id == 'TX-1'
        assert payment.last_payment_date is not None


@pytest.mark.django_db
class TestProcessPayment:
    """Tests for process_payment."""

    def test_marks_paid(self, payment):
        result = process_payment(
            payment.id,
            payment_method=PaymentMethod.MOBILE_MONEY,
            transaction_id='MM123',
        )

        assert result['success'] is True
        assert result['message'] == 'Payment for John Mukasa (May 2024) processed.'
        payment.refresh_from_db()
        assert payment.status == PaymentStatus.PAID
        assert payment.amount_paid == Decimal('36000.00')
        assert payment.payment_method == PaymentMethod.MOBILE_MONEY
        assert payment.transaction_id == 'MM123'
        assert payment.last_payment_date is not None

    def test_second_call_fails_without_changes(self, payment):
        """Processing twice reports failure and leaves the row unchanged."""
        process_payment(payment.id)
        payment.refresh_from_db()
        updated_at = payment.updated_at

        result = process_payment(payment.id, payment_method=PaymentMethod.BANK)

        assert result['success'] is False
        assert result['message'] == PAYMENT_ALREADY_PROCESSED
        payment.refresh_from_db()
        assert payment.payment_method == PaymentMethod.CASH
        assert payment.updated_at == updated_at

    def test_missing_payment(self, db):
        result = process_payment('00000000-0000-0000-0000-000000000000')

        assert result == {'success': False, 'message': PAYMENT_NOT_FOUND, 'payment': None}

    def test_notifies_after_commit(self, payment, django_capture_on_commit_callbacks):
        with patch('apps.payments.services.payment_processing.send_payment_notification') as mock_send:
            with django_capture_on_commit_callbacks(execute=True):
                process_payment(payment.id)

        mock_send.assert_called_once_with(
            phone_number=payment.farmer.phone,
            amount=Decimal('36000.00'),
            period='May 2024',
        )

    def test_failed_sms_keeps_payment(self, payment, django_capture_on_commit_callbacks):
        with patch('apps.notifications.services.dispatch.get_sms_gateway') as mock_gateway:
            mock_gateway.side_effect = RuntimeError('gateway down')
            with django_capture_on_commit_callbacks(execute=True):
                result = process_payment(payment.id)

        assert result['success'] is True
        payment.refresh_from_db()
        assert payment.status == PaymentStatus.PAID


@pytest.mark.django_db
class TestProcessAll:
    """Tests for process_all_pending_payments."""

    def test_processes_every_pending(self, payment, other_payment):
        result = process_all_pending_payments(payment_method=PaymentMethod.BANK)

        assert result == {
            'success': True,
            'message': '2 payment(s) processed successfully.',
            'count': 2,
        }
        assert not Payment.objects.filter(status=PaymentStatus.PENDING).exists()
        assert set(Payment.objects.values_list('payment_method', flat=True)) == {PaymentMethod.BANK}

    def test_nothing_pending(self, db):
        result = process_all_pending_payments()

        assert result == {'success': False, 'message': NO_PENDING_PAYMENTS, 'count': 0}

from datetime import date, time
from decimal import Decimal
from unittest.mock import patch

import pytest

from apps.deliveries.models import Delivery
from apps.deliveries.services import (
    calculate_amount,
    record_delivery,
    update_delivery,
    delete_delivery,
    DeliveryNotFoundError,
    InvalidQuantityError,
    InvalidQualityError,
)
from apps.farmers.services import FarmerNotFoundError
from apps.payments.models import Payment, PaymentStatus
from apps.system.models import SystemSettings


class TestCalculateAmount:
    """Tests for delivery pricing."""

    @pytest.mark.parametrize('quality,expected', [
        ('A', Decimal('12000.00')),
        ('B', Decimal('10800.00')),
        ('C', Decimal('9600.00')),
    ])
    def test_grade_multipliers(self, quality, expected):
        assert calculate_amount(Decimal('10'), quality, Decimal('1200')) == expected

    def test_rounds_half_up(self):
        """0.15L at UGX 0.5 grade A is 0.075, which rounds to 0.08."""
        assert calculate_amount('0.15', 'A', '0.5') == Decimal('0.08')

    def test_minimum_quantity(self):
        assert calculate_amount('0.1', 'C', '1200') == Decimal('96.00')

        with pytest.raises(InvalidQuantityError):
            calculate_amount('0.09', 'A', '1200')

    def test_unknown_grade(self):
        with pytest.raises(InvalidQualityError):
            calculate_amount('10', 'D', '1200')


@pytest.mark.django_db
class TestRecordDelivery:
    """Tests for record_delivery and the payment ledger."""

    def test_creates_priced_delivery(self, delivery):
        assert delivery.amount == Decimal('12000.00')

    def test_creates_pending_payment(self, farmer, delivery):
        payment = Payment.objects.get(farmer=farmer, period='2024-05')

        assert payment.status == PaymentStatus.PENDING
        assert payment.total_liters == Decimal('10.00')
        assert payment.amount_due == Decimal('12000.00')
        assert payment.amount_paid == Decimal('0.00')

    def test_second_delivery_increments_payment(self, farmer, delivery):
        """Another delivery in the month adds exactly its liters and amount."""
        record_delivery(
            farmer_id=farmer.id,
            quantity=Decimal('5.5'),
            quality='B',
            date=date(2024, 5, 20),
            time=time(18, 0),
        )

        payment = Payment.objects.get(farmer=farmer, period='2024-05')
        assert payment.total_liters == Decimal('15.50')
        assert payment.amount_due == Decimal('12000.00') + Decimal('5940.00')

    def test_other_month_gets_own_payment(self, farmer, delivery):
        record_delivery(
            farmer_id=farmer.id,
            quantity=Decimal('4'),
            quality='A',
            date=date(2024, 6, 1),
            time=time(7, 0),
        )

        assert Payment.objects.filter(farmer=farmer).count() == 2
        assert Payment.objects.get(farmer=farmer, period='2024-06').amount_due == Decimal('4800.00')

    def test_unknown_farmer(self, milk_price):
        with pytest.raises(FarmerNotFoundError):
            record_delivery(
                farmer_id='00000000-0000-0000-0000-000000000000',
                quantity=Decimal('10'),
                quality='A',
                date=date(2024, 5, 3),
                time=time(7, 30),
            )

    def test_notifies_farmer_after_commit(self, farmer, milk_price, django_capture_on_commit_callbacks):
        with patch('apps.deliveries.services.delivery_management.send_delivery_notification') as mock_send:
            with django_capture_on_commit_callbacks(execute=True):
                record_delivery(
                    farmer_id=farmer.id,
                    quantity=Decimal('10'),
                    quality='A',
                    date=date(2024, 5, 3),
                    time=time(7, 30),
                )

        mock_send.assert_called_once()
        kwargs = mock_send.call_args[1]
        assert kwargs['phone_number'] == farmer.phone
        assert kwargs['amount'] == Decimal('12000.00')

    def test_failed_sms_keeps_delivery(self, farmer, milk_price, django_capture_on_commit_callbacks):
        """An SMS transport failure does not undo the delivery."""
        with patch('apps.notifications.services.dispatch.get_sms_gateway') as mock_gateway:
            mock_gateway.return_value.send.side_effect = RuntimeError('gateway down')
            with django_capture_on_commit_callbacks(execute=True):
                delivery = record_delivery(
                    farmer_id=farmer.id,
                    quantity=Decimal('10'),
                    quality='A',
                    date=date(2024, 5, 3),
                    time=time(7, 30),
                )

        assert Delivery.objects.filter(id=delivery.id).exists()
        assert Payment.objects.get(farmer=farmer, period='2024-05').amount_due == Decimal('12000.00')


@pytest.mark.django_db
class TestUpdateDelivery:
    """Tests for update_delivery."""

    def test_quantity_change_adjusts_payment(self, farmer, delivery):
        """Editing 10L to 15L adds exactly the amount difference."""
        update_delivery(delivery_id=delivery.id, quantity=Decimal('15'))

        delivery.refresh_from_db()
        payment = Payment.objects.get(farmer=farmer, period='2024-05')
        assert delivery.amount == Decimal('18000.00')
        assert payment.total_liters == Decimal('15.00')
        assert payment.amount_due == Decimal('18000.00')

    def test_reprices_at_current_price(self, delivery):
        """Edits are priced at today's price, not the original one."""
        SystemSettings.objects.update(milk_price_per_liter=Decimal('1000.00'))

        update_delivery(delivery_id=delivery.id, quality='B')

        delivery.refresh_from_db()
        assert delivery.amount == Decimal('9000.00')

    def test_move_to_other_farmer(self, farmer, other_farmer, delivery):
        """Both farmers' ledgers are re-synced."""
        update_delivery(delivery_id=delivery.id, farmer_id=other_farmer.id)

        assert not Payment.objects.filter(farmer=farmer, period='2024-05').exists()
        assert Payment.objects.get(farmer=other_farmer, period='2024-05').amount_due == Decimal('12000.00')

    def test_move_to_other_month(self, farmer, delivery):
        update_delivery(delivery_id=delivery.id, date=date(2024, 4, 30))

        assert not Payment.objects.filter(farmer=farmer, period='2024-05').exists()
        assert Payment.objects.get(farmer=farmer, period='2024-04').total_liters == Decimal('10.00')

    def test_missing_delivery(self, milk_price):
        with pytest.raises(DeliveryNotFoundError):
            update_delivery(delivery_id='00000000-0000-0000-0000-000000000000', quantity=Decimal('1'))


@pytest.mark.django_db
class TestDeleteDelivery:
    """Tests for delete_delivery."""

    def test_reverses_contribution(self, farmer, delivery):
        """Deleting a delivery takes exactly its share out of the payment."""
        other = record_delivery(
            farmer_id=farmer.id,
            quantity=Decimal('3'),
            quality='C',
            date=date(2024, 5, 4),
            time=time(7, 30),
        )

        delete_delivery(delivery_id=other.id)

        payment = Payment.objects.get(farmer=farmer, period='2024-05')
        assert payment.total_liters == Decimal('10.00')
        assert payment.amount_due == Decimal('12000.00')

    def test_last_delivery_removes_pending_payment(self, farmer, delivery):
        delete_delivery(delivery_id=delivery.id)

        assert not Payment.objects.filter(farmer=farmer, period='2024-05').exists()

    def test_paid_payment_is_kept(self, farmer, delivery):
        """A settled payment stays on record after its deliveries are deleted."""
        Payment.objects.filter(farmer=farmer).update(
            status=PaymentStatus.PAID,
            amount_paid=Decimal('12000.00'),
        )

        delete_delivery(delivery_id=delivery.id)

        payment = Payment.objects.get(farmer=farmer, period='2024-05')
        assert payment.status == PaymentStatus.PAID
        assert payment.amount_due == Decimal('0.00')

    def test_missing_delivery(self, db):
        with pytest.raises(DeliveryNotFoundError):
            delete_delivery(delivery_id='00000000-0000-0000-0000-000000000000')

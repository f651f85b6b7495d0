from datetime import date, time
from decimal import Decimal

import pytest

from apps.deliveries.services import record_delivery
from apps.payments.models import Payment


@pytest.fixture
def payment(farmer, milk_price):
    """Pending May 2024 payment of UGX 36,000 (30L grade A)."""
    record_delivery(
        farmer_id=farmer.id,
        quantity=Decimal('30'),
        quality='A',
        date=date(2024, 5, 10),
        time=time(7, 0),
    )
    return Payment.objects.get(farmer=farmer, period='2024-05')


@pytest.fixture
def other_payment(other_farmer, milk_price):
    """Pending May 2024 payment for the second farmer."""
    record_delivery(
        farmer_id=other_farmer.id,
        quantity=Decimal('10'),
        quality='B',
        date=date(2024, 5, 11),
        time=time(7, 0),
    )
    return Payment.objects.get(farmer=other_farmer, period='2024-05')

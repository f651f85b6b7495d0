from datetime import date, time
from decimal import Decimal

import pytest

from apps.deliveries.services import record_delivery


@pytest.fixture
def delivery(farmer, milk_price):
    """10L of grade A milk delivered on 3 May 2024."""
    return record_delivery(
        farmer_id=farmer.id,
        quantity=Decimal('10'),
        quality='A',
        date=date(2024, 5, 3),
        time=time(7, 30),
    )

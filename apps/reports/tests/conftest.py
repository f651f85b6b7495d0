from datetime import date, time
from decimal import Decimal

import pytest

from apps.deliveries.services import record_delivery
from apps.system.models import SmsProvider, SystemSettings


@pytest.fixture
def milk_price(db):
    """UGX 1000 per liter keeps report totals round."""
    obj = SystemSettings.load()
    obj.milk_price_per_liter = Decimal('1000.00')
    obj.sms_provider = SmsProvider.NONE
    obj.save()
    return obj.milk_price_per_liter


@pytest.fixture
def deliveries(farmer, other_farmer, milk_price):
    """
    May 2024 collection at UGX 1000/L:

    John:  10L A on the 1st, 10L B on the 2nd
    Grace: 5L C on the 2nd, 20L A on 1 June
    """
    rows = [
        (farmer, '10', 'A', date(2024, 5, 1)),
        (farmer, '10', 'B', date(2024, 5, 2)),
        (other_farmer, '5', 'C', date(2024, 5, 2)),
        (other_farmer, '20', 'A', date(2024, 6, 1)),
    ]
    return [
        record_delivery(
            farmer_id=f.id,
            quantity=Decimal(quantity),
            quality=quality,
            date=day,
            time=time(7, 0),
        )
        for f, quantity, quality, day in rows
    ]

from decimal import Decimal

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User, UserRole
from apps.farmers.services import register_farmer
from apps.system.models import SmsProvider, SystemSettings


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    """Create and return an admin account."""
    return User.objects.create_user(
        username='admin',
        password='AdminPass123',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def operator_user(db):
    """Create and return an operator account."""
    return User.objects.create_user(
        username='operator',
        password='OperatorPass123',
        role=UserRole.OPERATOR,
    )


@pytest.fixture
def farmer(db):
    """Register a farmer together with their phone-number login."""
    return register_farmer(
        name='John Mukasa',
        phone='+256771234567',
        location='Mbarara',
    )


@pytest.fixture
def other_farmer(db):
    """Register a second farmer."""
    return register_farmer(
        name='Grace Nakato',
        phone='+256772345678',
        location='Kiruhura',
    )


@pytest.fixture
def admin_client(admin_user):
    """Return an API client authenticated as admin using JWT."""
    return _client_for(admin_user)


@pytest.fixture
def operator_client(operator_user):
    """Return an API client authenticated as operator using JWT."""
    return _client_for(operator_user)


@pytest.fixture
def farmer_client(farmer):
    """Return an API client authenticated as the farmer fixture's login."""
    return _client_for(farmer.user)


@pytest.fixture
def milk_price(db):
    """Fix the price at UGX 1200 per liter with SMS simulated."""
    obj = SystemSettings.load()
    obj.milk_price_per_liter = Decimal('1200.00')
    obj.sms_provider = SmsProvider.NONE
    obj.save()
    return obj.milk_price_per_liter

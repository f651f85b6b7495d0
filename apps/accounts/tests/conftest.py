import pytest

from apps.accounts.models import User, UserRole, UserStatus


@pytest.fixture
def inactive_user(db):
    """Create and return a deactivated operator."""
    return User.objects.create_user(
        username='inactive',
        password='InactivePass123',
        role=UserRole.OPERATOR,
        status=UserStatus.INACTIVE,
    )

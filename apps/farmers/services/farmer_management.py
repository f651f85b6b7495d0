"""Farmer registration, editing and removal."""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction

from apps.accounts.models import UserRole
from apps.notifications.services import send_welcome_notification

from ..models import Farmer
from .exceptions import DuplicatePhoneError, FarmerNotFoundError

User = get_user_model()
logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('name', 'phone', 'location', 'join_date', 'id_number', 'notes')


def get_farmer(farmer_id: UUID) -> Farmer:
    """
    Fetch a farmer by id.

    Raises:
        FarmerNotFoundError: If the farmer does not exist
    """
    try:
        return Farmer.objects.get(id=farmer_id)
    except Farmer.DoesNotExist:
        raise FarmerNotFoundError(f"Farmer not found: {farmer_id}")


def _get_farmer_for_update(farmer_id: UUID) -> Farmer:
    try:
        return Farmer.objects.select_for_update().get(id=farmer_id)
    except Farmer.DoesNotExist:
        raise FarmerNotFoundError(f"Farmer not found: {farmer_id}")


@transaction.atomic
def register_farmer(
    *,
    name: str,
    phone: str,
    location: str,
    join_date: Optional[date] = None,
    id_number: str = '',
    notes: str = '',
) -> Farmer:
    """
    Register a farmer and create their login account.

    The login username is the phone number and the password is
    FARMER_DEFAULT_PASSWORD. A welcome SMS with those details is sent
    after the transaction commits.

    Args:
        name: Farmer's full name
        phone: E.164 phone number (unique)
        location: Village / collection area
        join_date: Defaults to today
        id_number: Optional national id
        notes: Optional free text

    Returns:
        Created Farmer instance

    Raises:
        DuplicatePhoneError: If a farmer or login already uses this phone
    """
    if Farmer.objects.filter(phone=phone).exists():
        raise DuplicatePhoneError("A farmer with this phone number already exists.")
    if User.objects.filter(username=phone).exists():
        raise DuplicatePhoneError("A login account with this phone number already exists.")

    default_password = settings.FARMER_DEFAULT_PASSWORD
    user = User.objects.create_user(
        username=phone,
        password=default_password,
        role=UserRole.FARMER,
    )

    extra = {}
    if join_date is not None:
        extra['join_date'] = join_date

    farmer = Farmer.objects.create(
        name=name,
        phone=phone,
        location=location,
        id_number=id_number,
        notes=notes,
        user=user,
        **extra,
    )
    logger.info("Registered farmer %s (%s)", farmer.name, farmer.id)

    transaction.on_commit(
        lambda: send_welcome_notification(
            farmer_name=farmer.name,
            phone_number=farmer.phone,
            default_password=default_password,
        )
    )
    return farmer


@transaction.atomic
def update_farmer(*, farmer_id: UUID, **fields) -> Farmer:
    """
    Apply a partial update to a farmer.

    A phone change is mirrored to the linked login username.

    Raises:
        FarmerNotFoundError: If the farmer does not exist
        DuplicatePhoneError: If the new phone belongs to someone else
    """
    farmer = _get_farmer_for_update(farmer_id)

    new_phone = fields.get('phone')
    if new_phone is not None and new_phone != farmer.phone:
        if Farmer.objects.filter(phone=new_phone).exclude(id=farmer.id).exists():
            raise DuplicatePhoneError("A farmer with this phone number already exists.")
        logins = User.objects.filter(username=new_phone)
        if farmer.user_id:
            logins = logins.exclude(id=farmer.user_id)
        if logins.exists():
            raise DuplicatePhoneError("A login account with this phone number already exists.")

        if farmer.user_id:
            User.objects.filter(id=farmer.user_id).update(username=new_phone)

    for field in UPDATABLE_FIELDS:
        if field in fields:
            setattr(farmer, field, fields[field])

    farmer.save()
    logger.info("Updated farmer %s (%s)", farmer.name, farmer.id)
    return farmer


@transaction.atomic
def delete_farmer(*, farmer_id: UUID) -> None:
    """
    Delete a farmer with their deliveries, payment records and login.

    Raises:
        FarmerNotFoundError: If the farmer does not exist
    """
    farmer = _get_farmer_for_update(farmer_id)
    user_id = farmer.user_id
    name = farmer.name

    # Deliveries and payments cascade through their foreign keys
    farmer.delete()
    if user_id:
        User.objects.filter(id=user_id).delete()

    logger.info("Deleted farmer %s (%s)", name, farmer_id)

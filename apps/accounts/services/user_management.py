"""User account management service (admin user CRUD and password changes)."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.contrib.auth import get_user_model

from ..models import UserRole
from .exceptions import (
    DuplicateUsernameError,
    FarmerAccountChangeError,
    PasswordConfirmationError,
    SelfDeletionError,
    UserNotFoundError,
)

User = get_user_model()
logger = logging.getLogger(__name__)


def _get_user_for_update(user_id: UUID) -> User:
    try:
        return User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User not found: {user_id}")


@transaction.atomic
def create_user_account(*, username: str, password: str, role: str, status: str) -> User:
    """
    Create an operator or admin account.

    Args:
        username: Login name (unique)
        password: Plaintext password, stored hashed
        role: UserRole value
        status: UserStatus value

    Returns:
        The created User

    Raises:
        DuplicateUsernameError: If the username is taken
    """
    username = username.strip()
    if User.objects.filter(username=username).exists():
        raise DuplicateUsernameError("This username is already taken.")

    user = User.objects.create_user(
        username=username,
        password=password,
        role=role,
        status=status,
    )
    logger.info("Created %s account %s", role, username)
    return user


@transaction.atomic
def update_user_account(
    *,
    user_id: UUID,
    username: Optional[str] = None,
    role: Optional[str] = None,
    status: Optional[str] = None,
) -> User:
    """
    Apply a partial update to a user account.

    Raises:
        UserNotFoundError: If the user does not exist
        DuplicateUsernameError: If the new username is taken
        FarmerAccountChangeError: If the username or role of a farmer login would change
    """
    user = _get_user_for_update(user_id)

    if user.role == UserRole.FARMER:
        if username is not None and username.strip() != user.username:
            raise FarmerAccountChangeError(
                "A farmer's username is their phone number. Edit the farmer record instead."
            )
        if role is not None and role != user.role:
            raise FarmerAccountChangeError("The role of a farmer account cannot be changed.")

    if username is not None:
        username = username.strip()
        taken = User.objects.filter(username=username).exclude(id=user.id).exists()
        if taken:
            raise DuplicateUsernameError("This username is already taken.")
        user.username = username
    if role is not None:
        user.role = role
    if status is not None:
        user.status = status

    user.save()
    logger.info("Updated account %s", user.username)
    return user


@transaction.atomic
def delete_user_account(*, user_id: UUID, acting_user_id: UUID) -> None:
    """
    Delete a user account.

    Raises:
        UserNotFoundError: If the user does not exist
        SelfDeletionError: If an admin targets their own account
    """
    if str(user_id) == str(acting_user_id):
        raise SelfDeletionError("You cannot delete your own account.")

    user = _get_user_for_update(user_id)
    username = user.username
    user.delete()
    logger.info("Deleted account %s", username)


@transaction.atomic
def change_password(*, user_id: UUID, current_password: str, new_password: str) -> User:
    """
    Change a user's password after confirming the current one.

    Raises:
        PasswordConfirmationError: If current_password is wrong
    """
    user = _get_user_for_update(user_id)

    if not user.check_password(current_password):
        raise PasswordConfirmationError("Current password is incorrect.")

    user.set_password(new_password)
    user.save(update_fields=['password'])
    return user


@transaction.atomic
def set_user_password(*, user_id: UUID, new_password: str) -> User:
    """
    Set a new password for any account without the current one.

    Used by admins to reset a forgotten password, typically a farmer's.

    Raises:
        UserNotFoundError: If the user does not exist
    """
    user = _get_user_for_update(user_id)
    user.set_password(new_password)
    user.save(update_fields=['password'])
    logger.info("Password reset for account %s", user.username)
    return user

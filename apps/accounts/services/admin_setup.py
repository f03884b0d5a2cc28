"""
Administrator bootstrap and password management.

The app has a single administrator. The first one is created through the
setup endpoint (or ``createsuperuser``); afterwards setup is closed.
"""

import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from .exceptions import (
    AdminAlreadyConfiguredError,
    InvalidCredentialsError,
    WeakPasswordError,
)

logger = logging.getLogger(__name__)

User = get_user_model()


def is_admin_configured() -> bool:
    return User.objects.filter(is_staff=True, is_active=True).exists()


def _check_strength(password: str, user=None) -> None:
    try:
        validate_password(password, user=user)
    except DjangoValidationError as e:
        raise WeakPasswordError(' '.join(e.messages))


@transaction.atomic
def create_initial_admin(*, email: str, password: str, display_name: str = ''):
    """
    Create the administrator account.

    Raises:
        AdminAlreadyConfiguredError: If an active staff account exists
        WeakPasswordError: If the password fails validation
    """
    if is_admin_configured():
        raise AdminAlreadyConfiguredError()

    _check_strength(password)

    user = User.objects.create_superuser(
        email=email,
        password=password,
        display_name=display_name,
    )
    logger.info("Initial administrator %s created", user.id)
    return user


@transaction.atomic
def change_password(*, user, current_password: str, new_password: str) -> None:
    """
    Replace the administrator password after checking the current one.

    Raises:
        InvalidCredentialsError: If current_password is wrong
        WeakPasswordError: If new_password fails validation
    """
    user = User.objects.select_for_update().get(id=user.id)

    if not user.check_password(current_password):
        logger.warning("Password change rejected for %s: wrong current password", user.id)
        raise InvalidCredentialsError()

    _check_strength(new_password, user=user)

    user.set_password(new_password)
    user.save(update_fields=['password'])
    logger.info("Password changed for %s", user.id)

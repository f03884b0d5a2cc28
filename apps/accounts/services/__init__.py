"""Services for accounts business logic."""

from .exceptions import (
    AdminAlreadyConfiguredError,
    InvalidCredentialsError,
    WeakPasswordError,
)
from .admin_setup import (
    is_admin_configured,
    create_initial_admin,
    change_password,
)

__all__ = [
    # Exceptions
    'AdminAlreadyConfiguredError',
    'InvalidCredentialsError',
    'WeakPasswordError',
    # Services
    'is_admin_configured',
    'create_initial_admin',
    'change_password',
]

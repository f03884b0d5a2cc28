"""Domain-specific exceptions for accounts services."""

from apps.common.exceptions import PermissionDenied, PreconditionFailed, ValidationFailed


class AdminAlreadyConfiguredError(PreconditionFailed):
    """Raised when initial setup runs after an administrator exists."""
    default_detail = 'An administrator account already exists.'


class InvalidCredentialsError(PermissionDenied):
    """Raised when the current password does not match."""
    default_detail = 'Invalid password.'


class WeakPasswordError(ValidationFailed):
    """Raised when a new password fails Django's password validators."""
    default_detail = 'Password is too weak.'

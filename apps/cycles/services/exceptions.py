"""Domain-specific exceptions for cycles services."""

from apps.common.exceptions import Locked, NotFound, PermissionDenied, ValidationFailed


class CycleNotFoundError(NotFound):
    """Raised when a cycle does not exist."""
    default_detail = 'Cycle not found.'


class CycleLockedError(Locked):
    """Raised when a cart change hits a locked or completed cycle."""
    default_detail = 'This cycle is closed for orders.'


class InvalidCycleDataError(ValidationFailed):
    """Raised for a blank name, unknown status, bad markup or empty update."""
    default_detail = 'Invalid cycle data.'


class WrongCyclePasswordError(PermissionDenied):
    """Raised when the friend password is wrong or the cycle has none."""
    default_detail = 'Wrong cycle password.'

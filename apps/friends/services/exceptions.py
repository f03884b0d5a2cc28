"""Domain-specific exceptions for friends services."""

from apps.common.exceptions import NotFound, PreconditionFailed, ValidationFailed


class FriendNotFoundError(NotFound):
    """Raised when a friend does not exist."""
    default_detail = 'Friend not found.'


class FriendInactiveError(PreconditionFailed):
    """Raised when a deactivated friend tries to order."""
    default_detail = 'This friend is no longer active.'


class OutstandingBalanceError(PreconditionFailed):
    """Raised when deleting a friend whose balance is not settled."""
    default_detail = 'Friend still has an outstanding balance.'


class InvalidFriendDataError(ValidationFailed):
    """Raised for a blank name or an empty update."""
    default_detail = 'Invalid friend data.'

"""Domain-specific exceptions for ledger services."""

from apps.common.exceptions import NotFound, PermissionDenied, ValidationFailed


class TransactionNotFoundError(NotFound):
    """Raised when a ledger entry does not exist."""
    default_detail = 'Transaction not found.'


class ImmutableChargeError(PermissionDenied):
    """Raised when editing or deleting a charge; charges belong to fulfillment."""
    default_detail = 'Charge entries cannot be modified.'


class InvalidAmountError(ValidationFailed):
    """Raised when an amount is malformed or has the wrong sign for its type."""
    default_detail = 'Invalid amount.'


class MissingNoteError(ValidationFailed):
    """Raised when an adjustment has no reason."""
    default_detail = 'A note is required for adjustments.'


class EmptyUpdateError(ValidationFailed):
    """Raised when an update carries no fields."""
    default_detail = 'Nothing to update.'


class OrderNotOwnedError(NotFound):
    """Raised when an adjustment references an order of another friend."""
    default_detail = 'Order not found or does not belong to this friend.'

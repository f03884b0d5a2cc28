"""Domain-specific exceptions for orders services."""

from apps.common.exceptions import NotFound, PreconditionFailed, ValidationFailed


class OrderNotFoundError(NotFound):
    """Raised when an order does not exist."""
    default_detail = 'Order not found.'


class EmptyOrderError(ValidationFailed):
    """Raised when submitting an order without items."""
    default_detail = 'The order is empty.'
    default_code = 'empty_order'


class OrderNotSubmittedError(PreconditionFailed):
    """Raised when fulfillment touches a draft order."""
    default_detail = 'Only submitted orders can be marked paid or packed.'


class OrderAlreadyFulfilledError(PreconditionFailed):
    """Raised when changing the cart of an order already paid or packed."""
    default_detail = 'This order is already paid or packed and cannot be changed.'


class PickupLocationNotFoundError(NotFound):
    """Raised when a pickup location does not exist or is inactive."""
    default_detail = 'Pickup location not found.'


class InvalidQuantityError(ValidationFailed):
    """Raised when a cart line or the order total is larger than an order can hold."""
    default_detail = 'Quantity too large.'


class InvalidPickupLocationError(ValidationFailed):
    """Raised for a blank pickup location name or an empty update."""
    default_detail = 'Invalid pickup location data.'

"""
Orders app services layer.

Cart operations are friend-facing; fulfillment and pickup location
management are administrator operations.
"""

from .exceptions import (
    OrderNotFoundError,
    EmptyOrderError,
    OrderNotSubmittedError,
    OrderAlreadyFulfilledError,
    InvalidQuantityError,
    PickupLocationNotFoundError,
    InvalidPickupLocationError,
)
from .cart import (
    get_cart,
    get_or_create_draft,
    replace_cart,
    submit,
)
from .fulfillment import (
    get_order,
    set_paid,
    toggle_packed,
    list_cycle_orders,
)
from .pickup_locations import (
    list_pickup_locations,
    create_pickup_location,
    update_pickup_location,
    delete_pickup_location,
)

__all__ = [
    # Exceptions
    'OrderNotFoundError',
    'EmptyOrderError',
    'OrderNotSubmittedError',
    'OrderAlreadyFulfilledError',
    'InvalidQuantityError',
    'PickupLocationNotFoundError',
    'InvalidPickupLocationError',
    # Cart
    'get_cart',
    'get_or_create_draft',
    'replace_cart',
    'submit',
    # Fulfillment
    'get_order',
    'set_paid',
    'toggle_packed',
    'list_cycle_orders',
    # Pickup locations
    'list_pickup_locations',
    'create_pickup_location',
    'update_pickup_location',
    'delete_pickup_location',
]

"""
Cart / order engine.

A (friend, cycle) pair has at most one order, moving NONE -> DRAFT ->
SUBMITTED. The friend always sends the whole cart; ``replace_cart``
rebuilds the items from scratch.

Concurrent replaces of the same cart are last-write-wins: the order row
is locked for the duration of a replace, but there is no version check
between a client's read and its write.
"""

import logging
from collections import OrderedDict
from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from apps.catalog.models import Product
from apps.catalog.services.pricing import price_for
from apps.common.money import ZERO, quantize_money
from apps.cycles.services.lifecycle import ensure_open, get_cycle
from apps.friends.models import Friend
from apps.friends.services.exceptions import FriendInactiveError, FriendNotFoundError
from apps.orders.models import Order, OrderItem, OrderStatus, PickupLocation

from .exceptions import (
    EmptyOrderError,
    InvalidQuantityError,
    OrderAlreadyFulfilledError,
    OrderNotFoundError,
    PickupLocationNotFoundError,
)

logger = logging.getLogger(__name__)

MAX_LINE_QUANTITY = 999
# Order.total is DecimalField(max_digits=10, decimal_places=2)
MAX_ORDER_TOTAL = Decimal('99999999.99')


def _get_friend(friend_id: UUID, *, require_active: bool = False) -> Friend:
    try:
        friend = Friend.objects.get(id=friend_id)
    except (Friend.DoesNotExist, ValidationError):
        raise FriendNotFoundError(f"Friend with ID {friend_id} not found")
    if require_active and not friend.active:
        logger.warning("Inactive friend %s tried to change an order", friend_id)
        raise FriendInactiveError()
    return friend


def _order_queryset():
    return Order.objects.select_related('friend', 'cycle', 'pickup_location').prefetch_related('items__product')


def get_cart(*, friend_id: UUID, cycle_id: UUID) -> Optional[Order]:
    """
    The friend's order for the cycle, or None. Never creates rows.

    Raises:
        FriendNotFoundError: If friend doesn't exist
        CycleNotFoundError: If cycle doesn't exist
    """
    _get_friend(friend_id)
    cycle = get_cycle(cycle_id)
    return _order_queryset().filter(friend_id=friend_id, cycle=cycle).first()


@transaction.atomic
def get_or_create_draft(*, friend_id: UUID, cycle_id: UUID) -> Order:
    """
    Return the existing order or create an empty draft. Idempotent.

    Raises:
        FriendNotFoundError: If friend doesn't exist
        CycleNotFoundError: If cycle doesn't exist
    """
    friend = _get_friend(friend_id)
    cycle = get_cycle(cycle_id)
    order, created = Order.objects.get_or_create(friend=friend, cycle=cycle)
    if created:
        logger.info("Draft order %s created for friend %s in cycle %s", order.id, friend.id, cycle.id)
    return _order_queryset().get(id=order.id)


def _merge_lines(items: Iterable[dict]) -> "OrderedDict":
    """
    Sum quantities of repeated (product, variant) lines; drop non-positive ones.

    Raises:
        InvalidQuantityError: If a merged line exceeds MAX_LINE_QUANTITY
    """
    merged = OrderedDict()
    for item in items:
        quantity = int(item.get('quantity') or 0)
        if quantity <= 0:
            continue
        key = (str(item['product_id']), str(item['variant']).strip())
        merged[key] = merged.get(key, 0) + quantity
        if merged[key] > MAX_LINE_QUANTITY:
            raise InvalidQuantityError(f"At most {MAX_LINE_QUANTITY} of one variant per order")
    return merged


def _lock_order(friend: Friend, cycle) -> Optional[Order]:
    return (
        Order.objects
        .select_for_update()
        .filter(friend=friend, cycle=cycle)
        .first()
    )


def _ensure_changeable(order: Order) -> None:
    if order.paid or order.packed:
        logger.warning("Cart change rejected: order %s is already paid or packed", order.id)
        raise OrderAlreadyFulfilledError()


@transaction.atomic
def replace_cart(*, friend_id: UUID, cycle_id: UUID, items: Iterable[dict]) -> Optional[Order]:
    """
    Replace the whole cart with ``items`` ({product_id, variant, quantity}).

    Lines for unknown, inactive or foreign products and for unpriced
    variants are skipped. Unit prices are snapshotted at the current
    markup. If nothing remains the order is deleted and None returned.
    The order's status is left as it was.

    Raises:
        CycleNotFoundError: If cycle doesn't exist
        CycleLockedError: If the cycle is not open
        FriendNotFoundError: If friend doesn't exist
        FriendInactiveError: If friend is deactivated
        OrderAlreadyFulfilledError: If the order is already paid or packed
        InvalidQuantityError: If a line quantity or the total is too large
    """
    cycle = get_cycle(cycle_id)
    ensure_open(cycle)
    friend = _get_friend(friend_id, require_active=True)

    order = _lock_order(friend, cycle)
    if order is not None:
        _ensure_changeable(order)

    lines = _merge_lines(items)
    products = {
        str(product.id): product
        for product in (
            Product.objects
            .filter(id__in={product_id for product_id, _ in lines}, cycle=cycle, active=True)
            .prefetch_related('variants')
        )
    }

    resolved = []
    total = ZERO
    for (product_id, variant), quantity in lines.items():
        product = products.get(product_id)
        if product is None:
            continue
        price = price_for(product, variant, cycle)
        if price is None:
            continue
        resolved.append((product, variant, quantity, price))
        total += price * quantity
    total = quantize_money(total)
    if total > MAX_ORDER_TOTAL:
        raise InvalidQuantityError(f"Order total cannot exceed {MAX_ORDER_TOTAL}")

    if total == ZERO:
        if order is not None:
            order_id = order.id
            order.delete()
            logger.info("Cart emptied: order %s deleted", order_id)
        return None

    if order is None:
        order, created = Order.objects.get_or_create(friend=friend, cycle=cycle)
        if not created:
            # A concurrent first replace inserted the row; overwrite it.
            order = _lock_order(friend, cycle) or Order.objects.create(friend=friend, cycle=cycle)
            _ensure_changeable(order)
    order.items.all().delete()

    OrderItem.objects.bulk_create([
        OrderItem(order=order, product=product, variant=variant, quantity=quantity, price=price)
        for product, variant, quantity, price in resolved
    ])
    order.total = total
    order.save(update_fields=['total', 'updated_at'])

    logger.info(
        "Cart replaced: order %s now %d lines, total %s",
        order.id, len(resolved), total
    )
    return _order_queryset().get(id=order.id)


@transaction.atomic
def submit(
    *,
    friend_id: UUID,
    cycle_id: UUID,
    pickup_location_id: Optional[UUID] = None
) -> Order:
    """
    Submit the friend's order for the cycle.

    Submitting again re-stamps ``submitted_at``.

    Raises:
        CycleNotFoundError: If cycle doesn't exist
        CycleLockedError: If the cycle is not open
        FriendNotFoundError: If friend doesn't exist
        FriendInactiveError: If friend is deactivated
        OrderNotFoundError: If the friend has no order in the cycle
        EmptyOrderError: If the order has no items
        PickupLocationNotFoundError: If the location is unknown or inactive
    """
    cycle = get_cycle(cycle_id)
    ensure_open(cycle)
    friend = _get_friend(friend_id, require_active=True)

    order = _lock_order(friend, cycle)
    if order is None:
        raise OrderNotFoundError("No order to submit")
    if not order.items.exists():
        raise EmptyOrderError()

    update_fields = ['status', 'submitted_at', 'updated_at']
    if pickup_location_id is not None:
        try:
            order.pickup_location = PickupLocation.objects.get(id=pickup_location_id, active=True)
        except (PickupLocation.DoesNotExist, ValidationError):
            raise PickupLocationNotFoundError()
        update_fields.append('pickup_location')

    order.status = OrderStatus.SUBMITTED
    order.submitted_at = timezone.now()
    order.save(update_fields=update_fields)

    logger.info("Order %s submitted by friend %s, total %s", order.id, friend.id, order.total)
    return _order_queryset().get(id=order.id)

"""
Fulfillment: paid and packed flags on submitted orders.

Every flag change writes one ledger entry in the same transaction, so the
ledger always mirrors order state:

- paid:   payment +total, reversed by payment -total
- packed: charge  -total, reversed by charge  +total
"""

import logging
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.cycles.services.lifecycle import get_cycle
from apps.ledger.models import TransactionType
from apps.ledger.services.entries import record_entry
from apps.orders.models import Order, OrderStatus

from .exceptions import OrderNotFoundError, OrderNotSubmittedError

logger = logging.getLogger(__name__)

STORNO_SUFFIX = ' (storno)'


def _lock_submitted(order_id: UUID) -> Order:
    try:
        order = (
            Order.objects
            .select_for_update()
            .select_related('cycle', 'friend')
            .get(id=order_id)
        )
    except (Order.DoesNotExist, ValidationError):
        raise OrderNotFoundError(f"Order with ID {order_id} not found")

    if order.status != OrderStatus.SUBMITTED:
        logger.warning("Fulfillment rejected: order %s is %s", order_id, order.status)
        raise OrderNotSubmittedError()
    return order


def get_order(order_id: UUID) -> Order:
    """
    Raises:
        OrderNotFoundError: If order doesn't exist
    """
    try:
        return (
            Order.objects
            .select_related('friend', 'cycle', 'pickup_location')
            .prefetch_related('items__product')
            .get(id=order_id)
        )
    except (Order.DoesNotExist, ValidationError):
        raise OrderNotFoundError(f"Order with ID {order_id} not found")


@transaction.atomic
def set_paid(*, order_id: UUID, paid: bool) -> Order:
    """
    Mark a submitted order paid or unpaid.

    No-op (and no ledger entry) when the flag already has that value.

    Raises:
        OrderNotFoundError: If order doesn't exist
        OrderNotSubmittedError: If the order is still a draft
    """
    order = _lock_submitted(order_id)
    if order.paid == paid:
        return get_order(order.id)

    note = f"Payment: {order.cycle.name}"
    amount = order.total
    if not paid:
        amount = -amount
        note += STORNO_SUFFIX

    record_entry(
        friend_id=order.friend_id,
        entry_type=TransactionType.PAYMENT,
        amount=amount,
        note=note,
        order_id=order.id,
    )
    order.paid = paid
    order.save(update_fields=['paid', 'updated_at'])

    logger.info("Order %s paid=%s (%s)", order.id, paid, amount)
    return get_order(order.id)


@transaction.atomic
def toggle_packed(*, order_id: UUID) -> Order:
    """
    Flip the packed flag of a submitted order.

    Packing charges the friend the order total; unpacking refunds it.

    Raises:
        OrderNotFoundError: If order doesn't exist
        OrderNotSubmittedError: If the order is still a draft
    """
    order = _lock_submitted(order_id)

    note = f"Order: {order.cycle.name}"
    if order.packed:
        order.packed = False
        order.packed_at = None
        amount = order.total
        note += STORNO_SUFFIX
    else:
        order.packed = True
        order.packed_at = timezone.now()
        amount = -order.total

    record_entry(
        friend_id=order.friend_id,
        entry_type=TransactionType.CHARGE,
        amount=amount,
        note=note,
        order_id=order.id,
    )
    order.save(update_fields=['packed', 'packed_at', 'updated_at'])

    logger.info("Order %s packed=%s (%s)", order.id, order.packed, amount)
    return get_order(order.id)


def list_cycle_orders(*, cycle_id: UUID, status: Optional[str] = None) -> QuerySet:
    """
    All orders of a cycle for the admin overview, latest submissions first.

    Raises:
        CycleNotFoundError: If cycle doesn't exist
    """
    cycle = get_cycle(cycle_id)
    queryset = (
        Order.objects
        .filter(cycle=cycle)
        .select_related('friend', 'pickup_location')
        .prefetch_related('items__product')
    )
    if status:
        queryset = queryset.filter(status=status)
    return queryset.order_by('-submitted_at', 'friend__name')

"""
Cycle lifecycle.

Status is one of open / locked / completed. Any status may be written at
any time; only ``open`` admits cart changes.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, Q, QuerySet

from apps.common.money import to_decimal
from apps.cycles.models import Cycle, CycleStatus

from .exceptions import CycleLockedError, CycleNotFoundError, InvalidCycleDataError

logger = logging.getLogger(__name__)

MARKUP_PLACES = Decimal('0.001')


@dataclass(frozen=True)
class CyclePatch:
    """
    Partial update of a cycle. ``None`` leaves a field unchanged.

    An empty ``shared_password`` clears the password.
    """

    name: Optional[str] = None
    status: Optional[str] = None
    shared_password: Optional[str] = None
    markup_ratio: Optional[Decimal] = None

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (self.name, self.status, self.shared_password, self.markup_ratio)
        )


def _clean_markup(value) -> Decimal:
    try:
        ratio = to_decimal(value)
    except ValueError:
        raise InvalidCycleDataError(f"Invalid markup ratio: {value!r}")
    ratio = ratio.quantize(MARKUP_PLACES)
    if ratio <= 0:
        raise InvalidCycleDataError("Markup ratio must be greater than zero")
    return ratio


def get_cycle(cycle_id: UUID, *, for_update: bool = False) -> Cycle:
    """
    Raises:
        CycleNotFoundError: If cycle doesn't exist
    """
    queryset = Cycle.objects.select_for_update() if for_update else Cycle.objects
    try:
        return queryset.get(id=cycle_id)
    except (Cycle.DoesNotExist, ValidationError):
        raise CycleNotFoundError(f"Cycle with ID {cycle_id} not found")


def ensure_open(cycle: Cycle) -> None:
    """
    Raises:
        CycleLockedError: If the cycle is locked or completed
    """
    if not cycle.is_open:
        logger.warning("Cart change rejected: cycle %s is %s", cycle.id, cycle.status)
        raise CycleLockedError(f"Cycle {cycle.name} is {cycle.status}")


def list_cycles() -> QuerySet:
    """Newest first, annotated with ``orders_count`` (submitted orders)."""
    return Cycle.objects.annotate(
        orders_count=Count('orders', filter=Q(orders__status='submitted'))
    ).order_by('-created_at')


@transaction.atomic
def create_cycle(
    *,
    name: str,
    shared_password: Optional[str] = None,
    markup_ratio=Decimal('1')
) -> Cycle:
    """
    Open a new cycle.

    Raises:
        InvalidCycleDataError: If name is blank or markup is not positive
    """
    name = (name or '').strip()
    if not name:
        raise InvalidCycleDataError("Name is required")

    cycle = Cycle.objects.create(
        name=name,
        shared_password=shared_password or None,
        markup_ratio=_clean_markup(markup_ratio),
    )
    logger.info("Cycle %s created (%s)", cycle.id, cycle.name)
    return cycle


@transaction.atomic
def update_cycle(*, cycle_id: UUID, patch: CyclePatch) -> Cycle:
    """
    Apply a partial update, including status changes.

    Raises:
        CycleNotFoundError: If cycle doesn't exist
        InvalidCycleDataError: If the patch is empty or holds invalid values
    """
    if patch.is_empty():
        raise InvalidCycleDataError("Nothing to update")

    cycle = get_cycle(cycle_id, for_update=True)
    update_fields = ['updated_at']

    if patch.status is not None:
        if patch.status not in CycleStatus.values:
            raise InvalidCycleDataError(f"Invalid status: {patch.status}")
        if patch.status != cycle.status:
            logger.info("Cycle %s status %s -> %s", cycle.id, cycle.status, patch.status)
        cycle.status = patch.status
        update_fields.append('status')

    if patch.name is not None:
        if not patch.name.strip():
            raise InvalidCycleDataError("Name cannot be blank")
        cycle.name = patch.name.strip()
        update_fields.append('name')

    if patch.shared_password is not None:
        cycle.shared_password = patch.shared_password or None
        update_fields.append('shared_password')

    if patch.markup_ratio is not None:
        cycle.markup_ratio = _clean_markup(patch.markup_ratio)
        update_fields.append('markup_ratio')

    cycle.save(update_fields=update_fields)
    return cycle


@transaction.atomic
def delete_cycle(*, cycle_id: UUID) -> None:
    """
    Delete a cycle with its products and orders.

    Ledger entries of its orders stay; their order link is cleared.

    Raises:
        CycleNotFoundError: If cycle doesn't exist
    """
    cycle = get_cycle(cycle_id, for_update=True)
    cycle.delete()
    logger.info("Cycle %s deleted", cycle_id)

"""Pickup location management."""

import logging
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from apps.orders.models import PickupLocation

from .exceptions import InvalidPickupLocationError, PickupLocationNotFoundError

logger = logging.getLogger(__name__)


def list_pickup_locations(*, include_inactive: bool = False) -> QuerySet:
    queryset = PickupLocation.objects.all()
    if not include_inactive:
        queryset = queryset.filter(active=True)
    return queryset.order_by('name')


def _get_location(location_id: UUID) -> PickupLocation:
    try:
        return PickupLocation.objects.select_for_update().get(id=location_id)
    except (PickupLocation.DoesNotExist, ValidationError):
        raise PickupLocationNotFoundError()


@transaction.atomic
def create_pickup_location(*, name: str, address: str = '') -> PickupLocation:
    """
    Raises:
        InvalidPickupLocationError: If name is blank
    """
    name = (name or '').strip()
    if not name:
        raise InvalidPickupLocationError("Name is required")
    location = PickupLocation.objects.create(name=name, address=(address or '').strip())
    logger.info("Pickup location %s created", location.id)
    return location


@transaction.atomic
def update_pickup_location(
    *,
    location_id: UUID,
    name: Optional[str] = None,
    address: Optional[str] = None,
    active: Optional[bool] = None
) -> PickupLocation:
    """
    Raises:
        PickupLocationNotFoundError: If location doesn't exist
        InvalidPickupLocationError: If nothing is given or name is blank
    """
    if name is None and address is None and active is None:
        raise InvalidPickupLocationError("Nothing to update")

    location = _get_location(location_id)
    if name is not None:
        if not name.strip():
            raise InvalidPickupLocationError("Name cannot be blank")
        location.name = name.strip()
    if address is not None:
        location.address = address.strip()
    if active is not None:
        location.active = active
    location.save()
    return location


@transaction.atomic
def delete_pickup_location(*, location_id: UUID) -> bool:
    """
    Delete a location, or deactivate it when orders still reference it.

    Returns:
        True if the location was deactivated rather than deleted

    Raises:
        PickupLocationNotFoundError: If location doesn't exist
    """
    location = _get_location(location_id)
    if location.orders.exists():
        location.active = False
        location.save(update_fields=['active'])
        logger.info("Pickup location %s deactivated (still referenced)", location.id)
        return True

    location.delete()
    logger.info("Pickup location %s deleted", location_id)
    return False

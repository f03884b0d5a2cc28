"""
Friend roster management.

Friends are global (not tied to a cycle). Balance is the SUM of the
friend's ledger amounts and is computed on every read.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import DecimalField, QuerySet, Sum, Value
from django.db.models.functions import Coalesce

from apps.common.money import ZERO, is_settled
from apps.friends.models import Friend

from .exceptions import (
    FriendNotFoundError,
    InvalidFriendDataError,
    OutstandingBalanceError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FriendPatch:
    """Partial update of a friend. ``None`` leaves a field unchanged."""

    name: Optional[str] = None
    display_name: Optional[str] = None
    active: Optional[bool] = None

    def is_empty(self) -> bool:
        return self.name is None and self.display_name is None and self.active is None


def _with_balance(queryset: QuerySet) -> QuerySet:
    return queryset.annotate(
        balance=Coalesce(
            Sum('transactions__amount'),
            Value(ZERO),
            output_field=DecimalField(max_digits=12, decimal_places=2),
        )
    )


def get_friend(friend_id: UUID) -> Friend:
    """
    Raises:
        FriendNotFoundError: If friend doesn't exist
    """
    try:
        return _with_balance(Friend.objects.all()).get(id=friend_id)
    except (Friend.DoesNotExist, ValidationError):
        raise FriendNotFoundError(f"Friend with ID {friend_id} not found")


def list_friends(*, active_only: bool = False) -> QuerySet:
    """Friends ordered by name, each annotated with ``balance``."""
    queryset = Friend.objects.all()
    if active_only:
        queryset = queryset.filter(active=True)
    return _with_balance(queryset).order_by('name')


@transaction.atomic
def create_friend(*, name: str, display_name: str = '') -> Friend:
    """
    Add a friend to the roster.

    Raises:
        InvalidFriendDataError: If name is blank
    """
    name = (name or '').strip()
    if not name:
        raise InvalidFriendDataError("Name is required")

    friend = Friend.objects.create(name=name, display_name=(display_name or '').strip())
    logger.info("Friend %s created (%s)", friend.id, friend.name)
    return friend


@transaction.atomic
def update_friend(*, friend_id: UUID, patch: FriendPatch) -> Friend:
    """
    Rename, relabel or (de)activate a friend.

    Raises:
        FriendNotFoundError: If friend doesn't exist
        InvalidFriendDataError: If the patch is empty or sets a blank name
    """
    if patch.is_empty():
        raise InvalidFriendDataError("Nothing to update")

    try:
        friend = Friend.objects.select_for_update().get(id=friend_id)
    except Friend.DoesNotExist:
        raise FriendNotFoundError(f"Friend with ID {friend_id} not found")

    update_fields = ['updated_at']
    if patch.name is not None:
        if not patch.name.strip():
            raise InvalidFriendDataError("Name cannot be blank")
        friend.name = patch.name.strip()
        update_fields.append('name')
    if patch.display_name is not None:
        friend.display_name = patch.display_name.strip()
        update_fields.append('display_name')
    if patch.active is not None:
        friend.active = patch.active
        update_fields.append('active')

    friend.save(update_fields=update_fields)
    logger.info("Friend %s updated (%s)", friend.id, ', '.join(update_fields[1:]))
    return get_friend(friend.id)


@transaction.atomic
def delete_friend(*, friend_id: UUID) -> None:
    """
    Hard-delete a friend together with their orders and ledger.

    Only allowed once the account is settled; otherwise deactivate instead.

    Raises:
        FriendNotFoundError: If friend doesn't exist
        OutstandingBalanceError: If |balance| is 0.01 or more
    """
    try:
        friend = Friend.objects.select_for_update().get(id=friend_id)
    except Friend.DoesNotExist:
        raise FriendNotFoundError(f"Friend with ID {friend_id} not found")

    balance = friend.transactions.aggregate(total=Sum('amount'))['total'] or ZERO
    if not is_settled(balance):
        logger.warning("Refused to delete friend %s with balance %s", friend_id, balance)
        raise OutstandingBalanceError(
            f"{friend.name} has a balance of {balance}; settle it or deactivate the friend"
        )

    friend.delete()
    logger.info("Friend %s deleted", friend_id)

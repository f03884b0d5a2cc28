"""Balance reads. Balances are always a SUM over the ledger, never cached."""

from decimal import Decimal
from uuid import UUID

from django.db.models import QuerySet, Sum

from apps.common.money import ZERO, quantize_money
from apps.friends.models import Friend
from apps.friends.services.exceptions import FriendNotFoundError
from apps.ledger.models import Transaction


def _ensure_friend(friend_id: UUID) -> None:
    if not Friend.objects.filter(id=friend_id).exists():
        raise FriendNotFoundError(f"Friend with ID {friend_id} not found")


def balance_of(friend_id: UUID) -> Decimal:
    """
    Sum of all ledger amounts of the friend.

    Positive means the friend has credit, negative means they owe.

    Raises:
        FriendNotFoundError: If friend doesn't exist
    """
    _ensure_friend(friend_id)
    total = (
        Transaction.objects
        .filter(friend_id=friend_id)
        .aggregate(total=Sum('amount'))['total']
    )
    return quantize_money(total if total is not None else ZERO)


def list_entries(friend_id: UUID) -> QuerySet:
    """Friend's ledger, most recent first."""
    _ensure_friend(friend_id)
    return (
        Transaction.objects
        .filter(friend_id=friend_id)
        .select_related('order__cycle')
        .order_by('-created_at', '-id')
    )

"""
Ledger writes.

Every entry is a signed amount on one friend's account. Payments and
adjustments are entered by the administrator; charges come only from
order fulfillment via ``record_entry``.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.common.money import ZERO, quantize_money
from apps.friends.models import Friend
from apps.friends.services.exceptions import FriendNotFoundError
from apps.ledger.models import NOTE_MAX_LENGTH, Transaction, TransactionType
from apps.orders.models import Order

from .exceptions import (
    EmptyUpdateError,
    ImmutableChargeError,
    InvalidAmountError,
    MissingNoteError,
    OrderNotOwnedError,
    TransactionNotFoundError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransactionPatch:
    """Partial update of a ledger entry. ``None`` leaves a field unchanged."""

    amount: Optional[Decimal] = None
    note: Optional[str] = None
    created_at: Optional[datetime] = None

    def is_empty(self) -> bool:
        return self.amount is None and self.note is None and self.created_at is None


def _truncate_note(note) -> str:
    return (note or '').strip()[:NOTE_MAX_LENGTH]


def _money(amount) -> Decimal:
    try:
        return quantize_money(amount)
    except ValueError:
        raise InvalidAmountError(f"Invalid amount: {amount!r}")


def _check_amount(entry_type: str, amount: Decimal) -> None:
    if entry_type == TransactionType.PAYMENT and amount <= ZERO:
        raise InvalidAmountError("Payment amount must be positive")
    if entry_type == TransactionType.ADJUSTMENT and amount == ZERO:
        raise InvalidAmountError("Adjustment amount cannot be zero")


@transaction.atomic
def record_entry(
    *,
    friend_id: UUID,
    entry_type: str,
    amount,
    note: str = '',
    order_id: Optional[UUID] = None,
    created_at: Optional[datetime] = None
) -> Transaction:
    """
    Append a ledger entry.

    The amount is rounded to cents and the note truncated to 160 characters.
    No sign rules apply here: fulfillment writes reversals (storno) as
    negative payments and positive charges.

    Raises:
        FriendNotFoundError: If friend doesn't exist
        InvalidAmountError: If amount is malformed or the type is unknown
    """
    if entry_type not in TransactionType.values:
        raise InvalidAmountError(f"Unknown entry type: {entry_type}")

    amount = _money(amount)

    if not Friend.objects.filter(id=friend_id).exists():
        raise FriendNotFoundError(f"Friend with ID {friend_id} not found")

    entry = Transaction.objects.create(
        friend_id=friend_id,
        order_id=order_id,
        type=entry_type,
        amount=amount,
        note=_truncate_note(note),
        created_at=created_at or timezone.now(),
    )
    logger.info(
        "Ledger %s %s for friend %s (order %s)",
        entry_type, amount, friend_id, order_id
    )
    return entry


def record_payment(
    *,
    friend_id: UUID,
    amount,
    note: str = '',
    created_at: Optional[datetime] = None
) -> Transaction:
    """
    Record money received from a friend.

    ``created_at`` may be in the past to backdate a payment.

    Raises:
        FriendNotFoundError: If friend doesn't exist
        InvalidAmountError: If amount is not positive
    """
    amount = _money(amount)
    _check_amount(TransactionType.PAYMENT, amount)

    return record_entry(
        friend_id=friend_id,
        entry_type=TransactionType.PAYMENT,
        amount=amount,
        note=note,
        created_at=created_at,
    )


@transaction.atomic
def record_adjustment(
    *,
    friend_id: UUID,
    amount,
    note: str,
    order_id: Optional[UUID] = None
) -> Transaction:
    """
    Record a manual credit (positive) or debit (negative).

    Raises:
        FriendNotFoundError: If friend doesn't exist
        InvalidAmountError: If amount is zero
        MissingNoteError: If the note is blank
        OrderNotOwnedError: If order_id is not one of the friend's orders
    """
    amount = _money(amount)
    _check_amount(TransactionType.ADJUSTMENT, amount)
    if not note or not note.strip():
        raise MissingNoteError()

    if order_id is not None:
        if not Order.objects.filter(id=order_id, friend_id=friend_id).exists():
            raise OrderNotOwnedError()

    return record_entry(
        friend_id=friend_id,
        entry_type=TransactionType.ADJUSTMENT,
        amount=amount,
        note=note,
        order_id=order_id,
    )


def _get_editable(transaction_id: UUID) -> Transaction:
    try:
        entry = (
            Transaction.objects
            .select_for_update()
            .get(id=transaction_id)
        )
    except Transaction.DoesNotExist:
        raise TransactionNotFoundError(f"Transaction with ID {transaction_id} not found")

    if entry.type == TransactionType.CHARGE:
        logger.warning("Rejected change to charge %s", transaction_id)
        raise ImmutableChargeError()
    return entry


@transaction.atomic
def update_entry(*, transaction_id: UUID, patch: TransactionPatch) -> Transaction:
    """
    Edit a payment or adjustment.

    Raises:
        TransactionNotFoundError: If entry doesn't exist
        ImmutableChargeError: If the entry is a charge
        EmptyUpdateError: If the patch carries no fields
        InvalidAmountError: If the new amount is invalid for the type
        MissingNoteError: If an adjustment's note would become blank
    """
    if patch.is_empty():
        raise EmptyUpdateError()

    entry = _get_editable(transaction_id)
    update_fields = ['updated_at']

    if patch.amount is not None:
        amount = _money(patch.amount)
        _check_amount(entry.type, amount)
        entry.amount = amount
        update_fields.append('amount')

    if patch.note is not None:
        if entry.type == TransactionType.ADJUSTMENT and not patch.note.strip():
            raise MissingNoteError()
        entry.note = _truncate_note(patch.note)
        update_fields.append('note')

    if patch.created_at is not None:
        entry.created_at = patch.created_at
        update_fields.append('created_at')

    entry.save(update_fields=update_fields)
    logger.info("Ledger entry %s updated (%s)", entry.id, ', '.join(update_fields[1:]))
    return entry


@transaction.atomic
def delete_entry(*, transaction_id: UUID) -> UUID:
    """
    Remove a payment or adjustment.

    Returns:
        The friend id, so callers can report the new balance

    Raises:
        TransactionNotFoundError: If entry doesn't exist
        ImmutableChargeError: If the entry is a charge
    """
    entry = _get_editable(transaction_id)
    friend_id = entry.friend_id
    entry.delete()
    logger.info("Ledger entry %s deleted for friend %s", transaction_id, friend_id)
    return friend_id

"""
Service layer tests for the ledger.

Balances are recomputed from entries on every read, so most tests assert
on ``balance_of`` after a write.
"""

import pytest
from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

from django.utils import timezone

from apps.friends.services.exceptions import FriendNotFoundError
from apps.ledger.models import NOTE_MAX_LENGTH, Transaction, TransactionType
from apps.ledger.services import (
    EmptyUpdateError,
    ImmutableChargeError,
    InvalidAmountError,
    MissingNoteError,
    OrderNotOwnedError,
    TransactionNotFoundError,
    TransactionPatch,
    balance_of,
    delete_entry,
    list_entries,
    record_adjustment,
    record_entry,
    record_payment,
    update_entry,
)


@pytest.mark.django_db
class TestBalance:

    def test_no_entries_is_zero(self, friend):
        assert balance_of(friend.id) == Decimal('0.00')

    def test_balance_is_sum_of_entries(self, friend, payment, charge):
        record_adjustment(friend_id=friend.id, amount='-1.25', note='Shipping share')

        assert balance_of(friend.id) == Decimal('6.25')

    def test_balance_ignores_other_friends(self, friend, other_friend, payment):
        assert balance_of(other_friend.id) == Decimal('0.00')

    def test_unknown_friend(self):
        with pytest.raises(FriendNotFoundError):
            balance_of(uuid4())

    def test_list_entries_newest_first(self, friend):
        old = record_payment(
            friend_id=friend.id,
            amount='5',
            created_at=timezone.now() - timedelta(days=3),
        )
        new = record_payment(friend_id=friend.id, amount='7')

        assert [entry.id for entry in list_entries(friend.id)] == [new.id, old.id]


@pytest.mark.django_db
class TestRecordPayment:

    def test_record_payment(self, friend):
        entry = record_payment(friend_id=friend.id, amount='15.5', note='Transfer')

        assert entry.type == TransactionType.PAYMENT
        assert entry.amount == Decimal('15.50')
        assert balance_of(friend.id) == Decimal('15.50')

    @pytest.mark.parametrize('amount', ['0', '-3.00'])
    def test_payment_must_be_positive(self, friend, amount):
        with pytest.raises(InvalidAmountError):
            record_payment(friend_id=friend.id, amount=amount)

        assert not Transaction.objects.exists()

    def test_payment_rounds_half_up(self, friend):
        entry = record_payment(friend_id=friend.id, amount='2.005')

        assert entry.amount == Decimal('2.01')

    def test_note_is_truncated(self, friend):
        entry = record_payment(friend_id=friend.id, amount='1', note='x' * 300)

        assert len(entry.note) == NOTE_MAX_LENGTH

    def test_backdated_payment(self, friend):
        when = timezone.now() - timedelta(days=10)
        entry = record_payment(friend_id=friend.id, amount='1', created_at=when)

        assert entry.created_at == when

    def test_unknown_friend(self):
        with pytest.raises(FriendNotFoundError):
            record_payment(friend_id=uuid4(), amount='5')


@pytest.mark.django_db
class TestRecordAdjustment:

    def test_negative_adjustment(self, friend):
        record_adjustment(friend_id=friend.id, amount='-4.00', note='Broken bag refund reversed')

        assert balance_of(friend.id) == Decimal('-4.00')

    def test_zero_is_rejected(self, friend):
        with pytest.raises(InvalidAmountError):
            record_adjustment(friend_id=friend.id, amount='0', note='Nothing')

    def test_note_is_required(self, friend):
        with pytest.raises(MissingNoteError):
            record_adjustment(friend_id=friend.id, amount='3', note='   ')

    def test_linked_to_own_order(self, friend, order):
        entry = record_adjustment(friend_id=friend.id, amount='2', note='Discount', order_id=order.id)

        assert entry.order_id == order.id

    def test_foreign_order_is_rejected(self, other_friend, order):
        with pytest.raises(OrderNotOwnedError):
            record_adjustment(friend_id=other_friend.id, amount='2', note='Discount', order_id=order.id)


@pytest.mark.django_db
class TestRecordEntry:

    def test_allows_reversal_signs(self, friend):
        record_entry(friend_id=friend.id, entry_type=TransactionType.PAYMENT, amount='-12.50')
        record_entry(friend_id=friend.id, entry_type=TransactionType.CHARGE, amount='12.50')

        assert balance_of(friend.id) == Decimal('0.00')

    def test_unknown_type(self, friend):
        with pytest.raises(InvalidAmountError):
            record_entry(friend_id=friend.id, entry_type='gift', amount='1')


@pytest.mark.django_db
class TestUpdateEntry:

    def test_update_amount(self, friend, payment):
        update_entry(transaction_id=payment.id, patch=TransactionPatch(amount=Decimal('25')))

        assert balance_of(friend.id) == Decimal('25.00')

    def test_update_note_only(self, payment):
        entry = update_entry(transaction_id=payment.id, patch=TransactionPatch(note='Bank'))

        assert entry.note == 'Bank'
        assert entry.amount == Decimal('20.00')

    def test_update_date(self, payment):
        when = timezone.now() - timedelta(days=2)
        entry = update_entry(transaction_id=payment.id, patch=TransactionPatch(created_at=when))

        assert entry.created_at == when

    def test_empty_patch(self, payment):
        with pytest.raises(EmptyUpdateError):
            update_entry(transaction_id=payment.id, patch=TransactionPatch())

    def test_payment_cannot_turn_negative(self, payment):
        with pytest.raises(InvalidAmountError):
            update_entry(transaction_id=payment.id, patch=TransactionPatch(amount=Decimal('-1')))

    def test_charge_is_immutable(self, friend, charge):
        with pytest.raises(ImmutableChargeError):
            update_entry(transaction_id=charge.id, patch=TransactionPatch(amount=Decimal('-1')))

        charge.refresh_from_db()
        assert charge.amount == Decimal('-12.50')

    def test_adjustment_note_cannot_be_cleared(self, friend):
        entry = record_adjustment(friend_id=friend.id, amount='1', note='Rounding')

        with pytest.raises(MissingNoteError):
            update_entry(transaction_id=entry.id, patch=TransactionPatch(note=''))

    def test_not_found(self):
        with pytest.raises(TransactionNotFoundError):
            update_entry(transaction_id=uuid4(), patch=TransactionPatch(note='x'))


@pytest.mark.django_db
class TestDeleteEntry:

    def test_delete_payment(self, friend, payment, charge):
        friend_id = delete_entry(transaction_id=payment.id)

        assert friend_id == friend.id
        assert balance_of(friend.id) == Decimal('-12.50')

    def test_charge_cannot_be_deleted(self, charge):
        with pytest.raises(ImmutableChargeError):
            delete_entry(transaction_id=charge.id)

        assert Transaction.objects.filter(id=charge.id).exists()

"""
Service layer tests for carts, fulfillment and pickup locations.
"""

import pytest
from decimal import Decimal
from uuid import uuid4
from unittest.mock import patch
from django.db import DatabaseError
from django.db.models import RestrictedError

from apps.catalog.models import Product, ProductVariant
from apps.cycles.models import Cycle
from apps.cycles.services import CyclePatch, delete_cycle, update_cycle
from apps.cycles.services.exceptions import CycleLockedError
from apps.friends.services.exceptions import FriendInactiveError
from apps.ledger.models import Transaction, TransactionType
from apps.ledger.services import balance_of
from apps.orders.models import Order, OrderItem, OrderStatus, PickupLocation
from apps.orders.services import (
    create_pickup_location,
    delete_pickup_location,
    get_cart,
    get_or_create_draft,
    list_cycle_orders,
    list_pickup_locations,
    replace_cart,
    set_paid,
    submit,
    toggle_packed,
    update_pickup_location,
)
from apps.orders.services import cart as cart_services
from apps.orders.services.exceptions import (
    EmptyOrderError,
    InvalidPickupLocationError,
    InvalidQuantityError,
    OrderAlreadyFulfilledError,
    OrderNotFoundError,
    OrderNotSubmittedError,
    PickupLocationNotFoundError,
)


def _line(product, variant='250g', quantity=1):
    return {'product_id': product.id, 'variant': variant, 'quantity': quantity}


@pytest.mark.django_db
class TestReplaceCart:

    def test_creates_draft_with_snapshot_prices(self, friend, cycle, product):
        order = replace_cart(
            friend_id=friend.id,
            cycle_id=cycle.id,
            items=[_line(product, '250g', 2), _line(product, '1kg', 1)],
        )

        assert order.status == OrderStatus.DRAFT
        assert order.total == Decimal('44.00')
        assert {(i.variant, i.quantity, i.price) for i in order.items.all()} == {
            ('250g', 2, Decimal('8.00')),
            ('1kg', 1, Decimal('28.00')),
        }

    def test_last_replace_wins(self, friend, cycle, product, cheap_product):
        replace_cart(friend_id=friend.id, cycle_id=cycle.id, items=[_line(product, '1kg', 3)])
        replace_cart(friend_id=friend.id, cycle_id=cycle.id, items=[_line(cheap_product, '250g', 1)])

        cart = get_cart(friend_id=friend.id, cycle_id=cycle.id)

        assert [(i.product_id, i.quantity) for i in cart.items.all()] == [(cheap_product.id, 1)]
        assert cart.total == Decimal('6.25')
        assert Order.objects.count() == 1
        assert get_or_create_draft(friend_id=friend.id, cycle_id=cycle.id).id == cart.id

    def test_duplicate_lines_are_merged(self, friend, cycle, product):
        order = replace_cart(
            friend_id=friend.id,
            cycle_id=cycle.id,
            items=[_line(product, '250g', 1), _line(product, '250g', 2)],
        )

        assert [i.quantity for i in order.items.all()] == [3]

    def test_all_zero_quantities_leave_no_order(self, friend, cycle, product):
        result = replace_cart(
            friend_id=friend.id,
            cycle_id=cycle.id,
            items=[_line(product, '250g', 0), _line(product, '1kg', 0)],
        )

        assert result is None
        assert not Order.objects.exists()

    def test_emptying_cart_deletes_order(self, friend, cycle, product):
        replace_cart(friend_id=friend.id, cycle_id=cycle.id, items=[_line(product)])

        assert replace_cart(friend_id=friend.id, cycle_id=cycle.id, items=[]) is None
        assert get_cart(friend_id=friend.id, cycle_id=cycle.id) is None

    def test_unresolvable_lines_are_skipped(self, friend, cycle, product):
        other_cycle = Cycle.objects.create(name='July')
        foreign = Product.objects.create(cycle=other_cycle, name='Foreign')
        ProductVariant.objects.create(product=foreign, label='250g', price=Decimal('5.00'))
        hidden = Product.objects.create(cycle=cycle, name='Hidden', active=False)
        ProductVariant.objects.create(product=hidden, label='250g', price=Decimal('5.00'))

        order = replace_cart(
            friend_id=friend.id,
            cycle_id=cycle.id,
            items=[
                _line(product, '250g', 1),
                _line(product, '500g', 1),
                _line(foreign),
                _line(hidden),
                {'product_id': uuid4(), 'variant': '250g', 'quantity': 1},
            ],
        )

        assert order.items.count() == 1
        assert order.total == Decimal('8.00')

    def test_markup_is_snapshotted(self, friend, product):
        cycle = product.cycle
        update_cycle(cycle_id=cycle.id, patch=CyclePatch(markup_ratio=Decimal('1.2')))

        order = replace_cart(friend_id=friend.id, cycle_id=cycle.id, items=[_line(product)])
        update_cycle(cycle_id=cycle.id, patch=CyclePatch(markup_ratio=Decimal('2')))

        order.refresh_from_db()
        assert order.items.get().price == Decimal('9.60')
        assert order.total == Decimal('9.60')

    def test_locked_cycle_rejects_changes(self, friend, locked_cycle):
        with pytest.raises(CycleLockedError):
            replace_cart(friend_id=friend.id, cycle_id=locked_cycle.id, items=[])

    def test_inactive_friend_is_rejected(self, inactive_friend, cycle, product):
        with pytest.raises(FriendInactiveError):
            replace_cart(friend_id=inactive_friend.id, cycle_id=cycle.id, items=[_line(product)])

    def test_submitted_order_stays_submitted(self, submitted_order, friend, cycle, product):
        order = replace_cart(friend_id=friend.id, cycle_id=cycle.id, items=[_line(product)])

        assert order.status == OrderStatus.SUBMITTED
        assert order.total == Decimal('8.00')

    def test_paid_order_cannot_change(self, submitted_order, friend, cycle, product):
        set_paid(order_id=submitted_order.id, paid=True)

        with pytest.raises(OrderAlreadyFulfilledError):
            replace_cart(friend_id=friend.id, cycle_id=cycle.id, items=[_line(product)])

    def test_line_quantity_is_capped(self, friend, cycle, product):
        with pytest.raises(InvalidQuantityError):
            replace_cart(friend_id=friend.id, cycle_id=cycle.id, items=[_line(product, '250g', 10 ** 20)])

        assert not Order.objects.exists()

    def test_merged_lines_are_capped(self, friend, cycle, product):
        with pytest.raises(InvalidQuantityError):
            replace_cart(
                friend_id=friend.id,
                cycle_id=cycle.id,
                items=[_line(product, '250g', 600), _line(product, '250g', 600)],
            )

    def test_total_is_capped(self, friend, cycle):
        pricey = Product.objects.create(cycle=cycle, name='Geisha')
        ProductVariant.objects.create(product=pricey, label='250g', price=Decimal('99999999.00'))

        with pytest.raises(InvalidQuantityError):
            replace_cart(friend_id=friend.id, cycle_id=cycle.id, items=[_line(pricey, '250g', 2)])

        assert not Order.objects.exists()

    def test_failed_replace_keeps_previous_cart(self, submitted_order, friend, cycle, product):
        with patch.object(OrderItem.objects, 'bulk_create', side_effect=DatabaseError('disk full')):
            with pytest.raises(DatabaseError):
                replace_cart(friend_id=friend.id, cycle_id=cycle.id, items=[_line(product, '1kg', 1)])

        order = get_cart(friend_id=friend.id, cycle_id=cycle.id)
        assert [(i.variant, i.quantity) for i in order.items.all()] == [('250g', 2)]
        assert order.total == Decimal('12.50')

    def test_concurrently_created_order_is_reused(self, friend, cycle, product, cheap_product):
        replace_cart(friend_id=friend.id, cycle_id=cycle.id, items=[_line(cheap_product)])
        real_lock = cart_services._lock_order
        calls = []

        def lock_missing_first(*args):
            # The row appears between the first lookup and the insert.
            calls.append(args)
            return None if len(calls) == 1 else real_lock(*args)

        with patch('apps.orders.services.cart._lock_order', side_effect=lock_missing_first):
            order = replace_cart(friend_id=friend.id, cycle_id=cycle.id, items=[_line(product, '1kg', 1)])

        assert len(calls) == 2
        assert Order.objects.count() == 1
        assert [(i.product_id, i.variant) for i in order.items.all()] == [(product.id, '1kg')]
        assert order.total == Decimal('28.00')

    def test_ordered_product_cannot_be_deleted(self, submitted_order, cheap_product):
        with pytest.raises(RestrictedError):
            cheap_product.delete()

        submitted_order.refresh_from_db()
        assert submitted_order.items.count() == 1
        assert submitted_order.total == Decimal('12.50')

    def test_deleting_cycle_removes_ordered_products(self, submitted_order, cycle):
        delete_cycle(cycle_id=cycle.id)

        assert not Order.objects.exists()
        assert not OrderItem.objects.exists()
        assert not Product.objects.filter(cycle_id=cycle.id).exists()


@pytest.mark.django_db
class TestDraftAndSubmit:

    def test_get_cart_never_creates(self, friend, cycle):
        assert get_cart(friend_id=friend.id, cycle_id=cycle.id) is None
        assert not Order.objects.exists()

    def test_get_or_create_draft_is_idempotent(self, friend, cycle):
        first = get_or_create_draft(friend_id=friend.id, cycle_id=cycle.id)
        second = get_or_create_draft(friend_id=friend.id, cycle_id=cycle.id)

        assert first.id == second.id
        assert first.status == OrderStatus.DRAFT

    def test_submit(self, friend, cycle, product, pickup_location):
        replace_cart(friend_id=friend.id, cycle_id=cycle.id, items=[_line(product)])

        order = submit(friend_id=friend.id, cycle_id=cycle.id, pickup_location_id=pickup_location.id)

        assert order.status == OrderStatus.SUBMITTED
        assert order.submitted_at is not None
        assert order.pickup_location == pickup_location

    def test_resubmit_restamps(self, submitted_order, friend, cycle):
        again = submit(friend_id=friend.id, cycle_id=cycle.id)

        assert again.submitted_at >= submitted_order.submitted_at

    def test_submit_without_order(self, friend, cycle):
        with pytest.raises(OrderNotFoundError):
            submit(friend_id=friend.id, cycle_id=cycle.id)

    def test_submit_empty_order(self, friend, cycle):
        draft = get_or_create_draft(friend_id=friend.id, cycle_id=cycle.id)

        with pytest.raises(EmptyOrderError) as exc_info:
            submit(friend_id=friend.id, cycle_id=cycle.id)

        assert exc_info.value.default_code == 'empty_order'
        draft.refresh_from_db()
        assert draft.status == OrderStatus.DRAFT

    def test_submit_to_inactive_location(self, friend, cycle, product, pickup_location):
        pickup_location.active = False
        pickup_location.save()
        replace_cart(friend_id=friend.id, cycle_id=cycle.id, items=[_line(product)])

        with pytest.raises(PickupLocationNotFoundError):
            submit(friend_id=friend.id, cycle_id=cycle.id, pickup_location_id=pickup_location.id)

    def test_submit_in_locked_cycle(self, friend, locked_cycle):
        with pytest.raises(CycleLockedError):
            submit(friend_id=friend.id, cycle_id=locked_cycle.id)


@pytest.mark.django_db
class TestFulfillment:

    def test_set_paid_records_payment(self, submitted_order, friend):
        order = set_paid(order_id=submitted_order.id, paid=True)

        assert order.paid is True
        entry = Transaction.objects.get(order=order)
        assert entry.type == TransactionType.PAYMENT
        assert entry.amount == Decimal('12.50')
        assert entry.note == 'Payment: June'
        assert balance_of(friend.id) == Decimal('12.50')

    def test_set_paid_twice_is_noop(self, submitted_order):
        set_paid(order_id=submitted_order.id, paid=True)
        set_paid(order_id=submitted_order.id, paid=True)

        assert Transaction.objects.filter(order=submitted_order).count() == 1

    def test_unpay_reverses(self, submitted_order, friend):
        set_paid(order_id=submitted_order.id, paid=True)
        set_paid(order_id=submitted_order.id, paid=False)

        storno = Transaction.objects.get(order=submitted_order, amount__lt=0)
        assert storno.amount == Decimal('-12.50')
        assert storno.note.endswith('(storno)')
        assert balance_of(friend.id) == Decimal('0.00')

    def test_toggle_packed_charges_then_refunds(self, submitted_order, friend):
        packed = toggle_packed(order_id=submitted_order.id)

        assert packed.packed is True
        assert packed.packed_at is not None
        assert balance_of(friend.id) == Decimal('-12.50')

        unpacked = toggle_packed(order_id=submitted_order.id)

        assert unpacked.packed is False
        assert unpacked.packed_at is None
        amounts = sorted(
            Transaction.objects
            .filter(order=submitted_order, type=TransactionType.CHARGE)
            .values_list('amount', flat=True)
        )
        assert amounts == [Decimal('-12.50'), Decimal('12.50')]
        assert balance_of(friend.id) == Decimal('0.00')

    def test_paid_and_packed_is_settled(self, submitted_order, friend):
        set_paid(order_id=submitted_order.id, paid=True)
        toggle_packed(order_id=submitted_order.id)

        assert balance_of(friend.id) == Decimal('0.00')

    def test_draft_cannot_be_fulfilled(self, friend, cycle, product):
        draft = replace_cart(friend_id=friend.id, cycle_id=cycle.id, items=[_line(product)])

        with pytest.raises(OrderNotSubmittedError):
            set_paid(order_id=draft.id, paid=True)
        with pytest.raises(OrderNotSubmittedError):
            toggle_packed(order_id=draft.id)
        assert not Transaction.objects.exists()

    def test_unknown_order(self):
        with pytest.raises(OrderNotFoundError):
            toggle_packed(order_id=uuid4())

    def test_list_cycle_orders(self, submitted_order, other_friend, cycle):
        draft = get_or_create_draft(friend_id=other_friend.id, cycle_id=cycle.id)

        assert {o.id for o in list_cycle_orders(cycle_id=cycle.id)} == {submitted_order.id, draft.id}
        assert [o.id for o in list_cycle_orders(cycle_id=cycle.id, status='submitted')] == [submitted_order.id]

    def test_failed_pack_leaves_no_trace(self, submitted_order, friend):
        with patch.object(Order, 'save', side_effect=DatabaseError('disk full')):
            with pytest.raises(DatabaseError):
                toggle_packed(order_id=submitted_order.id)

        submitted_order.refresh_from_db()
        assert submitted_order.packed is False
        assert submitted_order.packed_at is None
        assert not Transaction.objects.filter(order=submitted_order).exists()
        assert balance_of(friend.id) == Decimal('0.00')

    def test_failed_payment_leaves_no_trace(self, submitted_order, friend):
        with patch.object(Order, 'save', side_effect=DatabaseError('disk full')):
            with pytest.raises(DatabaseError):
                set_paid(order_id=submitted_order.id, paid=True)

        submitted_order.refresh_from_db()
        assert submitted_order.paid is False
        assert not Transaction.objects.filter(order=submitted_order).exists()

    def test_failed_ledger_write_keeps_flags(self, submitted_order):
        with patch('apps.orders.services.fulfillment.record_entry', side_effect=DatabaseError('disk full')):
            with pytest.raises(DatabaseError):
                toggle_packed(order_id=submitted_order.id)

        submitted_order.refresh_from_db()
        assert submitted_order.packed is False


@pytest.mark.django_db
class TestPickupLocations:

    def test_create_and_list(self):
        create_pickup_location(name='Office', address='Main street 1')
        hidden = create_pickup_location(name='Garage')
        update_pickup_location(location_id=hidden.id, active=False)

        assert [loc.name for loc in list_pickup_locations()] == ['Office']
        assert len(list_pickup_locations(include_inactive=True)) == 2

    def test_create_requires_name(self):
        with pytest.raises(InvalidPickupLocationError):
            create_pickup_location(name='  ')

    def test_delete_unreferenced(self, pickup_location):
        assert delete_pickup_location(location_id=pickup_location.id) is False
        assert not PickupLocation.objects.exists()

    def test_delete_referenced_deactivates(self, submitted_order, friend, cycle, pickup_location):
        submit(friend_id=friend.id, cycle_id=cycle.id, pickup_location_id=pickup_location.id)

        assert delete_pickup_location(location_id=pickup_location.id) is True
        pickup_location.refresh_from_db()
        assert pickup_location.active is False

    def test_update_unknown(self):
        with pytest.raises(PickupLocationNotFoundError):
            update_pickup_location(location_id=uuid4(), name='X')

"""
Service layer tests for cycles: lifecycle, reports and friend access.
"""

import pytest
from decimal import Decimal
from uuid import uuid4

from apps.catalog.models import Product
from apps.cycles.models import Cycle, CycleStatus
from apps.cycles.services import (
    CyclePatch,
    authenticate_friend,
    create_cycle,
    delete_cycle,
    ensure_open,
    get_cycle,
    get_cycle_summary,
    get_distribution,
    get_public_cycle,
    list_cycles,
    update_cycle,
)
from apps.cycles.services.exceptions import (
    CycleLockedError,
    CycleNotFoundError,
    InvalidCycleDataError,
    WrongCyclePasswordError,
)
from apps.friends.services.exceptions import FriendNotFoundError


@pytest.mark.django_db
class TestLifecycle:

    def test_create_cycle_defaults(self):
        cycle = create_cycle(name='July')

        assert cycle.status == CycleStatus.OPEN
        assert cycle.markup_ratio == Decimal('1.000')
        assert cycle.shared_password is None

    def test_create_cycle_blank_password_is_unset(self):
        cycle = create_cycle(name='July', shared_password='')

        assert cycle.shared_password is None

    def test_create_cycle_requires_name(self):
        with pytest.raises(InvalidCycleDataError):
            create_cycle(name=' ')

    @pytest.mark.parametrize('ratio', ['0', '-1.2'])
    def test_markup_must_be_positive(self, ratio):
        with pytest.raises(InvalidCycleDataError):
            create_cycle(name='July', markup_ratio=ratio)

    def test_any_status_transition_is_allowed(self, cycle):
        update_cycle(cycle_id=cycle.id, patch=CyclePatch(status=CycleStatus.COMPLETED))
        reopened = update_cycle(cycle_id=cycle.id, patch=CyclePatch(status=CycleStatus.OPEN))

        assert reopened.status == CycleStatus.OPEN

    def test_unknown_status(self, cycle):
        with pytest.raises(InvalidCycleDataError):
            update_cycle(cycle_id=cycle.id, patch=CyclePatch(status='archived'))

    def test_empty_password_clears_it(self, cycle):
        updated = update_cycle(cycle_id=cycle.id, patch=CyclePatch(shared_password=''))

        assert updated.shared_password is None

    def test_empty_patch(self, cycle):
        with pytest.raises(InvalidCycleDataError):
            update_cycle(cycle_id=cycle.id, patch=CyclePatch())

    def test_ensure_open(self, cycle, locked_cycle):
        ensure_open(cycle)

        with pytest.raises(CycleLockedError):
            ensure_open(locked_cycle)

    def test_get_cycle_not_found(self):
        with pytest.raises(CycleNotFoundError):
            get_cycle(uuid4())

    def test_list_cycles_counts_submitted_orders(self, submitted_orders, locked_cycle):
        counts = {c.name: c.orders_count for c in list_cycles()}

        assert counts == {'June': 2, 'May': 0}

    def test_delete_cycle_cascades_products(self, cycle, product):
        delete_cycle(cycle_id=cycle.id)

        assert not Cycle.objects.filter(id=cycle.id).exists()
        assert not Product.objects.filter(id=product.id).exists()


@pytest.mark.django_db
class TestReports:

    def test_summary_aggregates_submitted_orders(self, cycle, submitted_orders):
        summary = get_cycle_summary(cycle.id)

        rows = {(item['name'], item['variant']): item for item in summary['items']}
        assert rows[('Ethiopia Yirgacheffe', '250g')]['total_quantity'] == 3
        assert rows[('Ethiopia Yirgacheffe', '250g')]['total_price'] == Decimal('24.00')
        assert rows[('Ethiopia Yirgacheffe', '1kg')]['total_quantity'] == 1
        assert summary['total_items'] == 4
        assert summary['total_price'] == Decimal('52.00')

    def test_summary_of_empty_cycle(self, cycle):
        summary = get_cycle_summary(cycle.id)

        assert summary['items'] == []
        assert summary['total_items'] == 0
        assert summary['total_price'] == Decimal('0.00')

    def test_distribution_lists_submitted_orders(self, cycle, submitted_orders):
        distribution = get_distribution(cycle.id)

        assert [order.friend.name for order in distribution['distribution']] == ['Andrej', 'Jana']


@pytest.mark.django_db
class TestFriendAccess:

    def test_public_cycle_lists_active_friends(self, cycle, friend, other_friend):
        other_friend.active = False
        other_friend.save()

        public = get_public_cycle(cycle.id)

        assert public['cycle'] == cycle
        assert public['friends'] == [friend]

    def test_authenticate(self, cycle, friend):
        assert authenticate_friend(cycle_id=cycle.id, password='kava', friend_id=friend.id) == friend

    def test_wrong_password(self, cycle, friend):
        with pytest.raises(WrongCyclePasswordError):
            authenticate_friend(cycle_id=cycle.id, password='caj', friend_id=friend.id)

    def test_cycle_without_password(self, friend):
        cycle = create_cycle(name='Open house')

        with pytest.raises(WrongCyclePasswordError):
            authenticate_friend(cycle_id=cycle.id, password='', friend_id=friend.id)

    def test_inactive_friend(self, cycle, friend):
        friend.active = False
        friend.save()

        with pytest.raises(FriendNotFoundError):
            authenticate_friend(cycle_id=cycle.id, password='kava', friend_id=friend.id)

import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.catalog.models import Product, ProductVariant
from apps.cycles.models import Cycle, CycleStatus
from apps.friends.models import Friend
from apps.orders.models import Order, OrderItem, OrderStatus


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    return User.objects.create_superuser(email='admin@example.com', password='TestPass123!')


@pytest.fixture
def admin_client(api_client, admin_user):
    """Return API client authenticated as the administrator."""
    refresh = RefreshToken.for_user(admin_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def cycle(db):
    return Cycle.objects.create(name='June', shared_password='kava')


@pytest.fixture
def locked_cycle(db):
    return Cycle.objects.create(name='May', status=CycleStatus.LOCKED, shared_password='kava')


@pytest.fixture
def friend(db):
    return Friend.objects.create(name='Jana')


@pytest.fixture
def other_friend(db):
    return Friend.objects.create(name='Andrej')


@pytest.fixture
def product(cycle):
    product = Product.objects.create(cycle=cycle, name='Ethiopia Yirgacheffe')
    ProductVariant.objects.create(product=product, label='250g', price=Decimal('8.00'))
    ProductVariant.objects.create(product=product, label='1kg', price=Decimal('28.00'))
    return product


def _order(friend, cycle, product, lines, status=OrderStatus.SUBMITTED):
    order = Order.objects.create(friend=friend, cycle=cycle, status=status)
    total = Decimal('0')
    for variant, quantity, price in lines:
        OrderItem.objects.create(
            order=order, product=product, variant=variant, quantity=quantity, price=price
        )
        total += price * quantity
    order.total = total
    order.save()
    return order


@pytest.fixture
def submitted_orders(cycle, product, friend, other_friend):
    """Two submitted orders and one draft that reports must ignore."""
    draft_friend = Friend.objects.create(name='Marek')
    return [
        _order(friend, cycle, product, [('250g', 2, Decimal('8.00'))]),
        _order(other_friend, cycle, product, [('250g', 1, Decimal('8.00')), ('1kg', 1, Decimal('28.00'))]),
        _order(draft_friend, cycle, product, [('1kg', 5, Decimal('28.00'))], status=OrderStatus.DRAFT),
    ]

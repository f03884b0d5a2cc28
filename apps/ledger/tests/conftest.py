import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.cycles.models import Cycle
from apps.friends.models import Friend
from apps.ledger.models import Transaction, TransactionType
from apps.orders.models import Order, OrderStatus


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
def friend(db):
    return Friend.objects.create(name='Jana')


@pytest.fixture
def other_friend(db):
    return Friend.objects.create(name='Andrej')


@pytest.fixture
def cycle(db):
    return Cycle.objects.create(name='June', shared_password='kava')


@pytest.fixture
def order(friend, cycle):
    return Order.objects.create(
        friend=friend,
        cycle=cycle,
        status=OrderStatus.SUBMITTED,
        total=Decimal('12.50'),
    )


@pytest.fixture
def payment(friend):
    return Transaction.objects.create(
        friend=friend,
        type=TransactionType.PAYMENT,
        amount=Decimal('20.00'),
        note='Cash',
    )


@pytest.fixture
def charge(friend, order):
    return Transaction.objects.create(
        friend=friend,
        order=order,
        type=TransactionType.CHARGE,
        amount=Decimal('-12.50'),
        note='Order: June',
    )

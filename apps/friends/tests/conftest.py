import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.friends.models import Friend
from apps.ledger.models import Transaction, TransactionType


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
    return Friend.objects.create(name='Jana', display_name='Jana (office)')


@pytest.fixture
def other_friend(db):
    return Friend.objects.create(name='Andrej')


@pytest.fixture
def inactive_friend(db):
    return Friend.objects.create(name='Zuzana', active=False)


@pytest.fixture
def friend_in_debt(friend):
    """Friend owing 12.50 after a packed order."""
    Transaction.objects.create(
        friend=friend,
        type=TransactionType.CHARGE,
        amount=Decimal('-12.50'),
        note='Order: June',
    )
    return friend

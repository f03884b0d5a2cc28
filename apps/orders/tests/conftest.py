import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.catalog.models import Product, ProductVariant
from apps.cycles.models import Cycle, CycleStatus
from apps.friends.models import Friend
from apps.orders.models import PickupLocation
from apps.orders.services import replace_cart, submit


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
def friend_client(api_client):
    """API client sending the cycle password like the friend front end does."""
    api_client.credentials(HTTP_X_CYCLE_PASSWORD='kava')
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
def inactive_friend(db):
    return Friend.objects.create(name='Zuzana', active=False)


@pytest.fixture
def product(cycle):
    product = Product.objects.create(cycle=cycle, name='Ethiopia Yirgacheffe')
    ProductVariant.objects.create(product=product, label='250g', price=Decimal('8.00'))
    ProductVariant.objects.create(product=product, label='1kg', price=Decimal('28.00'))
    return product


@pytest.fixture
def cheap_product(cycle):
    product = Product.objects.create(cycle=cycle, name='Kenya AA')
    ProductVariant.objects.create(product=product, label='250g', price=Decimal('6.25'))
    return product


@pytest.fixture
def pickup_location(db):
    return PickupLocation.objects.create(name='Office', address='Main street 1')


@pytest.fixture
def submitted_order(friend, cycle, cheap_product):
    """Submitted order worth 12.50."""
    replace_cart(
        friend_id=friend.id,
        cycle_id=cycle.id,
        items=[{'product_id': cheap_product.id, 'variant': '250g', 'quantity': 2}],
    )
    return submit(friend_id=friend.id, cycle_id=cycle.id)

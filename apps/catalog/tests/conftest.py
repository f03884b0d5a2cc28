import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.catalog.models import Product, ProductVariant
from apps.cycles.models import Cycle


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
def marked_up_cycle(db):
    return Cycle.objects.create(name='July', shared_password='kava', markup_ratio=Decimal('1.200'))


@pytest.fixture
def product(cycle):
    product = Product.objects.create(cycle=cycle, name='Ethiopia Yirgacheffe', purpose='filter')
    ProductVariant.objects.create(product=product, label='250g', price=Decimal('8.00'))
    ProductVariant.objects.create(product=product, label='1kg', price=Decimal('28.00'))
    return product


@pytest.fixture
def inactive_product(cycle):
    product = Product.objects.create(cycle=cycle, name='Old Brazil', active=False)
    ProductVariant.objects.create(product=product, label='250g', price=Decimal('7.00'))
    return product


@pytest.fixture
def multirow_sheet():
    """Supplier sheet: header block, a section marker, two products."""
    return (
        "Supplier,Price list June,,,,,,,\n"
        ",,,,,,,,\n"
        ",Zrnková káva,,,,,,,\n"
        ",Colombia Huila,,,,,,espresso,250g / 1kg\n"
        ",Chocolate and caramel,,,,,,,\"8,90 / 35,30 EUR\"\n"
        ",Sweet and round,,,,,,medium,\n"
        ",,,,,,,,\n"
        ",Kenya AA,,,,,,filter,250g / 1kg\n"
        ",Blackcurrant,,,,,,,\"40,00 / 11,50\"\n"
        ",Juicy,,,,,,light,\n"
    )

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    """Create and return the administrator."""
    return User.objects.create_superuser(
        email='admin@example.com',
        password='TestPass123!',
        display_name='Admin',
    )


@pytest.fixture
def plain_user(db):
    """An account without staff rights."""
    return User.objects.create_user(
        email='plain@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def admin_client(api_client, admin_user):
    """Return API client authenticated as the administrator."""
    refresh = RefreshToken.for_user(admin_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def plain_client(api_client, plain_user):
    refresh = RefreshToken.for_user(plain_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client

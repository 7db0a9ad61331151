import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserStatus


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def gamer(db):
    """User with an existing EXP balance."""
    return User.objects.create_user(
        email='gamer@example.com',
        password='TestPass123!',
        name='Gamer',
        total_exp=450,
    )


@pytest.fixture
def newcomer(db):
    """Freshly registered user."""
    return User.objects.create_user(
        email='newcomer@example.com',
        password='TestPass123!',
        name='Newcomer',
    )


@pytest.fixture
def blocked_gamer(db):
    """Blocked user with the highest EXP balance."""
    return User.objects.create_user(
        email='blocked@example.com',
        password='TestPass123!',
        name='Blocked',
        total_exp=9000,
        status=UserStatus.BLOCKED,
    )


@pytest.fixture
def inactive_gamer(db):
    """Deactivated user with a large EXP balance."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        name='Inactive',
        total_exp=5000,
        is_active=False,
    )


@pytest.fixture
def gamer_client(api_client, gamer):
    """API client authenticated as gamer."""
    refresh = RefreshToken.for_user(gamer)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client

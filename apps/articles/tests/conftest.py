import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.articles.models import Article
from apps.projects.models import PublishStatus


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def writer(db):
    """Create and return an article author."""
    return User.objects.create_user(
        email='writer@example.com',
        password='TestPass123!',
        name='Writer',
    )


@pytest.fixture
def reader(db):
    """Create and return a reader."""
    return User.objects.create_user(
        email='reader@example.com',
        password='TestPass123!',
        name='Reader',
    )


@pytest.fixture
def writer_client(writer):
    """API client authenticated as writer."""
    client = APIClient()
    refresh = RefreshToken.for_user(writer)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def reader_client(reader):
    """API client authenticated as reader."""
    client = APIClient()
    refresh = RefreshToken.for_user(reader)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def article(db, writer):
    """Published article."""
    return Article.objects.create(
        user=writer,
        title='Surviving Thesis Season',
        excerpt='Tips from a final-year student',
        content='word ' * 400,
        category='tips',
    )


@pytest.fixture
def draft_article(db, writer):
    """Unpublished article."""
    return Article.objects.create(
        user=writer,
        title='Work in progress',
        status=PublishStatus.DRAFT,
    )

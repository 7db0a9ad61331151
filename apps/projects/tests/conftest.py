import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.projects.models import Category, Project, ProjectType, PublishStatus


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def project_owner(db):
    """Create and return the project owner."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        name='Project Owner',
    )


@pytest.fixture
def project_visitor(db):
    """Create and return another user interacting with projects."""
    return User.objects.create_user(
        email='visitor@example.com',
        password='TestPass123!',
        name='Visitor',
    )


@pytest.fixture
def staff_user(db):
    """Create and return a staff member managing categories."""
    return User.objects.create_user(
        email='staff@example.com',
        password='TestPass123!',
        name='Staff',
        is_staff=True,
    )


@pytest.fixture
def owner_client(project_owner):
    """API client authenticated as the project owner."""
    return _client_for(project_owner)


@pytest.fixture
def visitor_client(project_visitor):
    """API client authenticated as the visitor."""
    return _client_for(project_visitor)


@pytest.fixture
def free_project(db, project_owner):
    """Published free project."""
    return Project.objects.create(
        user=project_owner,
        title='Campus Map',
        description='Interactive campus map',
        tech_stack=['Django', 'Leaflet'],
        type=ProjectType.FREE,
    )


@pytest.fixture
def paid_project(db, project_owner):
    """Published paid project."""
    return Project.objects.create(
        user=project_owner,
        title='Attendance System',
        description='QR based attendance',
        tech_stack=['Go', 'React'],
        type=ProjectType.PAID,
        price=50000,
    )


@pytest.fixture
def staff_client(staff_user):
    """API client authenticated as staff."""
    return _client_for(staff_user)


@pytest.fixture
def web_category(db):
    """Category for web applications."""
    return Category.objects.create(name='Web Apps', slug='web-apps', color='#3b82f6')


@pytest.fixture
def draft_project(db, project_owner):
    """Unpublished project."""
    return Project.objects.create(
        user=project_owner,
        title='Secret Draft',
        status=PublishStatus.DRAFT,
    )

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.projects.models import Project, ProjectType
from apps.transactions.models import Transaction, TransactionStatus
from apps.transactions.services import GatewayNotification, PaymentGatewayConfig, compute_signature

SERVER_KEY = 'SB-Mid-server-test-key'


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


def make_notification_payload(
    order_id,
    transaction_status='settlement',
    fraud_status='accept',
    status_code='200',
    gross_amount='50000.00',
    transaction_id='midtrans-txn-1',
    server_key=SERVER_KEY,
):
    """Notification body as Midtrans posts it, signed with ``server_key``."""
    return {
        'order_id': order_id,
        'status_code': status_code,
        'gross_amount': gross_amount,
        'signature_key': compute_signature(order_id, status_code, gross_amount, server_key),
        'transaction_status': transaction_status,
        'fraud_status': fraud_status,
        'transaction_id': transaction_id,
        'payment_type': 'bank_transfer',
    }


def make_notification(order_id, **kwargs):
    return GatewayNotification.from_payload(make_notification_payload(order_id, **kwargs))


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def gateway_config():
    return PaymentGatewayConfig(server_key=SERVER_KEY)


@pytest.fixture
def seller(db):
    """Owner of the paid project."""
    return User.objects.create_user(
        email='seller@example.com',
        password='TestPass123!',
        name='Seller',
    )


@pytest.fixture
def buyer(db):
    """Student buying the paid project."""
    return User.objects.create_user(
        email='buyer@example.com',
        password='TestPass123!',
        name='Buyer',
    )


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        email='staff@example.com',
        password='TestPass123!',
        name='Staff',
        is_staff=True,
    )


@pytest.fixture
def buyer_client(buyer):
    """API client authenticated as the buyer."""
    return _client_for(buyer)


@pytest.fixture
def seller_client(seller):
    """API client authenticated as the seller."""
    return _client_for(seller)


@pytest.fixture
def staff_client(staff_user):
    return _client_for(staff_user)


@pytest.fixture
def paid_project(db, seller):
    return Project.objects.create(
        user=seller,
        title='Attendance System',
        type=ProjectType.PAID,
        price=50000,
    )


@pytest.fixture
def free_project(db, seller):
    return Project.objects.create(
        user=seller,
        title='Campus Map',
        type=ProjectType.FREE,
    )


@pytest.fixture
def pending_transaction(db, paid_project, buyer, seller):
    """Pending purchase of the paid project by the buyer."""
    return Transaction.objects.create(
        project=paid_project,
        buyer=buyer,
        seller=seller,
        amount=paid_project.price,
        status=TransactionStatus.PENDING,
        external_order_id='PURCHASE-abc12345-1700000000',
    )

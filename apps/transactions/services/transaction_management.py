"""
Transaction management service - purchase creation and gateway notifications.

Purchase flow:
1. ``create_purchase`` opens a ``pending`` transaction and asks the gateway
   for a Snap session.
2. The buyer pays on the gateway's checkout page.
3. The gateway posts notifications, applied by ``apply_gateway_notification``.
   The first notification that moves the transaction into ``success`` grants
   buyer and seller EXP; replays change nothing.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID

from django.db import IntegrityError, transaction
from django.db.models import Q, QuerySet

from apps.accounts.models import User
from apps.gamification.services import AccrualResult
from apps.projects.models import Project, ProjectType
from apps.transactions.models import Transaction, TransactionStatus
from .exceptions import (
    ProjectNotFoundError,
    TransactionNotFoundError,
    NotPurchasableError,
    AlreadyPurchasedError,
    InvalidSignatureError,
)
from .payment_gateway import GatewayNotification, MidtransSnapClient, verify_signature
from .reward_orchestrator import grant_purchase_rewards
from .state_machine import can_transition, map_gateway_status

logger = logging.getLogger(__name__)
security_logger = logging.getLogger('security')

ORDER_ID_PREFIX = 'PURCHASE'
TRANSACTION_KINDS = ('all', 'purchases', 'sales')


@dataclass(frozen=True)
class PurchaseSession:
    """A freshly opened purchase and the checkout session for it."""

    transaction: Transaction
    token: str
    redirect_url: str


@dataclass(frozen=True)
class NotificationOutcome:
    """What applying one gateway notification did."""

    transaction: Transaction
    previous_status: str
    status: str
    rewarded: bool = False
    accruals: list[AccrualResult] = field(default_factory=list)

    @property
    def changed(self):
        return self.previous_status != self.status


def generate_order_id(project_id: UUID, timestamp: Optional[int] = None) -> str:
    """``PURCHASE-<first 8 chars of project id>-<unix timestamp>``"""
    if timestamp is None:
        timestamp = int(time.time())
    return f"{ORDER_ID_PREFIX}-{str(project_id)[:8]}-{timestamp}"


# =============================================================================
# PURCHASE CREATION
# =============================================================================

@transaction.atomic
def _open_purchase(*, project_id: UUID, buyer: User) -> Transaction:
    try:
        project = Project.objects.select_related('user').get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found")

    if project.type != ProjectType.PAID:
        raise NotPurchasableError("This project is free")

    if project.user_id == buyer.id:
        raise NotPurchasableError("You cannot buy your own project")

    if has_purchased(project_id=project.id, buyer_id=buyer.id):
        raise AlreadyPurchasedError("You have already purchased this project")

    # Pending rows are not unique per buyer; a second success is rejected when it settles
    return Transaction.objects.create(
        project=project,
        buyer=buyer,
        seller=project.user,
        amount=project.price,
        status=TransactionStatus.PENDING,
        external_order_id=generate_order_id(project.id),
    )


def create_purchase(*, project_id: UUID, buyer: User, gateway: MidtransSnapClient) -> PurchaseSession:
    """
    Start the purchase of a paid project.

    The pending transaction is committed before the gateway is called and
    is kept if the gateway call fails.

    Args:
        project_id: UUID of the project to buy
        buyer: User paying for it
        gateway: Snap client built from the app's PaymentGatewayConfig

    Returns:
        PurchaseSession with the transaction and Snap token/redirect URL

    Raises:
        ProjectNotFoundError: If project doesn't exist
        NotPurchasableError: If project is free or owned by the buyer
        AlreadyPurchasedError: If buyer already bought it successfully
        TransientGatewayError: If the gateway call failed (retryable)
    """
    purchase = _open_purchase(project_id=project_id, buyer=buyer)
    logger.info(
        "Transaction %s opened: order=%s project=%s buyer=%s amount=%s",
        purchase.id, purchase.external_order_id, purchase.project_id, buyer.id, purchase.amount,
    )

    try:
        session = gateway.create_payment_session(
            order_id=purchase.external_order_id,
            amount=purchase.amount,
            item_id=str(purchase.project_id),
            item_name=purchase.project.title,
            buyer_name=buyer.get_display_name(),
            buyer_email=buyer.email,
        )
    except Exception:
        logger.error("Payment session failed for transaction %s", purchase.id, exc_info=True)
        raise

    return PurchaseSession(
        transaction=purchase,
        token=session.token,
        redirect_url=session.redirect_url,
    )


# =============================================================================
# GATEWAY NOTIFICATIONS
# =============================================================================

def apply_gateway_notification(*, notification: GatewayNotification, server_key: str) -> NotificationOutcome:
    """
    Apply one gateway notification to its transaction.

    Steps:
    1. Verify the signature (no state change on mismatch)
    2. Resolve the transaction by order id under a row lock
    3. Map the gateway status; unknown combinations change nothing
    4. Persist the new status and gateway transaction id
    5. Grant rewards only on the pending -> success transition

    Raises:
        InvalidSignatureError: If the signature does not match
        TransactionNotFoundError: If no transaction has this order id
        AlreadyPurchasedError: If settling would give the buyer a second
            successful purchase of the project
    """
    if not verify_signature(notification, server_key):
        security_logger.warning(
            "Rejected gateway notification with invalid signature: order=%s status=%s",
            notification.order_id, notification.transaction_status,
        )
        raise InvalidSignatureError("Invalid signature")

    target = map_gateway_status(notification.transaction_status, notification.fraud_status)

    with transaction.atomic():
        purchase = (
            Transaction.objects
            .select_for_update()
            .filter(external_order_id=notification.order_id)
            .order_by('-created_at')
            .first()
        )
        if purchase is None:
            raise TransactionNotFoundError(f"Transaction for order {notification.order_id} not found")

        previous_status = purchase.status

        if purchase.is_terminal:
            logger.info(
                "Ignoring %s notification for %s transaction %s",
                notification.transaction_status, previous_status, purchase.id,
            )
            return NotificationOutcome(
                transaction=purchase,
                previous_status=previous_status,
                status=previous_status,
            )

        update_fields = []
        if notification.transaction_id and notification.transaction_id != purchase.external_transaction_id:
            purchase.external_transaction_id = notification.transaction_id
            update_fields.append('external_transaction_id')

        if target is None:
            logger.warning(
                "Unmapped gateway status for transaction %s: transaction_status=%s fraud_status=%s",
                purchase.id, notification.transaction_status, notification.fraud_status,
            )
        elif can_transition(previous_status, target):
            purchase.status = target
            update_fields.append('status')

        if update_fields:
            try:
                with transaction.atomic():
                    purchase.save(update_fields=update_fields + ['updated_at'])
            except IntegrityError:
                logger.error(
                    "Transaction %s settled but buyer %s already owns project %s",
                    purchase.id, purchase.buyer_id, purchase.project_id,
                )
                raise AlreadyPurchasedError("Buyer already purchased this project")

    if purchase.status != previous_status:
        logger.info("Transaction %s: %s -> %s", purchase.id, previous_status, purchase.status)

    rewarded = (
        previous_status == TransactionStatus.PENDING
        and purchase.status == TransactionStatus.SUCCESS
    )
    accruals = grant_purchase_rewards(purchase) if rewarded else []

    return NotificationOutcome(
        transaction=purchase,
        previous_status=previous_status,
        status=purchase.status,
        rewarded=rewarded,
        accruals=accruals,
    )


# =============================================================================
# QUERIES
# =============================================================================

def has_purchased(*, project_id: UUID, buyer_id: UUID) -> bool:
    """True if the buyer holds a successful transaction for the project."""
    return Transaction.objects.filter(
        project_id=project_id,
        buyer_id=buyer_id,
        status=TransactionStatus.SUCCESS,
    ).exists()


def get_user_transactions(*, user: User, kind: str = 'all') -> QuerySet[Transaction]:
    """
    Transactions the user took part in, newest first.

    Args:
        user: Buyer or seller
        kind: 'purchases', 'sales' or 'all' (unknown values mean 'all')
    """
    queryset = Transaction.objects.select_related('project', 'buyer', 'seller')

    if kind == 'purchases':
        queryset = queryset.filter(buyer=user)
    elif kind == 'sales':
        queryset = queryset.filter(seller=user)
    else:
        queryset = queryset.filter(Q(buyer=user) | Q(seller=user))

    return queryset.order_by('-created_at')


def get_all_transactions(*, status: Optional[str] = None) -> QuerySet[Transaction]:
    """All transactions, optionally filtered by status (staff listing)."""
    queryset = Transaction.objects.select_related('project', 'buyer', 'seller')

    if status:
        queryset = queryset.filter(status=status)

    return queryset.order_by('-created_at')

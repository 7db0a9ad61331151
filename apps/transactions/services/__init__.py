"""
Transactions services - Business logic layer.

This package contains the purchase flow for paid projects:
- Snap checkout sessions (payment gateway client)
- Transaction lifecycle and gateway notification handling
- Buyer/seller rewards on settlement
"""

from .transaction_management import (
    PurchaseSession,
    NotificationOutcome,
    generate_order_id,
    create_purchase,
    apply_gateway_notification,
    has_purchased,
    get_user_transactions,
    get_all_transactions,
)

from .payment_gateway import (
    PaymentGatewayConfig,
    PaymentSession,
    GatewayNotification,
    MidtransSnapClient,
    compute_signature,
    verify_signature,
)

from .state_machine import (
    map_gateway_status,
    can_transition,
    is_terminal,
)

from .reward_orchestrator import grant_purchase_rewards

from .exceptions import (
    TransactionServiceError,
    ProjectNotFoundError,
    TransactionNotFoundError,
    NotPurchasableError,
    AlreadyPurchasedError,
    InvalidSignatureError,
    TransientGatewayError,
)

__all__ = [
    # Transaction management
    'PurchaseSession',
    'NotificationOutcome',
    'generate_order_id',
    'create_purchase',
    'apply_gateway_notification',
    'has_purchased',
    'get_user_transactions',
    'get_all_transactions',
    # Payment gateway
    'PaymentGatewayConfig',
    'PaymentSession',
    'GatewayNotification',
    'MidtransSnapClient',
    'compute_signature',
    'verify_signature',
    # State machine
    'map_gateway_status',
    'can_transition',
    'is_terminal',
    # Rewards
    'grant_purchase_rewards',
    # Exceptions
    'TransactionServiceError',
    'ProjectNotFoundError',
    'TransactionNotFoundError',
    'NotPurchasableError',
    'AlreadyPurchasedError',
    'InvalidSignatureError',
    'TransientGatewayError',
]

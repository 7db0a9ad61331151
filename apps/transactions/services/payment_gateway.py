"""
Midtrans Snap payment gateway client.

Creates Snap checkout sessions and authenticates the notifications Midtrans
posts back. The client holds an explicit ``PaymentGatewayConfig``; nothing
here reads Django settings at call time.
"""

import hashlib
import hmac
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from .exceptions import TransientGatewayError

logger = logging.getLogger(__name__)

SANDBOX_BASE_URL = "https://app.sandbox.midtrans.com"
PRODUCTION_BASE_URL = "https://app.midtrans.com"
SNAP_TRANSACTIONS_PATH = "/snap/v1/transactions"
DEFAULT_TIMEOUT = 30
ITEM_NAME_MAX_LENGTH = 50


@dataclass(frozen=True)
class PaymentGatewayConfig:
    """Credentials and transport settings for the payment gateway."""

    server_key: str
    client_key: str = ""
    is_production: bool = False
    timeout: float = DEFAULT_TIMEOUT

    @property
    def base_url(self) -> str:
        return PRODUCTION_BASE_URL if self.is_production else SANDBOX_BASE_URL

    @classmethod
    def from_settings(cls, settings) -> "PaymentGatewayConfig":
        return cls(
            server_key=getattr(settings, 'MIDTRANS_SERVER_KEY', ''),
            client_key=getattr(settings, 'MIDTRANS_CLIENT_KEY', ''),
            is_production=getattr(settings, 'MIDTRANS_IS_PRODUCTION', False),
            timeout=getattr(settings, 'PAYMENT_GATEWAY_TIMEOUT', DEFAULT_TIMEOUT),
        )


@dataclass(frozen=True)
class PaymentSession:
    """Snap session handed to the client to render checkout."""

    token: str
    redirect_url: str


@dataclass(frozen=True)
class GatewayNotification:
    """
    Fields of a Midtrans HTTP notification used by the state machine.

    Values are kept exactly as received; the signature is computed over
    the raw strings.
    """

    order_id: str
    status_code: str
    gross_amount: str
    signature_key: str
    transaction_status: str
    fraud_status: str = ""
    transaction_id: str = ""

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "GatewayNotification":
        return cls(
            order_id=str(payload.get('order_id', '')),
            status_code=str(payload.get('status_code', '')),
            gross_amount=str(payload.get('gross_amount', '')),
            signature_key=str(payload.get('signature_key', '')),
            transaction_status=str(payload.get('transaction_status', '')),
            fraud_status=str(payload.get('fraud_status') or ''),
            transaction_id=str(payload.get('transaction_id') or ''),
        )


# =============================================================================
# SIGNATURES
# =============================================================================

def compute_signature(order_id: str, status_code: str, gross_amount: str, server_key: str) -> str:
    """hex(sha512(order_id + status_code + gross_amount + server_key))"""
    payload = f"{order_id}{status_code}{gross_amount}{server_key}"
    return hashlib.sha512(payload.encode('utf-8')).hexdigest()


def verify_signature(notification: GatewayNotification, server_key: str) -> bool:
    """Constant-time check of the notification's ``signature_key``."""
    expected = compute_signature(
        notification.order_id,
        notification.status_code,
        notification.gross_amount,
        server_key,
    )
    return hmac.compare_digest(
        expected.encode('utf-8'),
        notification.signature_key.encode('utf-8'),
    )


# =============================================================================
# SNAP CLIENT
# =============================================================================

def truncate_item_name(name: str, max_length: int = ITEM_NAME_MAX_LENGTH) -> str:
    if len(name) <= max_length:
        return name
    return name[:max_length - 3] + "..."


class MidtransSnapClient:
    """Thin HTTP client for the Snap transactions endpoint."""

    def __init__(self, config: PaymentGatewayConfig):
        self.config = config

    @property
    def url(self) -> str:
        return f"{self.config.base_url}{SNAP_TRANSACTIONS_PATH}"

    def build_payload(
        self,
        *,
        order_id: str,
        amount: int,
        item_id: str,
        item_name: str,
        buyer_name: str,
        buyer_email: str,
    ) -> Dict[str, Any]:
        return {
            'transaction_details': {
                'order_id': order_id,
                'gross_amount': amount,
            },
            'credit_card': {
                'secure': True,
            },
            'item_details': [
                {
                    'id': item_id,
                    'price': amount,
                    'quantity': 1,
                    'name': truncate_item_name(item_name),
                },
            ],
            'customer_details': {
                'first_name': buyer_name,
                'email': buyer_email,
            },
        }

    def create_payment_session(
        self,
        *,
        order_id: str,
        amount: int,
        item_id: str,
        item_name: str,
        buyer_name: str,
        buyer_email: str,
    ) -> PaymentSession:
        """
        Request a Snap checkout session.

        Raises:
            TransientGatewayError: On network failure, timeout, non-2xx
                response or a body without a token
        """
        payload = self.build_payload(
            order_id=order_id,
            amount=amount,
            item_id=item_id,
            item_name=item_name,
            buyer_name=buyer_name,
            buyer_email=buyer_email,
        )

        try:
            response = requests.post(
                self.url,
                json=payload,
                auth=(self.config.server_key, ''),
                headers={'Accept': 'application/json'},
                timeout=self.config.timeout,
            )
        except requests.Timeout as exc:
            raise TransientGatewayError("Payment gateway timed out") from exc
        except requests.RequestException as exc:
            raise TransientGatewayError(f"Could not reach payment gateway: {exc}") from exc

        if not 200 <= response.status_code < 300:
            message = self._error_message(response)
            raise TransientGatewayError(
                f"Payment gateway returned {response.status_code}: {message}"
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise TransientGatewayError("Invalid JSON received from payment gateway") from exc

        token = data.get('token') if isinstance(data, dict) else None
        if not token:
            raise TransientGatewayError("Payment gateway response has no token")

        logger.debug("Snap session created for order %s", order_id)
        return PaymentSession(token=token, redirect_url=data.get('redirect_url', ''))

    @staticmethod
    def _error_message(response) -> Optional[str]:
        try:
            payload = response.json()
        except ValueError:
            return response.text
        if isinstance(payload, dict):
            messages = payload.get('error_messages')
            if messages:
                return '; '.join(str(m) for m in messages)
        return str(payload)

"""
Payment transaction lifecycle.

    pending --> success
    pending --> failed

``success`` and ``failed`` are terminal. Gateway statuses are translated
conservatively: anything not listed here maps to ``None`` and leaves the
transaction untouched.
"""

from typing import Optional

from apps.transactions.models import TransactionStatus

SETTLED_STATUSES = frozenset({'capture', 'settlement'})
ACCEPTED_FRAUD_STATUSES = frozenset({'accept', ''})
FAILED_STATUSES = frozenset({'deny', 'cancel', 'expire'})
PENDING_STATUSES = frozenset({'pending'})

ALLOWED_TRANSITIONS = {
    TransactionStatus.PENDING: frozenset({TransactionStatus.SUCCESS, TransactionStatus.FAILED}),
    TransactionStatus.SUCCESS: frozenset(),
    TransactionStatus.FAILED: frozenset(),
}


def map_gateway_status(transaction_status: str, fraud_status: str = '') -> Optional[TransactionStatus]:
    """
    Translate a gateway ``transaction_status``/``fraud_status`` pair.

    Returns:
        Internal status, or None when the combination is not recognised
        (e.g. ``capture`` with ``fraud_status=challenge``)
    """
    fraud_status = fraud_status or ''

    if transaction_status in SETTLED_STATUSES:
        if fraud_status in ACCEPTED_FRAUD_STATUSES:
            return TransactionStatus.SUCCESS
        return None
    if transaction_status in PENDING_STATUSES:
        return TransactionStatus.PENDING
    if transaction_status in FAILED_STATUSES:
        return TransactionStatus.FAILED
    return None


def is_terminal(status: str) -> bool:
    return not ALLOWED_TRANSITIONS[TransactionStatus(status)]


def can_transition(current: str, target: str) -> bool:
    """True if ``current -> target`` is a defined transition."""
    return TransactionStatus(target) in ALLOWED_TRANSITIONS[TransactionStatus(current)]

"""Grants buyer and seller EXP once a purchase settles."""

import logging

from apps.gamification.events import ExpEvent
from apps.gamification.services import AccrualResult, award_exp
from apps.transactions.models import Transaction

logger = logging.getLogger(__name__)


def grant_purchase_rewards(purchase: Transaction) -> list[AccrualResult]:
    """
    Credit BUY_PROJECT to the buyer and SELL_PROJECT to the seller.

    Called exactly once per transaction, after its ``success`` status is
    committed. Accrual failures are logged and returned, never raised, so
    they cannot undo the settled payment.
    """
    results = [
        award_exp(user_id=purchase.buyer_id, event=ExpEvent.BUY_PROJECT),
        award_exp(user_id=purchase.seller_id, event=ExpEvent.SELL_PROJECT),
    ]

    for result in results:
        if not result.log_failure(logger):
            logger.error(
                "Purchase reward not credited for transaction %s; manual correction needed",
                purchase.id,
            )

    return results

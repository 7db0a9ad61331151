"""Experience accrual service - credits EXP to users for domain events."""

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from django.db import DatabaseError, transaction
from django.db.models import F

from apps.accounts.models import User
from apps.gamification.events import ExpEvent
from .exceptions import AccrualFailure, UserNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccrualResult:
    """Outcome of a single accrual; failures are values, not exceptions."""

    user_id: UUID
    event: ExpEvent
    points: int
    error: Optional[AccrualFailure] = None

    @property
    def ok(self):
        return self.error is None

    def log_failure(self, log=None):
        """Log the failure (if any) and return whether the accrual succeeded."""
        if self.error is not None:
            (log or logger).warning(
                "EXP accrual failed: user=%s event=%s points=%s reason=%s",
                self.user_id, self.event.value, self.points, self.error,
            )
        return self.ok


def award_exp(*, user_id: UUID, event: ExpEvent) -> AccrualResult:
    """
    Credit the points of ``event`` to one user.

    The increment is a single ``UPDATE ... SET total_exp = total_exp + n``
    so concurrent accruals for the same user never lose an update.

    Args:
        user_id: UUID of the user to credit
        event: Event kind being rewarded

    Returns:
        AccrualResult; ``ok`` is False when the user does not exist or the
        update failed. Nothing is raised.
    """
    event = ExpEvent(event)
    points = event.points

    try:
        # Own savepoint, the outer transaction stays usable on failure
        with transaction.atomic():
            updated = User.objects.filter(id=user_id).update(
                total_exp=F('total_exp') + points
            )
    except DatabaseError as e:
        return AccrualResult(
            user_id=user_id,
            event=event,
            points=points,
            error=AccrualFailure(str(e), user_id=user_id, event=event),
        )

    if not updated:
        return AccrualResult(
            user_id=user_id,
            event=event,
            points=points,
            error=UserNotFoundError("User not found", user_id=user_id, event=event),
        )

    logger.debug("Awarded %s EXP to user %s for %s", points, user_id, event.value)
    return AccrualResult(user_id=user_id, event=event, points=points)


def reward_user(*, user_id: UUID, event: ExpEvent) -> AccrualResult:
    """Best-effort accrual: award, log any failure, and hand back the result."""
    result = award_exp(user_id=user_id, event=event)
    result.log_failure(logger)
    return result

"""Domain exceptions for gamification services."""


class GamificationServiceError(Exception):
    """Base exception for gamification service errors."""
    pass


class AccrualFailure(GamificationServiceError):
    """
    EXP could not be credited to a user.

    Never raised to the triggering workflow: it is carried inside an
    ``AccrualResult`` so callers log it and move on.
    """

    def __init__(self, message, *, user_id=None, event=None):
        super().__init__(message)
        self.user_id = user_id
        self.event = event


class UserNotFoundError(AccrualFailure):
    """Target user of an accrual does not exist."""
    pass

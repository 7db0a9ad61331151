"""
Gamification services - Business logic layer.

The leveling math lives in ``apps.gamification.leveling`` (pure functions);
this package holds the operations that write ``User.total_exp`` and the
leaderboard that ranks it.
"""

from .experience_accrual import (
    AccrualResult,
    award_exp,
    reward_user,
)

from .leaderboard import (
    DEFAULT_LEADERBOARD_SIZE,
    MAX_LEADERBOARD_SIZE,
    LeaderboardEntry,
    get_leaderboard,
)

from .exceptions import (
    GamificationServiceError,
    AccrualFailure,
    UserNotFoundError,
)

__all__ = [
    # Accrual
    'AccrualResult',
    'award_exp',
    'reward_user',
    # Leaderboard
    'DEFAULT_LEADERBOARD_SIZE',
    'MAX_LEADERBOARD_SIZE',
    'LeaderboardEntry',
    'get_leaderboard',
    # Exceptions
    'GamificationServiceError',
    'AccrualFailure',
    'UserNotFoundError',
]

"""Leaderboard service - users ranked by total EXP."""

from dataclasses import dataclass

from apps.accounts.models import User, UserStatus
from apps.gamification.leveling import GamificationStats, get_user_stats

DEFAULT_LEADERBOARD_SIZE = 10
MAX_LEADERBOARD_SIZE = 100


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    user: User
    stats: GamificationStats


def get_leaderboard(*, limit: int = DEFAULT_LEADERBOARD_SIZE) -> list[LeaderboardEntry]:
    """
    Top users by total EXP, highest first.

    Blocked and deactivated accounts are left out. Ties go to the user who
    registered first.

    Args:
        limit: Number of entries, clamped to 1..MAX_LEADERBOARD_SIZE
    """
    limit = max(1, min(limit, MAX_LEADERBOARD_SIZE))

    users = (
        User.objects
        .filter(is_active=True)
        .exclude(status=UserStatus.BLOCKED)
        .order_by('-total_exp', 'created_at')[:limit]
    )

    return [
        LeaderboardEntry(rank=rank, user=user, stats=get_user_stats(user.total_exp))
        for rank, user in enumerate(users, start=1)
    ]

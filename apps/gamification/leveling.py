"""
Experience Ledger
=================

Pure functions mapping accumulated experience points (EXP) to a level,
a display title and progress toward the next level. Nothing here touches
the database or settings, so the same numbers are produced everywhere the
ledger is consulted (profile payloads, admin, tests).

Level curve:
    A user starts at level 1 and moves from level ``n`` to ``n + 1`` once
    ``total_exp >= BASE_EXP * n ** 2``. The level is capped at ``MAX_LEVEL``.

    ========  ==================
    Level     Reached at (EXP)
    ========  ==================
    1         0
    2         100
    3         400
    4         900
    100       980100
    ========  ==================

Example::

    >>> level_for_exp(450)
    3
    >>> title_for_level(3)
    'Pemula'
    >>> level_progress(450)
    10
    >>> exp_to_next_level(450)
    450
"""

from dataclasses import dataclass, asdict

from .events import ExpEvent


BASE_EXP = 100
LEVEL_MULTIPLIER = 2
MAX_LEVEL = 100

# Threshold level -> title, highest threshold <= level wins
LEVEL_TITLES = {
    1: 'Pemula',
    5: 'Aktif',
    10: 'Contributor',
    20: 'Expert',
    50: 'Master',
    100: 'Legend',
}
_TITLE_THRESHOLDS = sorted(LEVEL_TITLES, reverse=True)
DEFAULT_TITLE = LEVEL_TITLES[1]


@dataclass(frozen=True)
class GamificationStats:
    """Derived gamification view of a single ``total_exp`` value."""

    total_exp: int
    level: int
    level_title: str
    level_progress: int
    exp_to_next_level: int

    def to_dict(self):
        return asdict(self)


def _check_exp(total_exp):
    if total_exp < 0:
        raise ValueError(f"total_exp must be non-negative, got {total_exp}")


def required_exp_for_level(level: int) -> int:
    """
    Total EXP at which ``level`` is reached.

    Leaving level ``n`` requires ``BASE_EXP * n ** 2`` EXP, so reaching
    ``level`` requires the threshold of the level below it.

    Args:
        level: Target level (>= 1)

    Returns:
        Minimum total EXP for that level
    """
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    return BASE_EXP * (level - 1) ** LEVEL_MULTIPLIER


def level_for_exp(total_exp: int) -> int:
    """
    Calculate the level for an accumulated EXP total.

    Args:
        total_exp: Non-negative EXP total

    Returns:
        Level between 1 and MAX_LEVEL

    Raises:
        ValueError: If total_exp is negative
    """
    _check_exp(total_exp)

    level = 1
    while level < MAX_LEVEL and total_exp >= BASE_EXP * level ** LEVEL_MULTIPLIER:
        level += 1
    return level


def level_progress(total_exp: int) -> int:
    """
    Percentage progress (0-100) from the current level toward the next one.

    Returns 100 at MAX_LEVEL or if the level span is not positive.
    """
    level = level_for_exp(total_exp)
    if level >= MAX_LEVEL:
        return 100

    current_level_exp = required_exp_for_level(level)
    next_level_exp = required_exp_for_level(level + 1)
    exp_needed = next_level_exp - current_level_exp
    if exp_needed <= 0:
        return 100

    progress = (total_exp - current_level_exp) * 100 // exp_needed
    return max(0, min(100, progress))


def exp_to_next_level(total_exp: int) -> int:
    """EXP still missing to reach the next level (0 at MAX_LEVEL)."""
    level = level_for_exp(total_exp)
    if level >= MAX_LEVEL:
        return 0
    return max(0, required_exp_for_level(level + 1) - total_exp)


def title_for_level(level: int) -> str:
    """Display title for a level."""
    for threshold in _TITLE_THRESHOLDS:
        if level >= threshold:
            return LEVEL_TITLES[threshold]
    return DEFAULT_TITLE


def get_user_stats(total_exp: int) -> GamificationStats:
    """Build the full gamification view for a user's EXP total."""
    level = level_for_exp(total_exp)
    return GamificationStats(
        total_exp=total_exp,
        level=level,
        level_title=title_for_level(level),
        level_progress=level_progress(total_exp),
        exp_to_next_level=exp_to_next_level(total_exp),
    )


def get_gamification_config():
    """Public gamification configuration (EXP values, level curve, titles)."""
    return {
        'action_points': {event.name: event.points for event in ExpEvent},
        'level_config': {
            'base_exp': BASE_EXP,
            'multiplier': LEVEL_MULTIPLIER,
            'max_level': MAX_LEVEL,
        },
        'level_titles': dict(LEVEL_TITLES),
    }

"""Tests for the pure experience ledger functions."""

import pytest

from apps.gamification.events import ExpEvent
from apps.gamification.leveling import (
    BASE_EXP,
    MAX_LEVEL,
    LEVEL_TITLES,
    required_exp_for_level,
    level_for_exp,
    level_progress,
    exp_to_next_level,
    title_for_level,
    get_user_stats,
    get_gamification_config,
)


# ============================================================================
# LEVEL CURVE
# ============================================================================

class TestLevelForExp:

    @pytest.mark.parametrize('total_exp, expected', [
        (0, 1),
        (99, 1),
        (100, 2),
        (399, 2),
        (400, 3),
        (450, 3),
        (900, 4),
    ])
    def test_known_points(self, total_exp, expected):
        assert level_for_exp(total_exp) == expected

    def test_monotonic(self):
        previous = level_for_exp(0)
        for total_exp in range(0, 20000, 37):
            level = level_for_exp(total_exp)
            assert level >= previous
            previous = level

    def test_capped_at_max_level(self):
        assert level_for_exp(required_exp_for_level(MAX_LEVEL)) == MAX_LEVEL
        assert level_for_exp(10 ** 9) == MAX_LEVEL

    def test_negative_exp_rejected(self):
        with pytest.raises(ValueError):
            level_for_exp(-1)


class TestRequiredExp:

    def test_level_one_needs_nothing(self):
        assert required_exp_for_level(1) == 0

    def test_agrees_with_level_for_exp(self):
        for level in range(1, MAX_LEVEL + 1):
            threshold = required_exp_for_level(level)
            assert level_for_exp(threshold) == level
            if level > 1:
                assert level_for_exp(threshold - 1) == level - 1

    def test_strictly_increasing(self):
        thresholds = [required_exp_for_level(level) for level in range(1, 30)]
        assert thresholds == sorted(set(thresholds))

    def test_quadratic_curve(self):
        assert required_exp_for_level(4) == BASE_EXP * 9

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            required_exp_for_level(0)


# ============================================================================
# PROGRESS
# ============================================================================

class TestProgress:

    def test_zero_at_level_start(self):
        for level in range(1, 20):
            assert level_progress(required_exp_for_level(level)) == 0

    def test_floor_percentage(self):
        # Level 3 spans 400..900
        assert level_progress(450) == 10
        assert level_progress(899) == 99

    def test_bounds(self):
        for total_exp in range(0, 5000, 13):
            assert 0 <= level_progress(total_exp) <= 100

    def test_full_at_max_level(self):
        assert level_progress(10 ** 9) == 100
        assert exp_to_next_level(10 ** 9) == 0

    def test_exp_to_next_level(self):
        assert exp_to_next_level(0) == 100
        assert exp_to_next_level(450) == 450
        assert exp_to_next_level(400) == 500


# ============================================================================
# TITLES AND STATS
# ============================================================================

class TestTitles:

    @pytest.mark.parametrize('level, title', [
        (1, 'Pemula'),
        (4, 'Pemula'),
        (5, 'Aktif'),
        (9, 'Aktif'),
        (10, 'Contributor'),
        (20, 'Expert'),
        (49, 'Expert'),
        (50, 'Master'),
        (100, 'Legend'),
    ])
    def test_thresholds(self, level, title):
        assert title_for_level(level) == title

    def test_below_lowest_threshold_falls_back(self):
        assert title_for_level(0) == 'Pemula'


class TestStats:

    def test_user_stats(self):
        stats = get_user_stats(450)

        assert stats.to_dict() == {
            'total_exp': 450,
            'level': 3,
            'level_title': 'Pemula',
            'level_progress': 10,
            'exp_to_next_level': 450,
        }

    def test_new_user_stats(self):
        stats = get_user_stats(0)

        assert stats.level == 1
        assert stats.level_progress == 0
        assert stats.exp_to_next_level == 100

    def test_config_lists_every_event(self):
        config = get_gamification_config()

        assert config['action_points'] == {event.name: event.points for event in ExpEvent}
        assert config['action_points']['SELL_PROJECT'] == 150
        assert config['level_config']['base_exp'] == BASE_EXP
        assert config['level_titles'] == LEVEL_TITLES


class TestExpEvent:

    @pytest.mark.parametrize('event, points', [
        (ExpEvent.CREATE_PROJECT, 100),
        (ExpEvent.SELL_PROJECT, 150),
        (ExpEvent.BUY_PROJECT, 50),
        (ExpEvent.RECEIVE_LIKE, 10),
        (ExpEvent.RECEIVE_COMMENT, 5),
        (ExpEvent.PROJECT_VIEWED, 1),
        (ExpEvent.CREATE_ARTICLE, 75),
        (ExpEvent.ARTICLE_VIEWED, 1),
    ])
    def test_points(self, event, points):
        assert event.points == points

    def test_events_with_equal_points_stay_distinct(self):
        assert ExpEvent.PROJECT_VIEWED is not ExpEvent.ARTICLE_VIEWED
        assert len(ExpEvent) == 8

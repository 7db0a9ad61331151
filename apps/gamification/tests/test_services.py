"""
Tests for experience accrual.

Covers:
- Crediting points per event kind
- Failures returned as values (missing user, database error)
- Concurrent accruals for one user
- Leaderboard ranking and limits
"""

import threading
from datetime import timedelta
import uuid
from unittest.mock import patch

import pytest
from django.db import DatabaseError, connection, transaction
from django.test import TransactionTestCase

from apps.accounts.models import User
from apps.gamification.events import ExpEvent
from apps.gamification.services import (
    award_exp,
    reward_user,
    get_leaderboard,
    MAX_LEADERBOARD_SIZE,
    AccrualFailure,
    UserNotFoundError,
)


# ============================================================================
# ACCRUAL TESTS
# ============================================================================

@pytest.mark.django_db
class TestAwardExp:

    def test_award_increments_total(self, newcomer):
        result = award_exp(user_id=newcomer.id, event=ExpEvent.CREATE_PROJECT)

        assert result.ok
        assert result.points == 100
        newcomer.refresh_from_db()
        assert newcomer.total_exp == 100

    def test_award_accepts_event_value(self, newcomer):
        result = award_exp(user_id=newcomer.id, event='sell_project')

        assert result.event is ExpEvent.SELL_PROJECT
        newcomer.refresh_from_db()
        assert newcomer.total_exp == 150

    def test_awards_accumulate(self, gamer):
        award_exp(user_id=gamer.id, event=ExpEvent.RECEIVE_LIKE)
        award_exp(user_id=gamer.id, event=ExpEvent.RECEIVE_COMMENT)
        award_exp(user_id=gamer.id, event=ExpEvent.PROJECT_VIEWED)

        gamer.refresh_from_db()
        assert gamer.total_exp == 450 + 10 + 5 + 1

    def test_only_target_user_changes(self, gamer, newcomer):
        award_exp(user_id=newcomer.id, event=ExpEvent.BUY_PROJECT)

        gamer.refresh_from_db()
        newcomer.refresh_from_db()
        assert gamer.total_exp == 450
        assert newcomer.total_exp == 50

    def test_missing_user_is_a_result_not_an_exception(self):
        missing_id = uuid.uuid4()

        result = award_exp(user_id=missing_id, event=ExpEvent.CREATE_ARTICLE)

        assert not result.ok
        assert isinstance(result.error, UserNotFoundError)
        assert result.error.user_id == missing_id

    def test_unknown_event_rejected(self, newcomer):
        with pytest.raises(ValueError):
            award_exp(user_id=newcomer.id, event='win_lottery')

    def test_database_error_captured(self, newcomer):
        with patch('apps.gamification.services.experience_accrual.User.objects.filter') as mock_filter:
            mock_filter.return_value.update.side_effect = DatabaseError('disk full')
            result = award_exp(user_id=newcomer.id, event=ExpEvent.CREATE_PROJECT)

        assert not result.ok
        assert isinstance(result.error, AccrualFailure)
        assert 'disk full' in str(result.error)

    def test_failure_leaves_outer_transaction_usable(self, newcomer):
        with transaction.atomic():
            award_exp(user_id=uuid.uuid4(), event=ExpEvent.RECEIVE_LIKE)
            award_exp(user_id=newcomer.id, event=ExpEvent.RECEIVE_LIKE)

        newcomer.refresh_from_db()
        assert newcomer.total_exp == 10


@pytest.mark.django_db
class TestRewardUser:

    def test_reward_user_success(self, newcomer):
        result = reward_user(user_id=newcomer.id, event=ExpEvent.CREATE_ARTICLE)

        assert result.ok
        newcomer.refresh_from_db()
        assert newcomer.total_exp == 75

    def test_reward_user_logs_failure(self):
        with patch('apps.gamification.services.experience_accrual.logger') as mock_logger:
            result = reward_user(user_id=uuid.uuid4(), event=ExpEvent.RECEIVE_LIKE)

        assert not result.ok
        mock_logger.warning.assert_called_once()


# ============================================================================
# CONCURRENCY TESTS
# ============================================================================

class TestAccrualConcurrency(TransactionTestCase):
    """Concurrent accruals with real database transactions."""

    def setUp(self):
        self.user = User.objects.create_user(
            email='concurrent@example.com',
            password='TestPass123!',
        )

    def test_concurrent_accruals_no_lost_updates(self):
        """Ten concurrent likes credit exactly ten times the points."""
        results = []

        def award_in_thread():
            try:
                results.append(award_exp(user_id=self.user.id, event=ExpEvent.RECEIVE_LIKE))
            finally:
                connection.close()

        threads = [
            threading.Thread(target=award_in_thread)
            for _ in range(10)
        ]

        for thread in threads:
            thread.start()

        for thread in threads:
            thread.join()

        assert len(results) == 10
        assert all(result.ok for result in results)

        self.user.refresh_from_db()
        assert self.user.total_exp == 10 * ExpEvent.RECEIVE_LIKE.points


# ============================================================================
# LEADERBOARD TESTS
# ============================================================================

@pytest.mark.django_db
class TestGetLeaderboard:

    def test_ties_go_to_earlier_registration(self, gamer):
        rival = User.objects.create_user(email='rival@example.com', password='TestPass123!', total_exp=450)
        User.objects.filter(id=rival.id).update(created_at=gamer.created_at - timedelta(days=1))

        entries = get_leaderboard()

        assert [entry.user.id for entry in entries] == [rival.id, gamer.id]
        assert [entry.rank for entry in entries] == [1, 2]
        assert entries[0].stats.level == 3

    def test_limit_is_clamped(self, gamer, newcomer):
        assert len(get_leaderboard(limit=0)) == 1
        assert len(get_leaderboard(limit=MAX_LEADERBOARD_SIZE + 50)) == 2

    def test_empty(self, db):
        assert get_leaderboard() == []

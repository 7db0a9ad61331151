"""
Tests for projects services.

Covers:
- Project CRUD and the CREATE_PROJECT reward
- Likes, views and comments and the EXP credited to owners
- Concurrent likes
"""

import threading
import uuid
from unittest.mock import patch

import pytest
from django.db import connection
from django.test import TransactionTestCase

from apps.accounts.models import User
from apps.gamification.events import ExpEvent
from apps.gamification.services import AccrualResult, AccrualFailure
from apps.projects.models import Project, ProjectLike, Comment, ProjectType, PublishStatus
from apps.projects.services import (
    create_project,
    get_project_by_id,
    update_project,
    delete_project,
    search_projects,
    toggle_like,
    record_project_view,
    add_comment,
    delete_comment,
    get_project_comments,
)
from apps.projects.services.exceptions import (
    ProjectNotFoundError,
    InvalidProjectError,
    UnauthorizedProjectActionError,
    CommentNotFoundError,
)


# ============================================================================
# PROJECT MANAGEMENT TESTS
# ============================================================================

@pytest.mark.django_db
class TestProjectManagement:

    def test_create_project_awards_creator(self, project_owner):
        project = create_project(
            user=project_owner,
            title='Library Bot',
            tech_stack=['Python'],
        )

        assert project.type == ProjectType.FREE
        assert project.tech_stack == ['Python']
        project_owner.refresh_from_db()
        assert project_owner.total_exp == ExpEvent.CREATE_PROJECT.points

    def test_create_paid_project_requires_price(self, project_owner):
        with pytest.raises(InvalidProjectError):
            create_project(user=project_owner, title='Paid', type=ProjectType.PAID, price=0)

        assert not Project.objects.exists()
        project_owner.refresh_from_db()
        assert project_owner.total_exp == 0

    def test_create_free_project_rejects_price(self, project_owner):
        with pytest.raises(InvalidProjectError):
            create_project(user=project_owner, title='Free', price=1000)

    def test_create_project_survives_accrual_failure(self, project_owner):
        failed = AccrualResult(
            user_id=project_owner.id,
            event=ExpEvent.CREATE_PROJECT,
            points=100,
            error=AccrualFailure('boom'),
        )
        with patch('apps.projects.services.project_management.reward_user', return_value=failed):
            project = create_project(user=project_owner, title='Still Created')

        assert Project.objects.filter(id=project.id).exists()

    def test_get_project_not_found(self):
        with pytest.raises(ProjectNotFoundError):
            get_project_by_id(project_id=uuid.uuid4())

    def test_update_project(self, free_project, project_owner):
        project = update_project(
            project_id=free_project.id,
            user=project_owner,
            title='Campus Map v2',
            type=ProjectType.PAID,
            price=25000,
        )

        assert project.title == 'Campus Map v2'
        assert project.is_paid
        assert project.price == 25000

    def test_update_project_not_owner(self, free_project, project_visitor):
        with pytest.raises(UnauthorizedProjectActionError):
            update_project(project_id=free_project.id, user=project_visitor, title='Hijacked')

    def test_update_project_inconsistent_pricing(self, free_project, project_owner):
        with pytest.raises(InvalidProjectError):
            update_project(project_id=free_project.id, user=project_owner, type=ProjectType.PAID)

    def test_delete_project(self, free_project, project_owner):
        delete_project(project_id=free_project.id, user=project_owner)

        assert not Project.objects.filter(id=free_project.id).exists()

    def test_delete_project_not_owner(self, free_project, project_visitor):
        with pytest.raises(UnauthorizedProjectActionError):
            delete_project(project_id=free_project.id, user=project_visitor)

    def test_search_hides_drafts_from_others(self, free_project, draft_project, project_visitor, project_owner):
        visible_to_visitor = set(search_projects(viewer=project_visitor).values_list('id', flat=True))
        visible_to_owner = set(search_projects(viewer=project_owner).values_list('id', flat=True))

        assert draft_project.id not in visible_to_visitor
        assert draft_project.id in visible_to_owner
        assert free_project.id in visible_to_visitor

    def test_search_filters(self, free_project, paid_project):
        assert list(search_projects(project_type='paid')) == [paid_project]
        assert list(search_projects(search='campus')) == [free_project]
        assert list(search_projects(tech='react')) == [paid_project]


# ============================================================================
# ENGAGEMENT TESTS
# ============================================================================

@pytest.mark.django_db
class TestLikes:

    def test_like_credits_owner(self, free_project, project_owner, project_visitor):
        liked, likes = toggle_like(project_id=free_project.id, user=project_visitor)

        assert liked is True
        assert likes == 1
        project_owner.refresh_from_db()
        assert project_owner.total_exp == ExpEvent.RECEIVE_LIKE.points

    def test_unlike_keeps_exp(self, free_project, project_owner, project_visitor):
        toggle_like(project_id=free_project.id, user=project_visitor)
        liked, likes = toggle_like(project_id=free_project.id, user=project_visitor)

        assert liked is False
        assert likes == 0
        assert not ProjectLike.objects.filter(project=free_project).exists()
        project_owner.refresh_from_db()
        assert project_owner.total_exp == ExpEvent.RECEIVE_LIKE.points

    def test_self_like_earns_nothing(self, free_project, project_owner):
        liked, likes = toggle_like(project_id=free_project.id, user=project_owner)

        assert liked is True
        assert likes == 1
        project_owner.refresh_from_db()
        assert project_owner.total_exp == 0

    def test_like_missing_project(self, project_visitor):
        with pytest.raises(ProjectNotFoundError):
            toggle_like(project_id=uuid.uuid4(), user=project_visitor)


@pytest.mark.django_db
class TestViews:

    def test_view_increments_and_credits_owner(self, free_project, project_owner):
        record_project_view(project_id=free_project.id)
        views = record_project_view(project_id=free_project.id)

        assert views == 2
        project_owner.refresh_from_db()
        assert project_owner.total_exp == 2 * ExpEvent.PROJECT_VIEWED.points

    def test_view_missing_project(self):
        with pytest.raises(ProjectNotFoundError):
            record_project_view(project_id=uuid.uuid4())

    def test_view_counted_when_accrual_fails(self, free_project):
        with patch('apps.projects.services.engagement.reward_user') as mock_reward:
            mock_reward.return_value = AccrualResult(
                user_id=free_project.user_id,
                event=ExpEvent.PROJECT_VIEWED,
                points=1,
                error=AccrualFailure('User not found'),
            )
            views = record_project_view(project_id=free_project.id)

        assert views == 1


@pytest.mark.django_db
class TestComments:

    def test_comment_credits_owner(self, free_project, project_owner, project_visitor):
        comment = add_comment(project_id=free_project.id, user=project_visitor, content='Nice work!')

        assert comment.project == free_project
        project_owner.refresh_from_db()
        assert project_owner.total_exp == ExpEvent.RECEIVE_COMMENT.points

    def test_own_comment_earns_nothing(self, free_project, project_owner):
        add_comment(project_id=free_project.id, user=project_owner, content='Thanks all')

        project_owner.refresh_from_db()
        assert project_owner.total_exp == 0

    def test_comment_missing_project(self, project_visitor):
        with pytest.raises(ProjectNotFoundError):
            add_comment(project_id=uuid.uuid4(), user=project_visitor, content='?')

    def test_get_project_comments(self, free_project, project_visitor):
        add_comment(project_id=free_project.id, user=project_visitor, content='First')
        add_comment(project_id=free_project.id, user=project_visitor, content='Second')

        comments = get_project_comments(project_id=free_project.id)

        assert comments.count() == 2

    def test_delete_comment_by_author(self, free_project, project_visitor):
        comment = add_comment(project_id=free_project.id, user=project_visitor, content='Oops')

        delete_comment(comment_id=comment.id, user=project_visitor)

        assert not Comment.objects.filter(id=comment.id).exists()

    def test_delete_comment_by_other_user(self, free_project, project_owner, project_visitor):
        comment = add_comment(project_id=free_project.id, user=project_visitor, content='Mine')

        with pytest.raises(UnauthorizedProjectActionError):
            delete_comment(comment_id=comment.id, user=project_owner)

    def test_delete_missing_comment(self, project_visitor):
        with pytest.raises(CommentNotFoundError):
            delete_comment(comment_id=uuid.uuid4(), user=project_visitor)


# ============================================================================
# CONCURRENCY TESTS
# ============================================================================

class TestLikeConcurrency(TransactionTestCase):
    """Concurrent likes from different users with real transactions."""

    def setUp(self):
        self.owner = User.objects.create_user(email='owner@example.com', password='TestPass123!')
        self.fans = [
            User.objects.create_user(email=f'fan{i}@example.com', password='TestPass123!')
            for i in range(5)
        ]
        self.project = Project.objects.create(
            user=self.owner,
            title='Popular Project',
            status=PublishStatus.PUBLISHED,
        )

    def test_concurrent_likes_counted_once_each(self):
        results = []

        def like_in_thread(fan):
            try:
                results.append(toggle_like(project_id=self.project.id, user=fan))
            finally:
                connection.close()

        threads = [
            threading.Thread(target=like_in_thread, args=(fan,))
            for fan in self.fans
        ]

        for thread in threads:
            thread.start()

        for thread in threads:
            thread.join()

        assert len(results) == 5
        self.project.refresh_from_db()
        self.owner.refresh_from_db()
        assert self.project.likes == 5
        assert self.owner.total_exp == 5 * ExpEvent.RECEIVE_LIKE.points

"""
Engagement service - likes, views and comments on projects.

Each engagement credits the project owner with EXP through the
gamification accrual service. Accrual is best-effort: a failed credit is
logged and the engagement itself still succeeds.
"""

import logging
from uuid import UUID

from django.db import IntegrityError, transaction
from django.db.models import F, QuerySet

from apps.accounts.models import User
from apps.gamification.events import ExpEvent
from apps.gamification.services import reward_user
from apps.projects.models import Comment, Project, ProjectLike
from .exceptions import (
    ProjectNotFoundError,
    CommentNotFoundError,
    UnauthorizedProjectActionError,
)

logger = logging.getLogger(__name__)


def _get_project(project_id, *, for_update=False):
    queryset = Project.objects.all()
    if for_update:
        queryset = queryset.select_for_update()
    try:
        return queryset.get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found")


# =============================================================================
# LIKES
# =============================================================================

@transaction.atomic
def toggle_like(*, project_id: UUID, user: User) -> tuple[bool, int]:
    """
    Like a project, or remove the like if the user already liked it.

    The owner earns RECEIVE_LIKE EXP for each new like from someone else.
    Unliking does not take EXP back.

    Args:
        project_id: UUID of project
        user: User toggling the like

    Returns:
        Tuple of (liked, likes) with the new like state and counter

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    project = _get_project(project_id, for_update=True)

    deleted, _ = ProjectLike.objects.filter(user=user, project=project).delete()
    if deleted:
        Project.objects.filter(id=project.id, likes__gt=0).update(likes=F('likes') - 1)
        project.refresh_from_db(fields=['likes'])
        return False, project.likes

    try:
        with transaction.atomic():
            ProjectLike.objects.create(user=user, project=project)
    except IntegrityError:
        # Concurrent like from the same user already landed
        project.refresh_from_db(fields=['likes'])
        return True, project.likes

    Project.objects.filter(id=project.id).update(likes=F('likes') + 1)
    project.refresh_from_db(fields=['likes'])

    if project.user_id != user.id:
        reward_user(user_id=project.user_id, event=ExpEvent.RECEIVE_LIKE)

    return True, project.likes


# =============================================================================
# VIEWS
# =============================================================================

@transaction.atomic
def record_project_view(*, project_id: UUID) -> int:
    """
    Count one view and credit the owner with PROJECT_VIEWED EXP.

    Returns:
        Updated view count

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    updated = Project.objects.filter(id=project_id).update(views=F('views') + 1)
    if not updated:
        raise ProjectNotFoundError(f"Project {project_id} not found")

    project = Project.objects.only('user_id', 'views').get(id=project_id)
    reward_user(user_id=project.user_id, event=ExpEvent.PROJECT_VIEWED)
    return project.views


# =============================================================================
# COMMENTS
# =============================================================================

@transaction.atomic
def add_comment(*, project_id: UUID, user: User, content: str) -> Comment:
    """
    Comment on a project.

    The owner earns RECEIVE_COMMENT EXP unless commenting on their own project.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    project = _get_project(project_id)

    comment = Comment.objects.create(project=project, user=user, content=content)

    if project.user_id != user.id:
        reward_user(user_id=project.user_id, event=ExpEvent.RECEIVE_COMMENT)

    return comment


@transaction.atomic
def delete_comment(*, comment_id: UUID, user: User) -> None:
    """
    Delete a comment. Allowed for the comment author and staff.

    Raises:
        CommentNotFoundError: If comment doesn't exist
        UnauthorizedProjectActionError: If user may not delete it
    """
    try:
        comment = Comment.objects.select_for_update().get(id=comment_id)
    except Comment.DoesNotExist:
        raise CommentNotFoundError(f"Comment {comment_id} not found")

    if comment.user_id != user.id and not user.is_staff:
        raise UnauthorizedProjectActionError("You can only delete your own comments")

    comment.delete()


def get_project_comments(*, project_id: UUID) -> QuerySet[Comment]:
    """
    Comments of a project, newest first.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    if not Project.objects.filter(id=project_id).exists():
        raise ProjectNotFoundError(f"Project {project_id} not found")

    return Comment.objects.filter(project_id=project_id).select_related('user').order_by('-created_at')

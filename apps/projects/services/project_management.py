"""Project management service - CRUD operations for projects."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import ProtectedError, Q, QuerySet

from apps.accounts.models import User
from apps.gamification.events import ExpEvent
from apps.gamification.services import reward_user
from apps.projects.models import Category, Project, ProjectType, PublishStatus
from .exceptions import (
    ProjectNotFoundError,
    InvalidProjectError,
    UnauthorizedProjectActionError,
)

logger = logging.getLogger(__name__)

# Fields an owner may change after creation
EDITABLE_FIELDS = (
    'title',
    'description',
    'thumbnail_url',
    'tech_stack',
    'github_url',
    'demo_url',
    'type',
    'price',
    'status',
)


def _resolve_category(category_id: Optional[UUID]) -> Optional[Category]:
    if category_id is None:
        return None
    try:
        return Category.objects.get(id=category_id)
    except Category.DoesNotExist:
        raise InvalidProjectError(f"Category {category_id} not found")


def _validate_pricing(project_type: str, price: int) -> None:
    if project_type == ProjectType.PAID and price <= 0:
        raise InvalidProjectError("Paid projects must have a price greater than zero")
    if project_type == ProjectType.FREE and price:
        raise InvalidProjectError("Free projects cannot have a price")


@transaction.atomic
def create_project(
    *,
    user: User,
    title: str,
    description: str = '',
    thumbnail_url: str = '',
    tech_stack: Optional[list[str]] = None,
    github_url: str = '',
    demo_url: str = '',
    type: str = ProjectType.FREE,
    price: int = 0,
    status: str = PublishStatus.PUBLISHED,
    category_id: Optional[UUID] = None,
) -> Project:
    """
    Publish a new project and credit the creator with CREATE_PROJECT EXP.

    Args:
        user: Owner (and seller, for paid projects)
        title: Project title
        type: 'free' or 'paid'
        price: Price in minor units, required for paid projects
        category_id: Optional category UUID

    Returns:
        Created Project instance

    Raises:
        InvalidProjectError: If pricing does not match the project type or
            the category does not exist
    """
    _validate_pricing(type, price)
    category = _resolve_category(category_id)

    project = Project.objects.create(
        user=user,
        category=category,
        title=title,
        description=description,
        thumbnail_url=thumbnail_url,
        tech_stack=tech_stack or [],
        github_url=github_url,
        demo_url=demo_url,
        type=type,
        price=price,
        status=status,
    )
    logger.info("Project %s created by user %s", project.id, user.id)

    reward_user(user_id=user.id, event=ExpEvent.CREATE_PROJECT)
    return project


def get_project_by_id(*, project_id: UUID) -> Project:
    """
    Retrieve a project by ID.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    try:
        return Project.objects.select_related('user').get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found")


@transaction.atomic
def update_project(*, project_id: UUID, user: User, **fields) -> Project:
    """
    Update a project. Only the owner may update it.

    Unknown fields are ignored.

    Raises:
        ProjectNotFoundError: If project doesn't exist
        UnauthorizedProjectActionError: If user is not the owner
        InvalidProjectError: If the resulting pricing is inconsistent
    """
    try:
        project = Project.objects.select_for_update().get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found")

    if project.user_id != user.id:
        raise UnauthorizedProjectActionError("You can only update your own projects")

    changed = []
    for name in EDITABLE_FIELDS:
        if name in fields and fields[name] is not None:
            setattr(project, name, fields[name])
            changed.append(name)

    if fields.get('category_id') is not None:
        project.category = _resolve_category(fields['category_id'])
        changed.append('category')

    _validate_pricing(project.type, project.price)

    if changed:
        project.save(update_fields=changed + ['updated_at'])

    return project


@transaction.atomic
def delete_project(*, project_id: UUID, user: User) -> None:
    """
    Delete a project. Only the owner may delete it.

    Raises:
        ProjectNotFoundError: If project doesn't exist
        UnauthorizedProjectActionError: If user is not the owner
        InvalidProjectError: If the project has transactions
    """
    try:
        project = Project.objects.select_for_update().get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found")

    if project.user_id != user.id:
        raise UnauthorizedProjectActionError("You can only delete your own projects")

    try:
        project.delete()
    except ProtectedError:
        raise InvalidProjectError("Project has transactions and cannot be deleted")
    logger.info("Project %s deleted by user %s", project_id, user.id)


def search_projects(
    *,
    search: Optional[str] = None,
    project_type: Optional[str] = None,
    user_id: Optional[UUID] = None,
    tech: Optional[str] = None,
    category_id: Optional[UUID] = None,
    viewer: Optional[User] = None,
) -> QuerySet[Project]:
    """
    Published projects filtered by text, type, owner or tech stack entry.

    The owner (``viewer``) also sees their own drafts.
    """
    visible = Q(status=PublishStatus.PUBLISHED)
    if viewer is not None and viewer.is_authenticated:
        visible |= Q(user=viewer) & ~Q(status=PublishStatus.BLOCKED)

    queryset = Project.objects.select_related('user', 'category').filter(visible)

    if search:
        queryset = queryset.filter(
            Q(title__icontains=search) |
            Q(description__icontains=search)
        )

    if project_type:
        queryset = queryset.filter(type=project_type)

    if user_id:
        queryset = queryset.filter(user_id=user_id)

    if category_id:
        queryset = queryset.filter(category_id=category_id)

    if tech:
        # JSONField __contains is unsupported on SQLite
        ids = [
            project_id
            for project_id, stack in queryset.values_list('id', 'tech_stack')
            if any(tech.lower() == str(item).lower() for item in stack or [])
        ]
        queryset = queryset.filter(id__in=ids)

    return queryset.order_by('-created_at')

"""Category management service - staff-managed project categories."""

import logging
from typing import Optional
from uuid import UUID

from django.db import IntegrityError, transaction
from django.db.models import Count, Q, QuerySet
from django.utils.text import slugify

from apps.projects.models import Category, PublishStatus
from .exceptions import CategoryNotFoundError, InvalidCategoryError

logger = logging.getLogger(__name__)


def _with_project_count(queryset: QuerySet[Category]) -> QuerySet[Category]:
    return queryset.annotate(
        project_count=Count('projects', filter=Q(projects__status=PublishStatus.PUBLISHED))
    )


def _slug_for(name: str) -> str:
    slug = slugify(name)
    if not slug:
        raise InvalidCategoryError("Category name must contain letters or digits")
    return slug


def list_categories() -> QuerySet[Category]:
    """All categories by name, each with its published project count."""
    return _with_project_count(Category.objects.all()).order_by('name')


def get_category(*, category_id: UUID) -> Category:
    """
    Raises:
        CategoryNotFoundError: If category doesn't exist
    """
    try:
        return _with_project_count(Category.objects.all()).get(id=category_id)
    except Category.DoesNotExist:
        raise CategoryNotFoundError(f"Category {category_id} not found")


@transaction.atomic
def create_category(*, name: str, description: str = '', color: str = '') -> Category:
    """
    Create a category; the slug is derived from the name.

    Raises:
        InvalidCategoryError: If a category with the same slug exists
    """
    slug = _slug_for(name)
    if Category.objects.filter(slug=slug).exists():
        raise InvalidCategoryError("A category with a similar name already exists")

    try:
        with transaction.atomic():
            category = Category.objects.create(
                name=name,
                slug=slug,
                description=description,
                color=color,
            )
    except IntegrityError:
        raise InvalidCategoryError("A category with a similar name already exists")

    logger.info("Category %s (%s) created", category.id, slug)
    return get_category(category_id=category.id)


@transaction.atomic
def update_category(
    *,
    category_id: UUID,
    name: Optional[str] = None,
    description: Optional[str] = None,
    color: Optional[str] = None,
) -> Category:
    """
    Update a category. Renaming also moves the slug.

    Raises:
        CategoryNotFoundError: If category doesn't exist
        InvalidCategoryError: If the new name clashes with another category
    """
    try:
        category = Category.objects.select_for_update().get(id=category_id)
    except Category.DoesNotExist:
        raise CategoryNotFoundError(f"Category {category_id} not found")

    if name is not None:
        slug = _slug_for(name)
        if Category.objects.filter(slug=slug).exclude(id=category_id).exists():
            raise InvalidCategoryError("A category with a similar name already exists")
        category.name = name
        category.slug = slug
    if description is not None:
        category.description = description
    if color is not None:
        category.color = color

    category.save()
    return get_category(category_id=category.id)


@transaction.atomic
def delete_category(*, category_id: UUID) -> None:
    """
    Delete a category that no project uses.

    Raises:
        CategoryNotFoundError: If category doesn't exist
        InvalidCategoryError: If any project (in any status) uses it
    """
    try:
        category = Category.objects.select_for_update().get(id=category_id)
    except Category.DoesNotExist:
        raise CategoryNotFoundError(f"Category {category_id} not found")

    if category.projects.exists():
        raise InvalidCategoryError("Cannot delete a category that has projects")

    category.delete()
    logger.info("Category %s deleted", category_id)

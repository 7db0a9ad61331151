"""
Projects services - Business logic layer.

This package contains all business operations for the projects app:
- Project CRUD operations
- Staff-managed categories
- Engagement (likes, views, comments) and the EXP they earn
"""

from .project_management import (
    create_project,
    get_project_by_id,
    update_project,
    delete_project,
    search_projects,
)

from .category_management import (
    list_categories,
    get_category,
    create_category,
    update_category,
    delete_category,
)

from .engagement import (
    toggle_like,
    record_project_view,
    add_comment,
    delete_comment,
    get_project_comments,
)

from .exceptions import (
    ProjectsServiceError,
    ProjectNotFoundError,
    InvalidProjectError,
    UnauthorizedProjectActionError,
    CommentNotFoundError,
    CategoryNotFoundError,
    InvalidCategoryError,
)

__all__ = [
    # Project management
    'create_project',
    'get_project_by_id',
    'update_project',
    'delete_project',
    'search_projects',
    # Categories
    'list_categories',
    'get_category',
    'create_category',
    'update_category',
    'delete_category',
    # Engagement
    'toggle_like',
    'record_project_view',
    'add_comment',
    'delete_comment',
    'get_project_comments',
    # Exceptions
    'ProjectsServiceError',
    'ProjectNotFoundError',
    'InvalidProjectError',
    'UnauthorizedProjectActionError',
    'CommentNotFoundError',
    'CategoryNotFoundError',
    'InvalidCategoryError',
]

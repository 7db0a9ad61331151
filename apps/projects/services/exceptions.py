"""Domain exceptions for projects app."""


class ProjectsServiceError(Exception):
    """Base exception for all projects service errors."""
    pass


class ProjectNotFoundError(ProjectsServiceError):
    """Project does not exist or is not visible."""
    pass


class InvalidProjectError(ProjectsServiceError):
    """Project data is inconsistent (e.g. paid project without a price)."""
    pass


class UnauthorizedProjectActionError(ProjectsServiceError):
    """User is not the owner of the project or comment."""
    pass


class CommentNotFoundError(ProjectsServiceError):
    """Comment does not exist."""
    pass


class CategoryNotFoundError(ProjectsServiceError):
    """Category does not exist."""
    pass


class InvalidCategoryError(ProjectsServiceError):
    """Category name clashes with another or the category is still in use."""
    pass

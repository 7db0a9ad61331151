"""Domain exceptions for articles app."""


class ArticlesServiceError(Exception):
    """Base exception for all articles service errors."""
    pass


class ArticleNotFoundError(ArticlesServiceError):
    """Article does not exist or is not visible."""
    pass


class UnauthorizedArticleActionError(ArticlesServiceError):
    """User is not the author of the article."""
    pass

"""Articles services - article CRUD and view tracking."""

from .article_management import (
    create_article,
    update_article,
    delete_article,
    record_article_view,
    search_articles,
    estimate_reading_time,
)

from .exceptions import (
    ArticlesServiceError,
    ArticleNotFoundError,
    UnauthorizedArticleActionError,
)

__all__ = [
    'create_article',
    'update_article',
    'delete_article',
    'record_article_view',
    'search_articles',
    'estimate_reading_time',
    'ArticlesServiceError',
    'ArticleNotFoundError',
    'UnauthorizedArticleActionError',
]

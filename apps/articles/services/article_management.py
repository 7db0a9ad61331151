"""Article management service."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import F, Q, QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.articles.models import Article
from apps.gamification.events import ExpEvent
from apps.gamification.services import reward_user
from apps.projects.models import PublishStatus
from .exceptions import ArticleNotFoundError, UnauthorizedArticleActionError

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200
CHARS_PER_WORD = 5

EDITABLE_FIELDS = ('title', 'excerpt', 'content', 'thumbnail_url', 'category', 'status')


def estimate_reading_time(content: str) -> int:
    """Reading time in whole minutes, at least 1."""
    return max(1, len(content) // CHARS_PER_WORD // WORDS_PER_MINUTE)


@transaction.atomic
def create_article(
    *,
    user: User,
    title: str,
    content: str = '',
    excerpt: str = '',
    thumbnail_url: str = '',
    category: str = '',
    status: str = PublishStatus.PUBLISHED,
) -> Article:
    """
    Create an article and credit the author with CREATE_ARTICLE EXP.

    Returns:
        Created Article instance
    """
    article = Article.objects.create(
        user=user,
        title=title,
        content=content,
        excerpt=excerpt,
        thumbnail_url=thumbnail_url,
        category=category,
        reading_time=estimate_reading_time(content),
        status=status,
        published_at=timezone.now() if status == PublishStatus.PUBLISHED else None,
    )
    logger.info("Article %s created by user %s", article.id, user.id)

    reward_user(user_id=user.id, event=ExpEvent.CREATE_ARTICLE)
    return article


@transaction.atomic
def update_article(*, article_id: UUID, user: User, **fields) -> Article:
    """
    Update an article (author only).

    Raises:
        ArticleNotFoundError: If article doesn't exist
        UnauthorizedArticleActionError: If user is not the author
    """
    try:
        article = Article.objects.select_for_update().get(id=article_id)
    except Article.DoesNotExist:
        raise ArticleNotFoundError(f"Article {article_id} not found")

    if article.user_id != user.id:
        raise UnauthorizedArticleActionError("You can only update your own articles")

    changed = [name for name in EDITABLE_FIELDS if fields.get(name) is not None]
    for name in changed:
        setattr(article, name, fields[name])

    if 'content' in changed:
        article.reading_time = estimate_reading_time(article.content)
        changed.append('reading_time')

    if article.status == PublishStatus.PUBLISHED and article.published_at is None:
        article.published_at = timezone.now()
        changed.append('published_at')

    if changed:
        article.save(update_fields=changed + ['updated_at'])

    return article


@transaction.atomic
def delete_article(*, article_id: UUID, user: User) -> None:
    """
    Delete an article (author or staff).

    Raises:
        ArticleNotFoundError: If article doesn't exist
        UnauthorizedArticleActionError: If user may not delete it
    """
    try:
        article = Article.objects.select_for_update().get(id=article_id)
    except Article.DoesNotExist:
        raise ArticleNotFoundError(f"Article {article_id} not found")

    if article.user_id != user.id and not user.is_staff:
        raise UnauthorizedArticleActionError("You can only delete your own articles")

    article.delete()


@transaction.atomic
def record_article_view(*, article_id: UUID) -> int:
    """
    Count one view and credit the author with ARTICLE_VIEWED EXP.

    Returns:
        Updated view count

    Raises:
        ArticleNotFoundError: If article doesn't exist
    """
    updated = Article.objects.filter(id=article_id).update(views=F('views') + 1)
    if not updated:
        raise ArticleNotFoundError(f"Article {article_id} not found")

    article = Article.objects.only('user_id', 'views').get(id=article_id)
    reward_user(user_id=article.user_id, event=ExpEvent.ARTICLE_VIEWED)
    return article.views


def search_articles(
    *,
    search: Optional[str] = None,
    category: Optional[str] = None,
    user_id: Optional[UUID] = None,
    viewer: Optional[User] = None,
) -> QuerySet[Article]:
    """Published articles (plus the viewer's own drafts), newest first."""
    visible = Q(status=PublishStatus.PUBLISHED)
    if viewer is not None and viewer.is_authenticated:
        visible |= Q(user=viewer) & ~Q(status=PublishStatus.BLOCKED)

    queryset = Article.objects.select_related('user').filter(visible)

    if search:
        queryset = queryset.filter(
            Q(title__icontains=search) |
            Q(excerpt__icontains=search) |
            Q(content__icontains=search)
        )

    if category:
        queryset = queryset.filter(category__iexact=category)

    if user_id:
        queryset = queryset.filter(user_id=user_id)

    return queryset.order_by('-created_at')

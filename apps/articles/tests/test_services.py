import uuid

import pytest

from apps.articles.models import Article
from apps.articles.services import (
    create_article,
    update_article,
    delete_article,
    record_article_view,
    search_articles,
    estimate_reading_time,
    ArticleNotFoundError,
    UnauthorizedArticleActionError,
)
from apps.gamification.events import ExpEvent
from apps.projects.models import PublishStatus


class TestReadingTime:

    def test_minimum_one_minute(self):
        assert estimate_reading_time('') == 1
        assert estimate_reading_time('short text') == 1

    def test_long_content(self):
        # 5 chars per word, 200 words per minute
        assert estimate_reading_time('x' * 5000) == 5


@pytest.mark.django_db
class TestArticleManagement:

    def test_create_article_awards_author(self, writer):
        article = create_article(user=writer, title='Hello', content='x' * 2000)

        assert article.reading_time == 2
        assert article.published_at is not None
        writer.refresh_from_db()
        assert writer.total_exp == ExpEvent.CREATE_ARTICLE.points

    def test_create_draft_not_published(self, writer):
        article = create_article(user=writer, title='Later', status=PublishStatus.DRAFT)

        assert article.published_at is None

    def test_publishing_draft_sets_published_at(self, draft_article, writer):
        article = update_article(
            article_id=draft_article.id,
            user=writer,
            status=PublishStatus.PUBLISHED,
        )

        assert article.published_at is not None

    def test_update_recomputes_reading_time(self, article, writer):
        article = update_article(article_id=article.id, user=writer, content='x' * 10000)

        assert article.reading_time == 10

    def test_update_not_author(self, article, reader):
        with pytest.raises(UnauthorizedArticleActionError):
            update_article(article_id=article.id, user=reader, title='Mine now')

    def test_delete_not_author(self, article, reader):
        with pytest.raises(UnauthorizedArticleActionError):
            delete_article(article_id=article.id, user=reader)

    def test_delete_by_author(self, article, writer):
        delete_article(article_id=article.id, user=writer)

        assert not Article.objects.filter(id=article.id).exists()

    def test_view_credits_author(self, article, writer):
        views = record_article_view(article_id=article.id)

        assert views == 1
        writer.refresh_from_db()
        assert writer.total_exp == ExpEvent.ARTICLE_VIEWED.points

    def test_view_missing_article(self):
        with pytest.raises(ArticleNotFoundError):
            record_article_view(article_id=uuid.uuid4())

    def test_search(self, article, draft_article, reader):
        assert list(search_articles(viewer=reader)) == [article]
        assert list(search_articles(category='TIPS')) == [article]
        assert list(search_articles(search='nothing-matches')) == []

"""Closed set of domain events that earn experience points."""

from django.db import models


class ExpEvent(models.TextChoices):
    CREATE_PROJECT = 'create_project', 'Create project'
    SELL_PROJECT = 'sell_project', 'Sell project'
    BUY_PROJECT = 'buy_project', 'Buy project'
    RECEIVE_LIKE = 'receive_like', 'Receive like'
    RECEIVE_COMMENT = 'receive_comment', 'Receive comment'
    PROJECT_VIEWED = 'project_viewed', 'Project viewed'
    CREATE_ARTICLE = 'create_article', 'Create article'
    ARTICLE_VIEWED = 'article_viewed', 'Article viewed'

    @property
    def points(self):
        return EXP_POINTS[self]


EXP_POINTS = {
    ExpEvent.CREATE_PROJECT: 100,
    ExpEvent.SELL_PROJECT: 150,
    ExpEvent.BUY_PROJECT: 50,
    ExpEvent.RECEIVE_LIKE: 10,
    ExpEvent.RECEIVE_COMMENT: 5,
    ExpEvent.PROJECT_VIEWED: 1,
    ExpEvent.CREATE_ARTICLE: 75,
    ExpEvent.ARTICLE_VIEWED: 1,
}

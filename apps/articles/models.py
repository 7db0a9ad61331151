# ==========================================
# apps/articles/models.py
# ==========================================

from django.db import models
import uuid

from apps.projects.models import PublishStatus


class Article(models.Model):
    """Blog-style article written by a user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='articles')
    title = models.CharField(max_length=255)
    excerpt = models.TextField(blank=True)
    content = models.TextField(blank=True)
    thumbnail_url = models.URLField(blank=True)
    category = models.CharField(max_length=100, blank=True)
    # Minutes, at roughly 200 words per minute
    reading_time = models.PositiveIntegerField(default=1)
    status = models.CharField(max_length=20, choices=PublishStatus.choices, default=PublishStatus.PUBLISHED)
    views = models.PositiveIntegerField(default=0)
    published_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'articles'
        indexes = [
            models.Index(fields=['status', 'created_at'], name='articles_status_created_idx'),
            models.Index(fields=['category'], name='articles_category_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.title

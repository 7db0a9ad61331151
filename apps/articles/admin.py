# ==========================================
# apps/articles/admin.py
# ==========================================

from django.contrib import admin
from .models import Article
from apps.projects.models import PublishStatus


@admin.register(Article)
class ArticleAdmin(admin.ModelAdmin):
    list_display = ['title', 'user', 'category', 'status', 'views', 'published_at']
    list_filter = ['status', 'category', 'created_at']
    search_fields = ['title', 'excerpt', 'user__email', 'user__name']
    readonly_fields = ['id', 'views', 'reading_time', 'created_at', 'updated_at']
    raw_id_fields = ['user']
    date_hierarchy = 'created_at'
    actions = ['block_articles']

    @admin.action(description='Block selected articles')
    def block_articles(self, request, queryset):
        count = queryset.update(status=PublishStatus.BLOCKED)
        self.message_user(request, f'Blocked {count} article(s).')

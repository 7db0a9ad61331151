# ==========================================
# apps/projects/admin.py
# ==========================================

from django.contrib import admin
from .models import Category, Project, ProjectLike, Comment, PublishStatus


class CommentInline(admin.TabularInline):
    model = Comment
    extra = 0
    fields = ['user', 'content', 'created_at']
    readonly_fields = ['created_at']
    raw_id_fields = ['user']


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'color', 'created_at']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ['title', 'user', 'type', 'price', 'status', 'views', 'likes', 'created_at']
    list_filter = ['type', 'status', 'category', 'created_at']
    search_fields = ['title', 'description', 'user__email', 'user__name']
    readonly_fields = ['id', 'views', 'likes', 'created_at', 'updated_at']
    raw_id_fields = ['user']
    date_hierarchy = 'created_at'
    inlines = [CommentInline]
    actions = ['block_projects', 'publish_projects']

    @admin.action(description='Block selected projects')
    def block_projects(self, request, queryset):
        count = queryset.update(status=PublishStatus.BLOCKED)
        self.message_user(request, f'Blocked {count} project(s).')

    @admin.action(description='Publish selected projects')
    def publish_projects(self, request, queryset):
        count = queryset.update(status=PublishStatus.PUBLISHED)
        self.message_user(request, f'Published {count} project(s).')


@admin.register(ProjectLike)
class ProjectLikeAdmin(admin.ModelAdmin):
    list_display = ['user', 'project', 'created_at']
    raw_id_fields = ['user', 'project']


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ['user', 'project', 'created_at']
    search_fields = ['content', 'user__email']
    raw_id_fields = ['user', 'project']

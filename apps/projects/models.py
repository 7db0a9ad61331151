# ==========================================
# apps/projects/models.py
# ==========================================

from django.db import models
import uuid


class ProjectType(models.TextChoices):
    FREE = 'free', 'Free'
    PAID = 'paid', 'Paid'


class PublishStatus(models.TextChoices):
    PUBLISHED = 'published', 'Published'
    DRAFT = 'draft', 'Draft'
    BLOCKED = 'blocked', 'Blocked'


class Category(models.Model):
    """Project category, managed by staff."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    # Display colour, e.g. "#3B82F6"
    color = models.CharField(max_length=20, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'categories'
        ordering = ['name']
        verbose_name_plural = 'categories'

    def __str__(self):
        return self.name


class Project(models.Model):
    """Student project, free to download or sold through the payment gateway."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='projects')
    category = models.ForeignKey(
        Category, on_delete=models.PROTECT, null=True, blank=True, related_name='projects'
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    thumbnail_url = models.URLField(blank=True)
    tech_stack = models.JSONField(default=list, blank=True)
    github_url = models.URLField(blank=True)
    demo_url = models.URLField(blank=True)
    type = models.CharField(max_length=10, choices=ProjectType.choices, default=ProjectType.FREE)
    # Minor currency units (IDR)
    price = models.PositiveIntegerField(default=0)
    status = models.CharField(max_length=20, choices=PublishStatus.choices, default=PublishStatus.PUBLISHED)

    # Counters, only changed with F() updates
    views = models.PositiveIntegerField(default=0)
    likes = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'projects'
        indexes = [
            models.Index(fields=['status', 'created_at'], name='projects_status_created_idx'),
            models.Index(fields=['user', 'created_at'], name='projects_user_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    @property
    def is_paid(self):
        return self.type == ProjectType.PAID


class ProjectLike(models.Model):
    """One like per (user, project)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='project_likes')
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='project_likes')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'project_likes'
        constraints = [
            models.UniqueConstraint(fields=['user', 'project'], name='unique_project_like'),
        ]

    def __str__(self):
        return f"{self.user} likes {self.project}"


class Comment(models.Model):
    """Comment on a project."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='comments')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='comments')
    content = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'comments'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['project', 'created_at'], name='comments_project_created_idx'),
        ]

    def __str__(self):
        return f"{self.user.get_display_name()} on {self.project.title}"

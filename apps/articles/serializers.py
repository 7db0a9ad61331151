from rest_framework import serializers
from .models import Article
from apps.accounts.serializers import UserPublicSerializer
from apps.projects.models import PublishStatus


class ArticleSerializer(serializers.ModelSerializer):
    """Full article with its author."""

    author = UserPublicSerializer(source='user', read_only=True)

    class Meta:
        model = Article
        fields = [
            'id',
            'author',
            'title',
            'excerpt',
            'content',
            'thumbnail_url',
            'category',
            'reading_time',
            'status',
            'views',
            'published_at',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ArticleListSerializer(serializers.ModelSerializer):
    """Article card without the body."""

    author = UserPublicSerializer(source='user', read_only=True)

    class Meta:
        model = Article
        fields = [
            'id',
            'author',
            'title',
            'excerpt',
            'thumbnail_url',
            'category',
            'reading_time',
            'views',
            'published_at',
        ]
        read_only_fields = fields


class ArticleWriteSerializer(serializers.Serializer):
    """Input for creating and updating articles."""

    title = serializers.CharField(max_length=255)
    content = serializers.CharField(required=False, allow_blank=True, default='')
    excerpt = serializers.CharField(required=False, allow_blank=True, default='')
    thumbnail_url = serializers.URLField(required=False, allow_blank=True, default='')
    category = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    status = serializers.ChoiceField(
        choices=[PublishStatus.PUBLISHED, PublishStatus.DRAFT],
        default=PublishStatus.PUBLISHED,
    )


class ArticleFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for article listing.

    Query Parameters:
        search (str): Match in title, excerpt or content
        category (str): Category (case-insensitive)
        user (UUID): Filter by author
    """

    search = serializers.CharField(required=False, allow_blank=True)
    category = serializers.CharField(required=False, allow_blank=True)
    user = serializers.UUIDField(required=False)

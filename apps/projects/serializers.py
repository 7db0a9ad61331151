from rest_framework import serializers
from .models import Category, Project, Comment, ProjectType, PublishStatus
from apps.accounts.serializers import UserPublicSerializer


class CategorySerializer(serializers.ModelSerializer):
    """Category with the number of published projects in it."""

    project_count = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = Category
        fields = ['id', 'name', 'slug', 'description', 'color', 'project_count', 'created_at']
        read_only_fields = fields


class CategoryBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ['id', 'name', 'slug', 'color']
        read_only_fields = fields


class CategoryWriteSerializer(serializers.Serializer):
    """Input for creating and updating categories."""

    name = serializers.CharField(min_length=2, max_length=100)
    description = serializers.CharField(required=False, allow_blank=True)
    color = serializers.CharField(required=False, allow_blank=True, max_length=20)


class ProjectSerializer(serializers.ModelSerializer):
    """Main project serializer."""

    author = UserPublicSerializer(source='user', read_only=True)
    category = CategoryBriefSerializer(read_only=True)
    is_liked = serializers.SerializerMethodField()

    class Meta:
        model = Project
        fields = [
            'id',
            'author',
            'category',
            'title',
            'description',
            'thumbnail_url',
            'tech_stack',
            'github_url',
            'demo_url',
            'type',
            'price',
            'status',
            'views',
            'likes',
            'is_liked',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_is_liked(self, obj) -> bool:
        request = self.context.get('request')
        if not request or not request.user.is_authenticated:
            return False
        return obj.project_likes.filter(user=request.user).exists()


class ProjectListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for project listings."""

    author = UserPublicSerializer(source='user', read_only=True)
    category = CategoryBriefSerializer(read_only=True)

    class Meta:
        model = Project
        fields = [
            'id',
            'author',
            'category',
            'title',
            'thumbnail_url',
            'tech_stack',
            'type',
            'price',
            'views',
            'likes',
            'created_at',
        ]
        read_only_fields = fields


class ProjectWriteSerializer(serializers.Serializer):
    """Input for creating and updating projects."""

    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    thumbnail_url = serializers.URLField(required=False, allow_blank=True, default='')
    tech_stack = serializers.ListField(
        child=serializers.CharField(max_length=50),
        required=False,
        default=list,
    )
    github_url = serializers.URLField(required=False, allow_blank=True, default='')
    demo_url = serializers.URLField(required=False, allow_blank=True, default='')
    type = serializers.ChoiceField(choices=ProjectType.choices, default=ProjectType.FREE)
    price = serializers.IntegerField(min_value=0, default=0)
    status = serializers.ChoiceField(
        choices=[PublishStatus.PUBLISHED, PublishStatus.DRAFT],
        default=PublishStatus.PUBLISHED,
    )
    category_id = serializers.UUIDField(required=False)


class CommentSerializer(serializers.ModelSerializer):
    """Project comment with its author."""

    user = UserPublicSerializer(read_only=True)

    class Meta:
        model = Comment
        fields = ['id', 'project', 'user', 'content', 'created_at', 'updated_at']
        read_only_fields = ['id', 'project', 'user', 'created_at', 'updated_at']


class CommentCreateSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=5000)


class LikeResponseSerializer(serializers.Serializer):
    liked = serializers.BooleanField()
    likes = serializers.IntegerField()


class ViewResponseSerializer(serializers.Serializer):
    views = serializers.IntegerField()


class ProjectFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for project listing.

    Query Parameters:
        search (str): Match in title or description
        type (str): free or paid
        user (UUID): Filter by owner
        tech (str): Tech stack entry (case-insensitive)
        category (UUID): Filter by category
    """

    search = serializers.CharField(required=False, allow_blank=True)
    type = serializers.ChoiceField(choices=ProjectType.choices, required=False)
    user = serializers.UUIDField(required=False)
    tech = serializers.CharField(required=False, allow_blank=True)
    category = serializers.UUIDField(required=False)

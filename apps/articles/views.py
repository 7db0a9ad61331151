from rest_framework import status, viewsets, serializers as drf_serializers
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, PermissionDenied
from rest_framework.permissions import AllowAny, IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.projects.views import UUID_LOOKUP_REGEX
from .permissions import IsArticleAuthorOrReadOnly
from .serializers import (
    ArticleSerializer,
    ArticleListSerializer,
    ArticleWriteSerializer,
    ArticleFilterSerializer,
)
from .services import (
    create_article,
    update_article,
    delete_article,
    record_article_view,
    search_articles,
    ArticleNotFoundError,
    UnauthorizedArticleActionError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class ViewResponseSerializer(drf_serializers.Serializer):
    views = drf_serializers.IntegerField()


class ArticlePagination(PageNumberPagination):
    """Custom pagination for articles."""
    page_size = 10
    page_size_query_param = 'page_size'
    max_page_size = 50


class ArticleViewSet(viewsets.ModelViewSet):
    """
    ViewSet for articles.

    list: Published articles (filters: search, category, user)
    create: Write an article (earns CREATE_ARTICLE EXP)
    retrieve: Read an article
    partial_update: Edit an article (author only)
    destroy: Delete an article (author or staff)
    view: Record an article view
    """

    serializer_class = ArticleSerializer
    permission_classes = [IsAuthenticatedOrReadOnly, IsArticleAuthorOrReadOnly]
    pagination_class = ArticlePagination
    lookup_value_regex = UUID_LOOKUP_REGEX
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        if self.action != 'list':
            return search_articles(viewer=self.request.user)

        filter_serializer = ArticleFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return search_articles(
            search=params.get('search'),
            category=params.get('category'),
            user_id=params.get('user'),
            viewer=self.request.user,
        )

    def get_serializer_class(self):
        if self.action == 'list':
            return ArticleListSerializer
        if self.action in ('create', 'partial_update'):
            return ArticleWriteSerializer
        return ArticleSerializer

    @extend_schema(request=ArticleWriteSerializer, responses={201: ArticleSerializer})
    def create(self, request, *args, **kwargs):
        """Create a new article."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        article = create_article(user=request.user, **serializer.validated_data)

        return Response(ArticleSerializer(article).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ArticleWriteSerializer, responses={200: ArticleSerializer})
    def partial_update(self, request, *args, **kwargs):
        """Update an article (author only)."""
        instance = self.get_object()
        serializer = ArticleWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            article = update_article(
                article_id=instance.id,
                user=request.user,
                **serializer.validated_data
            )
        except UnauthorizedArticleActionError as e:
            raise PermissionDenied(str(e))

        return Response(ArticleSerializer(article).data)

    def perform_destroy(self, instance):
        """Delete article using service layer."""
        try:
            delete_article(article_id=instance.id, user=self.request.user)
        except ArticleNotFoundError as e:
            raise NotFound(str(e))
        except UnauthorizedArticleActionError as e:
            raise PermissionDenied(str(e))

    @extend_schema(
        request=None,
        responses={200: ViewResponseSerializer, 404: ErrorResponseSerializer},
        description="Record an article view. The author earns EXP per view.",
    )
    @action(detail=True, methods=['post'], permission_classes=[AllowAny], url_path='view')
    def record_view(self, request, pk=None):
        """Record an article view."""
        try:
            views = record_article_view(article_id=pk)
        except ArticleNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response({'views': views})

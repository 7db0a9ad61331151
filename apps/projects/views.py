from rest_framework import status, viewsets, serializers as drf_serializers
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .permissions import IsProjectOwnerOrReadOnly, IsStaffOrReadOnly
from .serializers import (
    CategorySerializer,
    CategoryWriteSerializer,
    ProjectSerializer,
    ProjectListSerializer,
    ProjectWriteSerializer,
    CommentSerializer,
    CommentCreateSerializer,
    LikeResponseSerializer,
    ViewResponseSerializer,
    ProjectFilterSerializer,
)
from .services import (
    create_project,
    update_project,
    delete_project,
    search_projects,
    list_categories,
    get_category,
    create_category,
    update_category,
    delete_category,
    toggle_like,
    record_project_view,
    add_comment,
    delete_comment as delete_comment_service,
    get_project_comments,
    ProjectNotFoundError,
    InvalidProjectError,
    UnauthorizedProjectActionError,
    CommentNotFoundError,
    CategoryNotFoundError,
    InvalidCategoryError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


UUID_LOOKUP_REGEX = r'[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'


class ProjectPagination(PageNumberPagination):
    """Custom pagination for projects."""
    page_size = 12
    page_size_query_param = 'page_size'
    max_page_size = 100


class ProjectViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Project CRUD operations.

    list: Get published projects (with filters)
    create: Publish a new project (earns CREATE_PROJECT EXP)
    retrieve: Get a specific project
    partial_update: Update a project (owner only)
    destroy: Delete a project (owner only)
    like: Toggle like on a project
    view: Record a project view
    comments: List or add comments
    """

    serializer_class = ProjectSerializer
    permission_classes = [IsAuthenticatedOrReadOnly, IsProjectOwnerOrReadOnly]
    pagination_class = ProjectPagination
    lookup_value_regex = UUID_LOOKUP_REGEX
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        """
        Filter projects based on query parameters.

        Filters:
        - search: Search in title and description
        - type: free/paid
        - user: UUID of owner
        - tech: Exact tech stack entry (case-insensitive)
        - category: UUID of category
        """
        if self.action != 'list':
            return search_projects(viewer=self.request.user)

        filter_serializer = ProjectFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return search_projects(
            search=params.get('search'),
            project_type=params.get('type'),
            user_id=params.get('user'),
            tech=params.get('tech'),
            category_id=params.get('category'),
            viewer=self.request.user,
        )

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return ProjectListSerializer
        if self.action in ('create', 'partial_update'):
            return ProjectWriteSerializer
        return ProjectSerializer

    @extend_schema(
        request=ProjectWriteSerializer,
        responses={201: ProjectSerializer, 400: ErrorResponseSerializer},
    )
    def create(self, request, *args, **kwargs):
        """Create a new project."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            project = create_project(user=request.user, **serializer.validated_data)
        except InvalidProjectError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = ProjectSerializer(project, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=ProjectWriteSerializer,
        responses={200: ProjectSerializer, 400: ErrorResponseSerializer},
    )
    def partial_update(self, request, *args, **kwargs):
        """Update a project (owner only)."""
        instance = self.get_object()
        serializer = ProjectWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            project = update_project(
                project_id=instance.id,
                user=request.user,
                **serializer.validated_data
            )
        except InvalidProjectError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except UnauthorizedProjectActionError as e:
            raise PermissionDenied(str(e))

        return Response(ProjectSerializer(project, context={'request': request}).data)

    def perform_destroy(self, instance):
        """Delete project using service layer."""
        try:
            delete_project(project_id=instance.id, user=self.request.user)
        except ProjectNotFoundError as e:
            raise NotFound(str(e))
        except InvalidProjectError as e:
            raise ValidationError({'error': str(e)})
        except UnauthorizedProjectActionError as e:
            raise PermissionDenied(str(e))

    @extend_schema(
        request=None,
        responses={200: LikeResponseSerializer, 404: ErrorResponseSerializer},
        description="Toggle like. The owner earns EXP for likes from other users.",
    )
    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated])
    def like(self, request, pk=None):
        """Like or unlike a project."""
        try:
            liked, likes = toggle_like(project_id=pk, user=request.user)
        except ProjectNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response({'liked': liked, 'likes': likes})

    @extend_schema(
        request=None,
        responses={200: ViewResponseSerializer, 404: ErrorResponseSerializer},
        description="Record a project view. The owner earns EXP per view.",
    )
    @action(detail=True, methods=['post'], permission_classes=[AllowAny], url_path='view')
    def record_view(self, request, pk=None):
        """Record a project view."""
        try:
            views = record_project_view(project_id=pk)
        except ProjectNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response({'views': views})

    @extend_schema(
        methods=['GET'],
        responses={200: CommentSerializer(many=True), 404: ErrorResponseSerializer},
        description="List comments of a project.",
    )
    @extend_schema(
        methods=['POST'],
        request=CommentCreateSerializer,
        responses={201: CommentSerializer, 404: ErrorResponseSerializer},
        description="Add a comment. The owner earns EXP for comments from other users.",
    )
    @action(detail=True, methods=['get', 'post'], permission_classes=[IsAuthenticatedOrReadOnly])
    def comments(self, request, pk=None):
        """List or add project comments."""
        if request.method == 'POST':
            serializer = CommentCreateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            try:
                comment = add_comment(
                    project_id=pk,
                    user=request.user,
                    content=serializer.validated_data['content'],
                )
            except ProjectNotFoundError as e:
                return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
            return Response(CommentSerializer(comment).data, status=status.HTTP_201_CREATED)

        try:
            comments = get_project_comments(project_id=pk)
        except ProjectNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        page = self.paginate_queryset(comments)
        if page is not None:
            return self.get_paginated_response(CommentSerializer(page, many=True).data)

        return Response(CommentSerializer(comments, many=True).data)


@extend_schema(
    responses={204: None, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    description="Delete a comment (author or staff).",
    tags=['projects'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def delete_comment(request, pk):
    """Delete a comment."""
    try:
        delete_comment_service(comment_id=pk, user=request.user)
    except CommentNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except UnauthorizedProjectActionError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(status=status.HTTP_204_NO_CONTENT)


class CategoryViewSet(viewsets.ViewSet):
    """
    Project categories.

    list/retrieve: Anyone
    create/partial_update/destroy: Staff only
    """

    permission_classes = [IsStaffOrReadOnly]
    lookup_value_regex = UUID_LOOKUP_REGEX

    @extend_schema(responses={200: CategorySerializer(many=True)})
    def list(self, request):
        return Response(CategorySerializer(list_categories(), many=True).data)

    @extend_schema(responses={200: CategorySerializer, 404: ErrorResponseSerializer})
    def retrieve(self, request, pk=None):
        try:
            category = get_category(category_id=pk)
        except CategoryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(CategorySerializer(category).data)

    @extend_schema(
        request=CategoryWriteSerializer,
        responses={201: CategorySerializer, 400: ErrorResponseSerializer},
    )
    def create(self, request):
        serializer = CategoryWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            category = create_category(**serializer.validated_data)
        except InvalidCategoryError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(CategorySerializer(category).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=CategoryWriteSerializer,
        responses={200: CategorySerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    )
    def partial_update(self, request, pk=None):
        serializer = CategoryWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            category = update_category(category_id=pk, **serializer.validated_data)
        except CategoryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidCategoryError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(CategorySerializer(category).data)

    @extend_schema(responses={204: None, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer})
    def destroy(self, request, pk=None):
        try:
            delete_category(category_id=pk)
        except CategoryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidCategoryError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(status=status.HTTP_204_NO_CONTENT)

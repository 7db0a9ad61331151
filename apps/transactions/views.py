from django.apps import apps
from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny, IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    TransactionSerializer,
    CreatePurchaseSerializer,
    PurchaseSessionSerializer,
    TransactionFilterSerializer,
    AdminTransactionFilterSerializer,
    GatewayNotificationSerializer,
    CallbackResponseSerializer,
    PurchaseCheckSerializer,
)
from .services import (
    GatewayNotification,
    MidtransSnapClient,
    create_purchase,
    apply_gateway_notification,
    has_purchased,
    get_user_transactions,
    get_all_transactions,
    ProjectNotFoundError,
    TransactionNotFoundError,
    NotPurchasableError,
    AlreadyPurchasedError,
    InvalidSignatureError,
    TransientGatewayError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()
    retryable = drf_serializers.BooleanField(required=False)


class TransactionPagination(PageNumberPagination):
    """Custom pagination for transactions."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _gateway_config():
    return apps.get_app_config('transactions').gateway_config


def _paginated(request, queryset):
    paginator = TransactionPagination()
    page = paginator.paginate_queryset(queryset, request)
    serializer = TransactionSerializer(page, many=True)
    return paginator.get_paginated_response(serializer.data)


@extend_schema(
    methods=['GET'],
    parameters=[
        OpenApiParameter('type', str, description="purchases, sales or all (default)"),
    ],
    responses={200: TransactionSerializer(many=True)},
    description="List the current user's purchases and sales.",
    tags=['transactions'],
)
@extend_schema(
    methods=['POST'],
    request=CreatePurchaseSerializer,
    responses={
        201: PurchaseSessionSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
        502: ErrorResponseSerializer,
    },
    description="Start buying a paid project. Returns a Snap token and checkout URL.",
    tags=['transactions'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def transactions(request):
    """List own transactions or start a purchase."""
    if request.method == 'GET':
        filter_serializer = TransactionFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        queryset = get_user_transactions(
            user=request.user,
            kind=filter_serializer.validated_data['type'],
        )
        return _paginated(request, queryset)

    serializer = CreatePurchaseSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        session = create_purchase(
            project_id=serializer.validated_data['project_id'],
            buyer=request.user,
            gateway=MidtransSnapClient(_gateway_config()),
        )
    except ProjectNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except (NotPurchasableError, AlreadyPurchasedError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except TransientGatewayError as e:
        return Response(
            {'error': str(e), 'retryable': e.retryable},
            status=status.HTTP_502_BAD_GATEWAY,
        )

    data = {
        'token': session.token,
        'redirect_url': session.redirect_url,
        'transaction_id': session.transaction.id,
    }
    return Response(PurchaseSessionSerializer(data).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=GatewayNotificationSerializer,
    responses={
        200: CallbackResponseSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Midtrans payment notification webhook. Authenticated by signature only.",
    tags=['transactions'],
)
@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def callback(request):
    """Apply a payment gateway notification."""
    serializer = GatewayNotificationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    notification = GatewayNotification.from_payload(serializer.validated_data)

    try:
        outcome = apply_gateway_notification(
            notification=notification,
            server_key=_gateway_config().server_key,
        )
    except InvalidSignatureError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except TransactionNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except AlreadyPurchasedError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({'status': 'ok', 'transaction_status': outcome.status})


@extend_schema(
    parameters=[
        OpenApiParameter('status', str, description="pending, success or failed"),
    ],
    responses={200: TransactionSerializer(many=True)},
    description="List all transactions (staff only).",
    tags=['transactions'],
)
@api_view(['GET'])
@permission_classes([IsAdminUser])
def admin_transactions(request):
    """List all transactions for staff."""
    filter_serializer = AdminTransactionFilterSerializer(data=request.query_params)
    filter_serializer.is_valid(raise_exception=True)

    queryset = get_all_transactions(status=filter_serializer.validated_data.get('status'))
    return _paginated(request, queryset)


@extend_schema(
    responses={200: PurchaseCheckSerializer},
    description="Check whether the current user has bought a project.",
    tags=['transactions'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def check_purchase(request, project_id):
    """Check purchase status of a project for the current user."""
    purchased = has_purchased(project_id=project_id, buyer_id=request.user.id)
    return Response({'purchased': purchased})

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .leveling import get_gamification_config, get_user_stats
from .serializers import (
    GamificationConfigSerializer,
    GamificationStatsSerializer,
    LeaderboardEntrySerializer,
    LeaderboardQuerySerializer,
)
from .services import get_leaderboard


@extend_schema(
    responses={200: GamificationConfigSerializer},
    description="Get gamification configuration (EXP per action, level curve, titles).",
    tags=['gamification'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def gamification_config(request):
    """Get gamification configuration."""
    serializer = GamificationConfigSerializer(get_gamification_config())
    return Response(serializer.data)


@extend_schema(
    responses={200: GamificationStatsSerializer},
    description="Get the current user's level, title and progress.",
    tags=['gamification'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_stats(request):
    """Get current user's gamification stats."""
    # Re-read total_exp, accruals are applied with UPDATE and bypass request.user
    request.user.refresh_from_db(fields=['total_exp'])
    stats = get_user_stats(request.user.total_exp)
    return Response(GamificationStatsSerializer(stats.to_dict()).data)


@extend_schema(
    parameters=[
        OpenApiParameter('limit', int, description="Number of entries, 1 to 100 (default 10)"),
    ],
    responses={200: LeaderboardEntrySerializer(many=True)},
    description="Top users by total EXP. Blocked and deactivated accounts are excluded.",
    tags=['gamification'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def leaderboard(request):
    """Get the EXP leaderboard."""
    query = LeaderboardQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    entries = get_leaderboard(limit=query.validated_data['limit'])
    return Response(LeaderboardEntrySerializer(entries, many=True).data)

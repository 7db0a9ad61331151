from rest_framework import serializers
from apps.accounts.serializers import UserPublicSerializer
from .services.leaderboard import DEFAULT_LEADERBOARD_SIZE, MAX_LEADERBOARD_SIZE


class GamificationStatsSerializer(serializers.Serializer):
    """Derived level/title/progress for a user's EXP total."""

    total_exp = serializers.IntegerField(min_value=0)
    level = serializers.IntegerField(min_value=1)
    level_title = serializers.CharField()
    level_progress = serializers.IntegerField(min_value=0, max_value=100)
    exp_to_next_level = serializers.IntegerField(min_value=0)


class LevelConfigSerializer(serializers.Serializer):
    base_exp = serializers.IntegerField()
    multiplier = serializers.IntegerField()
    max_level = serializers.IntegerField()


class GamificationConfigSerializer(serializers.Serializer):
    """Public EXP values, level curve and titles."""

    action_points = serializers.DictField(child=serializers.IntegerField())
    level_config = LevelConfigSerializer()
    level_titles = serializers.DictField(child=serializers.CharField())


class LeaderboardQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=MAX_LEADERBOARD_SIZE, default=DEFAULT_LEADERBOARD_SIZE)


class LeaderboardEntrySerializer(serializers.Serializer):
    """One ranked user with the level derived from their EXP."""

    rank = serializers.IntegerField()
    user = UserPublicSerializer()
    total_exp = serializers.IntegerField(source='stats.total_exp')
    level = serializers.IntegerField(source='stats.level')
    level_title = serializers.CharField(source='stats.level_title')

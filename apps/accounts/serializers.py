from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password

from apps.gamification.leveling import level_for_exp
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Own profile, including EXP and derived level."""

    level = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'name',
            'avatar_url',
            'university',
            'major',
            'bio',
            'phone',
            'role',
            'status',
            'total_exp',
            'level',
            'created_at',
            'last_login',
        ]
        read_only_fields = [
            'id', 'email', 'role', 'status', 'total_exp', 'level',
            'created_at', 'last_login',
        ]

    def get_level(self, obj) -> int:
        return level_for_exp(obj.total_exp)


class UserPublicSerializer(serializers.ModelSerializer):
    """Public user info (project authors, buyers, commenters)."""

    level = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'name', 'avatar_url', 'university', 'major', 'total_exp', 'level']

    def get_level(self, obj) -> int:
        return level_for_exp(obj.total_exp)


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration."""

    email = serializers.EmailField(required=True)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    university = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    major = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )

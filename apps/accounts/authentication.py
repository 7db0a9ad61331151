from django.utils.translation import gettext_lazy as _
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed


def active_user_authentication_rule(user):
    """Tokens are only issued and refreshed for active, unblocked users."""
    return user is not None and user.is_active and not user.is_blocked


class ActiveUserJWTAuthentication(JWTAuthentication):
    """JWT authentication that also rejects tokens of blocked users."""

    def get_user(self, validated_token):
        user = super().get_user(validated_token)

        if user.is_blocked:
            raise AuthenticationFailed(_("Account is blocked"), code="user_blocked")

        return user

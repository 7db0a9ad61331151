"""Login and account lookup for the campus hub."""

import logging

from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError, UserNotFoundError

User = get_user_model()

logger = logging.getLogger(__name__)


def authenticate_user(*, email: str, password: str) -> User:
    """
    Check email/password and stamp ``last_login``.

    Email matching is case-insensitive. Blocked and deactivated accounts
    are refused only after the password checks out, so the response never
    reveals account state to someone without the password.

    Raises:
        InvalidCredentialsError: Unknown email or wrong password
        InactiveAccountError: Account is deactivated or blocked
    """
    user = User.objects.filter(email__iexact=email.strip()).first()
    if user is None or not user.check_password(password):
        raise InvalidCredentialsError("Invalid email or password")

    if user.is_blocked:
        logger.info("Blocked user %s attempted to log in", user.id)
        raise InactiveAccountError("Account is blocked")
    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    User.objects.filter(id=user.id).update(last_login=timezone.now())
    user.refresh_from_db(fields=['last_login'])
    return user


def get_active_user(*, user_id) -> User:
    """
    Active user by ID (public profile lookup).

    Raises:
        UserNotFoundError: If the user doesn't exist or is inactive
    """
    try:
        return User.objects.get(id=user_id, is_active=True)
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")

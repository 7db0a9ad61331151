"""User registration service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from .exceptions import UserRegistrationError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    name: str = "",
    university: str = "",
    major: str = "",
) -> User:
    """
    Register a new user.

    New accounts start with ``total_exp = 0`` (level 1, "Pemula").

    Args:
        email: User's email address
        password: User's password (will be hashed)
        name: Optional display name
        university: Optional university
        major: Optional study programme

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the email is taken or the insert fails
    """
    email = User.objects.normalize_email(email)
    if User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("Email is already registered")

    try:
        user = User.objects.create_user(
            email=email,
            password=password,
            name=name,
            university=university,
            major=major,
        )
    except IntegrityError:
        raise UserRegistrationError("Email is already registered")

    logger.info("Registered user %s", user.id)
    return user

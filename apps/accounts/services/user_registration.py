"""User registration service."""

import logging
from typing import Optional

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.accounts.choices import UserRole
from .exceptions import UserRegistrationError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    display_name: str = "",
    role: str = UserRole.STANDARD,
    admin_level: Optional[int] = None
) -> User:
    """
    Register a new user, optionally as an admin with an approval level.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        display_name: Optional display name
        role: 'standard' or 'admin'
        admin_level: Approval level (1-3), admins only

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If registration fails
    """
    if User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("A user with this email already exists")

    try:
        user = User.objects.create_user(
            email=email,
            password=password,
            display_name=display_name,
            role=role,
            admin_level=admin_level,
        )
    except (ValueError, IntegrityError) as e:
        raise UserRegistrationError(f"Registration failed: {e}")

    logger.info("Registered %s user %s (level %s)", role, user.email, admin_level)
    return user

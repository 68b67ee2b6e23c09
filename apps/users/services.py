"""User lookups used by the booking, payment and review services."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore

from shared.domain.exceptions import NotFoundError, RequestValidationError

User = get_user_model()


def get_user_by_username(username: str):
    if not username:
        raise RequestValidationError("Username cannot be empty")
    try:
        return User.objects.get(**{User.USERNAME_FIELD: username})
    except User.DoesNotExist:
        raise NotFoundError("User not found")

"""Use cases for managing users."""

from .create_user import ALLOWED_ROLES, create_user

__all__ = ["ALLOWED_ROLES", "create_user"]

"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime

ADMIN_ROLE = "Admin"
DEFAULT_ROLE = "User"


@dataclass
class User:
    """Contact attributes of a platform user."""

    id: int | None
    name: str
    email: str
    phone: str | None = None
    role: str = DEFAULT_ROLE
    created_at: datetime | None = None

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the user's role matches ``alias``."""

        return (self.role or "").lower() == alias.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ADMIN_ROLE)

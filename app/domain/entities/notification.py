"""Domain entity representing a notification delivery attempt."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum

NOTIFICATION_TYPE_EMAIL = "Email"
NOTIFICATION_TYPE_SMS = "SMS"
NOTIFICATION_TYPE_PUSH = "Push"
NOTIFICATION_TYPES = (
    NOTIFICATION_TYPE_EMAIL,
    NOTIFICATION_TYPE_SMS,
    NOTIFICATION_TYPE_PUSH,
)


class NotificationStatus(str, Enum):
    """Lifecycle states of a notification record."""

    PENDING = "Pending"
    SENT = "Sent"
    FAILED = "Failed"
    CANCELLED = "Cancelled"


class NotificationPriority(IntEnum):
    """Sort key for background processing; higher values go first."""

    LOW = 0
    NORMAL = 1
    HIGH = 2
    CRITICAL = 3

    @classmethod
    def parse(cls, value: "str | int | NotificationPriority") -> "NotificationPriority":
        """Accept a member, its integer value or its case-insensitive name."""

        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        try:
            return cls[str(value).strip().upper()]
        except KeyError as exc:
            raise ValueError(f"Prioridad de notificación inválida: {value}") from exc

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass
class Notification:
    """One persisted delivery attempt addressed to a user."""

    id: int | None
    user_id: int
    type: str
    subject: str
    content: str
    recipient: str
    status: NotificationStatus = NotificationStatus.PENDING
    created_at: datetime | None = None
    sent_at: datetime | None = None
    attempts: int = 0
    error_message: str | None = None
    template_id: str | None = None
    template_data: dict[str, str] | None = None
    priority: NotificationPriority = NotificationPriority.NORMAL
    read_at: datetime | None = None


__all__ = [
    "NOTIFICATION_TYPE_EMAIL",
    "NOTIFICATION_TYPE_SMS",
    "NOTIFICATION_TYPE_PUSH",
    "NOTIFICATION_TYPES",
    "Notification",
    "NotificationPriority",
    "NotificationStatus",
]

"""Domain entities exposed by the application."""

from .delivery import (
    NotificationMessage,
    NotificationRequest,
    NotificationResult,
    NotificationStats,
    normalize_template_data,
)
from .joke import DEFAULT_JOKE_ORIGIN, Joke
from .notification import (
    NOTIFICATION_TYPE_EMAIL,
    NOTIFICATION_TYPE_PUSH,
    NOTIFICATION_TYPE_SMS,
    NOTIFICATION_TYPES,
    Notification,
    NotificationPriority,
    NotificationStatus,
)
from .notification_preference import DEFAULT_EVENT_TYPE, NotificationPreference
from .notification_template import NotificationTemplate
from .user import ADMIN_ROLE, DEFAULT_ROLE, User

__all__ = [
    "ADMIN_ROLE",
    "DEFAULT_EVENT_TYPE",
    "DEFAULT_JOKE_ORIGIN",
    "DEFAULT_ROLE",
    "Joke",
    "NOTIFICATION_TYPE_EMAIL",
    "NOTIFICATION_TYPE_PUSH",
    "NOTIFICATION_TYPE_SMS",
    "NOTIFICATION_TYPES",
    "Notification",
    "NotificationMessage",
    "NotificationPreference",
    "NotificationPriority",
    "NotificationRequest",
    "NotificationResult",
    "NotificationStats",
    "NotificationStatus",
    "NotificationTemplate",
    "User",
    "normalize_template_data",
]

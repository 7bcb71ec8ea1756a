"""Repository implementations for infrastructure layer."""

from .joke_repository import JokeRepository
from .memory import (
    InMemoryNotificationRepository,
    InMemoryPreferenceRepository,
    InMemoryTemplateRepository,
    InMemoryUserRepository,
)
from .notification_preference_repository import NotificationPreferenceRepository
from .notification_repository import NotificationRepository
from .notification_template_repository import NotificationTemplateRepository
from .user_repository import UserRepository

__all__ = [
    "InMemoryNotificationRepository",
    "InMemoryPreferenceRepository",
    "InMemoryTemplateRepository",
    "InMemoryUserRepository",
    "JokeRepository",
    "NotificationPreferenceRepository",
    "NotificationRepository",
    "NotificationTemplateRepository",
    "UserRepository",
]

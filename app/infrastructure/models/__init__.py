"""ORM models used by the application infrastructure."""

from .joke import JokeModel
from .notification import NotificationModel
from .notification_preference import NotificationPreferenceModel
from .notification_template import NotificationTemplateModel
from .user import UserModel

__all__ = [
    "JokeModel",
    "NotificationModel",
    "NotificationPreferenceModel",
    "NotificationTemplateModel",
    "UserModel",
]

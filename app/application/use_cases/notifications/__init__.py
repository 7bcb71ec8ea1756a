"""Notification dispatch, templating and event handling use cases."""

from .dispatch import NotificationDispatchService, default_recipient
from .events import (
    JOKE_CREATED_ADMIN_TEMPLATE,
    JOKE_CREATED_AUTHOR_TEMPLATE,
    JokeCreatedNotifier,
    JokeEventHandler,
    NullJokeNotifier,
)
from .preferences import list_preferences, set_preference
from .templates import (
    TemplateService,
    canonical_type,
    substitute_placeholders,
    validate_template,
)

__all__ = [
    "JOKE_CREATED_ADMIN_TEMPLATE",
    "JOKE_CREATED_AUTHOR_TEMPLATE",
    "JokeCreatedNotifier",
    "JokeEventHandler",
    "NotificationDispatchService",
    "NullJokeNotifier",
    "TemplateService",
    "canonical_type",
    "default_recipient",
    "list_preferences",
    "set_preference",
    "substitute_placeholders",
    "validate_template",
]

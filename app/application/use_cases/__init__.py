"""Aggregate application use cases."""

from .jokes import create_joke
from .notifications import (
    JokeCreatedNotifier,
    NotificationDispatchService,
    TemplateService,
)

__all__ = [
    "JokeCreatedNotifier",
    "NotificationDispatchService",
    "TemplateService",
    "create_joke",
]

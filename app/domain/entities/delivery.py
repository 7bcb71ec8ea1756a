"""Value objects exchanged between the dispatch service and providers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping, Union

from app.utils import now_utc

from .notification import NotificationPriority
from .notification_preference import DEFAULT_EVENT_TYPE

MetadataValue = Union[str, int, float, bool]
TemplateDataValue = Union[str, int, float, bool]


@dataclass
class NotificationRequest:
    """Input describing a notification that should reach ``user_id``."""

    user_id: int
    type: str
    subject: str = ""
    content: str = ""
    recipient: str | None = None
    template_id: str | None = None
    template_data: Mapping[str, TemplateDataValue] | None = None
    priority: NotificationPriority = NotificationPriority.NORMAL

    @property
    def event_type(self) -> str:
        """Preference scope of the request: its template id or ``General``."""

        return self.template_id or DEFAULT_EVENT_TYPE


@dataclass
class NotificationMessage:
    """Resolved payload handed to a provider."""

    recipient: str
    subject: str
    content: str
    metadata: dict[str, MetadataValue] = field(default_factory=dict)


@dataclass
class NotificationResult:
    """Outcome reported by a provider."""

    is_success: bool
    external_id: str | None = None
    error_message: str | None = None
    sent_at: datetime = field(default_factory=now_utc)

    @classmethod
    def success(cls, external_id: str | None = None) -> "NotificationResult":
        return cls(is_success=True, external_id=external_id)

    @classmethod
    def failure(cls, error_message: str) -> "NotificationResult":
        return cls(is_success=False, error_message=error_message)


@dataclass
class NotificationStats:
    """Per-user counters grouped by status."""

    total: int = 0
    unread: int = 0
    pending: int = 0
    failed: int = 0


def normalize_template_data(
    data: Mapping[str, TemplateDataValue] | None,
) -> dict[str, str] | None:
    """Flatten ``data`` into the ``str -> str`` map that is persisted.

    Nested values are stored through ``str()`` and are not expanded by the
    placeholder substitution.
    """

    if data is None:
        return None
    return {str(key): "" if value is None else str(value) for key, value in data.items()}


__all__ = [
    "MetadataValue",
    "NotificationMessage",
    "NotificationRequest",
    "NotificationResult",
    "NotificationStats",
    "TemplateDataValue",
    "normalize_template_data",
]

"""Storage contracts consumed by the notification use cases.

Both the SQLAlchemy repositories and the in-memory adapters satisfy these
protocols structurally.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from app.domain.entities import (
    Notification,
    NotificationPreference,
    NotificationStats,
    NotificationStatus,
    NotificationTemplate,
    User,
)


class UserDirectory(Protocol):
    def get(self, user_id: int) -> User | None: ...

    def list_admins(self) -> Sequence[User]: ...


class NotificationStore(Protocol):
    def create(self, notification: Notification) -> Notification: ...

    def get(self, notification_id: int) -> Notification | None: ...

    def list_for_user(
        self,
        user_id: int,
        *,
        page: int = 1,
        page_size: int = 20,
        status: NotificationStatus | None = None,
        notification_type: str | None = None,
    ) -> Sequence[Notification]: ...

    def list_pending(self, batch_size: int = 50) -> Sequence[Notification]: ...

    def list_retryable(self, max_attempts: int = 3) -> Sequence[Notification]: ...

    def update_status(
        self,
        notification_id: int,
        status: NotificationStatus,
        error_message: str | None = None,
    ) -> bool: ...

    def mark_as_read(self, notification_id: int, *, user_id: int) -> bool: ...

    def get_stats(self, user_id: int) -> NotificationStats: ...


class PreferenceStore(Protocol):
    def list_for_user(self, user_id: int) -> Sequence[NotificationPreference]: ...

    def get_preference(
        self, user_id: int, notification_type: str, event_type: str
    ) -> NotificationPreference | None: ...

    def is_enabled(self, user_id: int, notification_type: str, event_type: str) -> bool: ...

    def set_preference(
        self,
        user_id: int,
        notification_type: str,
        event_type: str,
        is_enabled: bool,
    ) -> NotificationPreference: ...


class TemplateStore(Protocol):
    def list(self) -> Sequence[NotificationTemplate]: ...

    def list_by_type(self, notification_type: str) -> Sequence[NotificationTemplate]: ...

    def get_by_template_id(
        self, template_id: str, notification_type: str
    ) -> NotificationTemplate | None: ...

    def list_by_template_id(self, template_id: str) -> Sequence[NotificationTemplate]: ...

    def create(self, template: NotificationTemplate) -> NotificationTemplate: ...

    def update(self, template: NotificationTemplate) -> NotificationTemplate: ...

    def delete(self, template_pk: int) -> None: ...


__all__ = ["NotificationStore", "PreferenceStore", "TemplateStore", "UserDirectory"]

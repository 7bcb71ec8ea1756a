"""In-memory stores used by tests and by deployments without a database."""

from __future__ import annotations

import itertools
import threading
from collections.abc import Iterable, Sequence
from dataclasses import replace

from app.domain.entities import (
    ADMIN_ROLE,
    Notification,
    NotificationPreference,
    NotificationStats,
    NotificationStatus,
    NotificationTemplate,
    User,
)
from app.utils import now_utc


def _queue_key(notification: Notification):
    return (int(notification.priority), notification.created_at or now_utc(), notification.id)


class InMemoryNotificationRepository:
    """Dictionary backed implementation of the notification store."""

    def __init__(self) -> None:
        self._items: dict[int, Notification] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def create(self, notification: Notification) -> Notification:
        with self._lock:
            stored = replace(
                notification,
                id=next(self._ids),
                created_at=notification.created_at or now_utc(),
                template_data=dict(notification.template_data)
                if notification.template_data is not None
                else None,
            )
            self._items[stored.id] = stored
            return replace(stored)

    def get(self, notification_id: int) -> Notification | None:
        item = self._items.get(notification_id)
        return replace(item) if item else None

    def list_for_user(
        self,
        user_id: int,
        *,
        page: int = 1,
        page_size: int = 20,
        status: NotificationStatus | None = None,
        notification_type: str | None = None,
    ) -> Sequence[Notification]:
        items = [item for item in self._items.values() if item.user_id == user_id]
        if status is not None:
            items = [item for item in items if item.status == NotificationStatus(status)]
        if notification_type:
            items = [item for item in items if item.type == notification_type]
        items.sort(key=lambda item: (item.created_at, item.id), reverse=True)
        start = (page - 1) * page_size
        return [replace(item) for item in items[start : start + page_size]]

    def list_pending(self, batch_size: int = 50) -> Sequence[Notification]:
        items = [
            item for item in self._items.values() if item.status == NotificationStatus.PENDING
        ]
        items.sort(key=_queue_key)
        return [replace(item) for item in items[:batch_size]]

    def list_retryable(self, max_attempts: int = 3) -> Sequence[Notification]:
        items = [
            item
            for item in self._items.values()
            if item.status == NotificationStatus.FAILED and item.attempts < max_attempts
        ]
        items.sort(key=_queue_key)
        return [replace(item) for item in items]

    def update_status(
        self,
        notification_id: int,
        status: NotificationStatus,
        error_message: str | None = None,
    ) -> bool:
        with self._lock:
            item = self._items.get(notification_id)
            if item is None:
                return False
            status = NotificationStatus(status)
            item.status = status
            item.error_message = error_message
            if status is NotificationStatus.SENT:
                item.sent_at = now_utc()
            item.attempts += 1
            return True

    def mark_as_read(self, notification_id: int, *, user_id: int) -> bool:
        item = self._items.get(notification_id)
        if item is None or item.user_id != user_id:
            return False
        if item.read_at is None:
            item.read_at = now_utc()
        return True

    def get_stats(self, user_id: int) -> NotificationStats:
        items = [item for item in self._items.values() if item.user_id == user_id]
        return NotificationStats(
            total=len(items),
            unread=sum(1 for item in items if item.status == NotificationStatus.SENT),
            pending=sum(1 for item in items if item.status == NotificationStatus.PENDING),
            failed=sum(1 for item in items if item.status == NotificationStatus.FAILED),
        )


class InMemoryPreferenceRepository:
    def __init__(self) -> None:
        self._items: dict[tuple[int, str, str], NotificationPreference] = {}
        self._ids = itertools.count(1)

    def list_for_user(self, user_id: int) -> Sequence[NotificationPreference]:
        items = [item for key, item in self._items.items() if key[0] == user_id]
        items.sort(key=lambda item: (item.notification_type, item.event_type))
        return [replace(item) for item in items]

    def get_preference(
        self, user_id: int, notification_type: str, event_type: str
    ) -> NotificationPreference | None:
        item = self._items.get((user_id, notification_type, event_type))
        return replace(item) if item else None

    def is_enabled(self, user_id: int, notification_type: str, event_type: str) -> bool:
        item = self._items.get((user_id, notification_type, event_type))
        return True if item is None else item.is_enabled

    def set_preference(
        self,
        user_id: int,
        notification_type: str,
        event_type: str,
        is_enabled: bool,
    ) -> NotificationPreference:
        key = (user_id, notification_type, event_type)
        item = self._items.get(key)
        if item is None:
            item = NotificationPreference(
                id=next(self._ids),
                user_id=user_id,
                notification_type=notification_type,
                event_type=event_type,
                is_enabled=is_enabled,
                created_at=now_utc(),
            )
            self._items[key] = item
        else:
            item.is_enabled = is_enabled
            item.updated_at = now_utc()
        return replace(item)


class InMemoryTemplateRepository:
    def __init__(self, templates: Iterable[NotificationTemplate] = ()) -> None:
        self._items: dict[int, NotificationTemplate] = {}
        self._ids = itertools.count(1)
        for template in templates:
            self.create(template)

    def list(self) -> Sequence[NotificationTemplate]:
        items = sorted(self._items.values(), key=lambda item: (item.type, item.name))
        return [replace(item) for item in items]

    def list_by_type(self, notification_type: str) -> Sequence[NotificationTemplate]:
        items = [item for item in self._items.values() if item.type == notification_type]
        items.sort(key=lambda item: item.name)
        return [replace(item) for item in items]

    def list_by_template_id(self, template_id: str) -> Sequence[NotificationTemplate]:
        return [
            replace(item) for item in self._items.values() if item.template_id == template_id
        ]

    def get_by_template_id(
        self, template_id: str, notification_type: str
    ) -> NotificationTemplate | None:
        matches = [
            item
            for item in self._items.values()
            if item.template_id == template_id and item.type == notification_type
        ]
        if not matches:
            return None
        matches.sort(key=lambda item: not item.is_active)
        return replace(matches[0])

    def create(self, template: NotificationTemplate) -> NotificationTemplate:
        stored = replace(
            template,
            id=next(self._ids),
            created_at=template.created_at or now_utc(),
        )
        self._items[stored.id] = stored
        return replace(stored)

    def update(self, template: NotificationTemplate) -> NotificationTemplate:
        if template.id is None or template.id not in self._items:
            msg = f"Notification template with id {template.id} not found"
            raise ValueError(msg)
        self._items[template.id] = replace(template)
        return replace(template)

    def delete(self, template_pk: int) -> None:
        self._items.pop(template_pk, None)


class InMemoryUserRepository:
    def __init__(self, users: Iterable[User] = ()) -> None:
        self._items: dict[int, User] = {}
        for user in users:
            self.add(user)

    def add(self, user: User) -> User:
        if user.id is None:
            user = replace(user, id=max(self._items, default=0) + 1)
        self._items[user.id] = user
        return user

    def get(self, user_id: int) -> User | None:
        return self._items.get(user_id)

    def list_admins(self) -> Sequence[User]:
        return [
            user
            for user in self._items.values()
            if (user.role or "").lower() == ADMIN_ROLE.lower()
        ]


__all__ = [
    "InMemoryNotificationRepository",
    "InMemoryPreferenceRepository",
    "InMemoryTemplateRepository",
    "InMemoryUserRepository",
]

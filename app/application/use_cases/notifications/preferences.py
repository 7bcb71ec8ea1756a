"""Use cases for reading and changing notification preferences."""

from __future__ import annotations

from collections.abc import Sequence

from app.domain.entities import DEFAULT_EVENT_TYPE, NotificationPreference
from app.domain.exceptions import NotificationError
from app.domain.repositories import PreferenceStore

from .templates import canonical_type


def list_preferences(
    repository: PreferenceStore, *, user_id: int
) -> Sequence[NotificationPreference]:
    """Return every explicit preference row stored for ``user_id``."""

    return repository.list_for_user(user_id)


def set_preference(
    repository: PreferenceStore,
    *,
    user_id: int,
    notification_type: str,
    event_type: str | None,
    is_enabled: bool,
) -> NotificationPreference:
    """Create or update the preference for ``(user_id, type, event)``."""

    normalized_type = canonical_type(notification_type)
    if normalized_type is None:
        raise NotificationError(f"Tipo de notificación no soportado: {notification_type}")
    normalized_event = (event_type or "").strip() or DEFAULT_EVENT_TYPE
    return repository.set_preference(
        user_id, normalized_type, normalized_event, is_enabled
    )


__all__ = ["list_preferences", "set_preference"]

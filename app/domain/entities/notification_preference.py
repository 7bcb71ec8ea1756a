"""Domain entity for per-user notification opt-outs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

DEFAULT_EVENT_TYPE = "General"


@dataclass
class NotificationPreference:
    """Opt-in flag scoped to a user, a channel and an event."""

    id: int | None
    user_id: int
    notification_type: str
    event_type: str
    is_enabled: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["DEFAULT_EVENT_TYPE", "NotificationPreference"]

"""Domain entity for parameterised notification content."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class NotificationTemplate:
    """Named text blueprint with ``{{variable}}`` placeholders."""

    id: int | None
    template_id: str
    name: str
    type: str
    subject: str
    content: str
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["NotificationTemplate"]

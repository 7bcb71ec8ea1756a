"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.entities import NotificationPriority

TemplateValue = str | int | float | bool


class NotificationSendRequest(BaseModel):
    """Payload used to deliver or queue a notification for the current user."""

    type: str = Field(..., min_length=1, max_length=20, description="Email, SMS o Push")
    subject: str = Field(default="", max_length=200)
    content: str = Field(default="")
    recipient: str | None = Field(default=None, max_length=255)
    template_id: str | None = Field(default=None, max_length=100)
    template_data: dict[str, TemplateValue] | None = None
    priority: NotificationPriority = NotificationPriority.NORMAL

    @field_validator("priority", mode="before")
    @classmethod
    def _parse_priority(cls, value: object) -> NotificationPriority:
        if isinstance(value, (str, int, NotificationPriority)):
            return NotificationPriority.parse(value)
        raise ValueError("Prioridad de notificación inválida")


class NotificationBulkSendRequest(NotificationSendRequest):
    """Payload used by administrators to notify several users at once."""

    user_ids: list[int] = Field(..., min_length=1)

    def unique_user_ids(self) -> list[int]:
        """Return the list of identifiers without duplicates preserving order."""

        unique: list[int] = []
        seen: set[int] = set()
        for user_id in self.user_ids:
            if user_id in seen:
                continue
            seen.add(user_id)
            unique.append(user_id)
        return unique


class NotificationSendResponse(BaseModel):
    message: str


class NotificationBulkSendResponse(BaseModel):
    message: str
    success: bool
    user_count: int


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    type: str
    subject: str
    content: str
    recipient: str
    status: str
    priority: str
    attempts: int
    error_message: str | None = None
    template_id: str | None = None
    created_at: datetime | None = None
    sent_at: datetime | None = None
    read_at: datetime | None = None


class NotificationStatsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    unread: int
    pending: int
    failed: int


class NotificationPreferenceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    notification_type: str
    event_type: str
    is_enabled: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class NotificationPreferenceUpdate(BaseModel):
    notification_type: str = Field(..., min_length=1, max_length=20)
    event_type: str | None = Field(default=None, max_length=50)
    is_enabled: bool


__all__ = [
    "NotificationBulkSendRequest",
    "NotificationBulkSendResponse",
    "NotificationPreferenceRead",
    "NotificationPreferenceUpdate",
    "NotificationRead",
    "NotificationSendRequest",
    "NotificationSendResponse",
    "NotificationStatsRead",
]

"""Schemas for notification template endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NotificationTemplateBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: str = Field(..., min_length=1, max_length=20)
    subject: str = Field(default="", max_length=200)
    content: str = Field(..., min_length=1)
    is_active: bool = True


class NotificationTemplateCreate(NotificationTemplateBase):
    """Payload required to create a template variant."""

    template_id: str = Field(..., min_length=1, max_length=100)


class NotificationTemplateUpdate(NotificationTemplateBase):
    """Payload replacing the editable fields of a template variant."""

    model_config = ConfigDict(extra="forbid")


class NotificationTemplateRead(NotificationTemplateBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    template_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class NotificationTemplateRenderRequest(BaseModel):
    data: dict[str, Any] = Field(default_factory=dict)
    type: str | None = Field(default=None, description="Tipo usado para el asunto")


class NotificationTemplateRenderResponse(BaseModel):
    template_id: str
    subject: str | None = None
    content: str


__all__ = [
    "NotificationTemplateCreate",
    "NotificationTemplateRead",
    "NotificationTemplateRenderRequest",
    "NotificationTemplateRenderResponse",
    "NotificationTemplateUpdate",
]

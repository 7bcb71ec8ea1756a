from .joke import JokeCreate, JokeRead
from .notification import (
    NotificationBulkSendRequest,
    NotificationBulkSendResponse,
    NotificationPreferenceRead,
    NotificationPreferenceUpdate,
    NotificationRead,
    NotificationSendRequest,
    NotificationSendResponse,
    NotificationStatsRead,
)
from .template import (
    NotificationTemplateCreate,
    NotificationTemplateRead,
    NotificationTemplateRenderRequest,
    NotificationTemplateRenderResponse,
    NotificationTemplateUpdate,
)

__all__ = [
    "JokeCreate",
    "JokeRead",
    "NotificationBulkSendRequest",
    "NotificationBulkSendResponse",
    "NotificationPreferenceRead",
    "NotificationPreferenceUpdate",
    "NotificationRead",
    "NotificationSendRequest",
    "NotificationSendResponse",
    "NotificationStatsRead",
    "NotificationTemplateCreate",
    "NotificationTemplateRead",
    "NotificationTemplateRenderRequest",
    "NotificationTemplateRenderResponse",
    "NotificationTemplateUpdate",
]

"""Dispatch service turning notification requests into delivery attempts."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from app.domain.entities import (
    NOTIFICATION_TYPE_EMAIL,
    NOTIFICATION_TYPE_SMS,
    Notification,
    NotificationMessage,
    NotificationPriority,
    NotificationRequest,
    NotificationStats,
    NotificationStatus,
    User,
    normalize_template_data,
)
from app.domain.exceptions import RecipientNotResolvedError, UserNotFoundError
from app.domain.providers import NotificationProvider, ProviderRegistry
from app.domain.repositories import NotificationStore, PreferenceStore, UserDirectory
from app.utils import now_utc

from .templates import TemplateService, canonical_type

logger = logging.getLogger(__name__)


def default_recipient(user: User, notification_type: str) -> str:
    """Return the address of ``user`` for ``notification_type`` or ``""``.

    Push device tokens are not part of the user profile, so push requests need an
    explicit recipient.
    """

    folded = (notification_type or "").casefold()
    if folded == NOTIFICATION_TYPE_EMAIL.casefold():
        return user.email or ""
    if folded == NOTIFICATION_TYPE_SMS.casefold():
        return user.phone or ""
    return ""


class NotificationDispatchService:
    """Validate, render, deliver and record notifications."""

    def __init__(
        self,
        *,
        notifications: NotificationStore,
        preferences: PreferenceStore,
        users: UserDirectory,
        templates: TemplateService,
        providers: ProviderRegistry,
    ) -> None:
        self.notifications = notifications
        self.preferences = preferences
        self.users = users
        self.templates = templates
        self.providers = providers

    async def send(self, request: NotificationRequest) -> bool:
        """Deliver ``request`` now and record the attempt.

        Returns ``False`` without writing a row when the user is unknown, the
        preference is disabled, no provider handles the type or no recipient can
        be resolved. Provider failures are recorded as ``Failed`` rows.
        """

        try:
            return await self._send(request)
        except Exception:
            logger.exception(
                "Unexpected error sending notification to user %s", request.user_id
            )
            return False

    async def send_bulk(self, requests: Iterable[NotificationRequest]) -> bool:
        """Send every request concurrently; ``True`` only when all succeeded."""

        results = await asyncio.gather(*(self.send(request) for request in requests))
        return all(results)

    async def queue(self, request: NotificationRequest) -> Notification:
        """Store ``request`` as ``Pending`` for the background processor."""

        user = self.users.get(request.user_id)
        if user is None:
            raise UserNotFoundError(request.user_id)

        recipient = request.recipient or default_recipient(user, request.type)
        if not recipient:
            raise RecipientNotResolvedError(request.user_id, request.type)

        notification = Notification(
            id=None,
            user_id=request.user_id,
            type=self._stored_type(request.type),
            subject=request.subject or "",
            content=request.content or "",
            recipient=recipient,
            status=NotificationStatus.PENDING,
            created_at=now_utc(),
            attempts=0,
            template_id=request.template_id,
            template_data=normalize_template_data(request.template_data),
            priority=NotificationPriority.parse(request.priority),
        )
        saved = self.notifications.create(notification)
        logger.info(
            "Notification %s queued for user %s (%s)", saved.id, saved.user_id, saved.type
        )
        return saved

    def get_user_notifications(
        self,
        user_id: int,
        *,
        page: int = 1,
        page_size: int = 20,
        status: NotificationStatus | None = None,
        notification_type: str | None = None,
    ) -> Sequence[Notification]:
        return self.notifications.list_for_user(
            user_id,
            page=max(page, 1),
            page_size=max(page_size, 1),
            status=status,
            notification_type=self._stored_type(notification_type)
            if notification_type
            else None,
        )

    def get_notification(self, notification_id: int) -> Notification | None:
        return self.notifications.get(notification_id)

    def mark_read(self, notification_id: int, user_id: int) -> bool:
        """Mark the notification as read when it belongs to ``user_id``."""

        return self.notifications.mark_as_read(notification_id, user_id=user_id)

    def get_stats(self, user_id: int) -> NotificationStats:
        return self.notifications.get_stats(user_id)

    def resolve_provider(self, notification_type: str) -> NotificationProvider | None:
        return self.providers.resolve(notification_type)

    def resolve_content(
        self,
        *,
        notification_type: str,
        subject: str,
        content: str,
        template_id: str | None,
        template_data: Mapping[str, Any] | None,
    ) -> tuple[str, str]:
        """Return ``(subject, content)``, rendered from the template when possible.

        Template errors are logged and the literal subject and content are kept.
        """

        if not template_id or template_data is None:
            return subject, content

        try:
            rendered_content = self.templates.render(template_id, template_data)
            rendered_subject = subject
            if not rendered_subject:
                rendered_subject = (
                    self.templates.render_subject(
                        template_id, notification_type, template_data
                    )
                    or ""
                )
        except Exception as exc:
            logger.error("Error rendering template %s: %s", template_id, exc)
            return subject, content
        return rendered_subject, rendered_content

    @staticmethod
    def build_metadata(
        user: User,
        *,
        priority: NotificationPriority,
        notification: Notification | None = None,
    ) -> dict[str, Any]:
        metadata: dict[str, Any] = {}
        if notification is not None and notification.id is not None:
            metadata["notificationId"] = notification.id
        metadata["userId"] = user.id
        metadata["userName"] = user.name
        metadata["userEmail"] = user.email
        metadata["priority"] = NotificationPriority.parse(priority).label
        if notification is not None:
            if notification.created_at is not None:
                metadata["createdAt"] = notification.created_at.isoformat()
            metadata["attempts"] = notification.attempts + 1
        else:
            metadata["timestamp"] = now_utc().isoformat()
        return metadata

    async def _send(self, request: NotificationRequest) -> bool:
        user = self.users.get(request.user_id)
        if user is None:
            logger.warning("User not found: %s", request.user_id)
            return False

        notification_type = self._stored_type(request.type)
        event_type = request.event_type
        if not self.preferences.is_enabled(request.user_id, notification_type, event_type):
            logger.info(
                "Notification disabled by user preference. User: %s, Type: %s, Event: %s",
                request.user_id,
                notification_type,
                event_type,
            )
            return False

        provider = self.resolve_provider(request.type)
        if provider is None:
            logger.error("No provider found for notification type: %s", request.type)
            return False

        subject, content = self.resolve_content(
            notification_type=notification_type,
            subject=request.subject or "",
            content=request.content or "",
            template_id=request.template_id,
            template_data=request.template_data,
        )

        recipient = request.recipient or default_recipient(user, request.type)
        if not recipient:
            logger.warning(
                "No recipient found for user %s and type %s", request.user_id, request.type
            )
            return False

        priority = NotificationPriority.parse(request.priority)
        message = NotificationMessage(
            recipient=recipient,
            subject=subject,
            content=content,
            metadata=self.build_metadata(user, priority=priority),
        )
        result = await provider.send(message)

        self.notifications.create(
            Notification(
                id=None,
                user_id=request.user_id,
                type=notification_type,
                subject=subject,
                content=content,
                recipient=recipient,
                status=NotificationStatus.SENT if result.is_success else NotificationStatus.FAILED,
                created_at=now_utc(),
                sent_at=result.sent_at if result.is_success else None,
                attempts=1,
                error_message=result.error_message,
                template_id=request.template_id,
                template_data=normalize_template_data(request.template_data),
                priority=priority,
            )
        )

        if result.is_success:
            logger.info(
                "Notification sent successfully. User: %s, Type: %s, Recipient: %s",
                request.user_id,
                notification_type,
                recipient,
            )
        else:
            logger.warning(
                "Notification failed. User: %s, Type: %s, Error: %s",
                request.user_id,
                notification_type,
                result.error_message,
            )
        return result.is_success

    @staticmethod
    def _stored_type(notification_type: str) -> str:
        return canonical_type(notification_type) or notification_type


__all__ = ["NotificationDispatchService", "default_recipient"]

"""Email channel backed by SendGrid, SMTP or a local simulation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import partial
from typing import Any

import anyio

from app.config import Settings
from app.domain.entities import (
    NOTIFICATION_TYPE_EMAIL,
    NotificationMessage,
    NotificationResult,
)
from app.domain.providers import NotificationProvider
from app.infrastructure.email import EmailDeliveryError, send_sendgrid_email, send_smtp_email
from app.utils import now_utc, to_ticks

logger = logging.getLogger(__name__)

TRANSPORT_SENDGRID = "sendgrid"
TRANSPORT_SMTP = "smtp"
TRANSPORT_SIMULATED = "simulated"

HTML_MARKERS = ("<html>", "<body>", "<div>", "<p>", "<br>", "</")


def is_html_content(content: str) -> bool:
    """Return ``True`` when ``content`` looks like an HTML body."""

    lowered = (content or "").lower()
    return any(marker in lowered for marker in HTML_MARKERS)


def metadata_headers(metadata: Mapping[str, Any] | None) -> dict[str, str]:
    """Map message metadata to ``X-Custom-<key>`` mail headers."""

    return {
        f"X-Custom-{key}": str(value)
        for key, value in (metadata or {}).items()
        if value is not None
    }


class EmailNotificationProvider(NotificationProvider):
    type = NOTIFICATION_TYPE_EMAIL

    def __init__(self, settings: Settings, *, simulated_delay: float = 0.2) -> None:
        self.settings = settings
        self.simulated_delay = simulated_delay

    @property
    def transport(self) -> str:
        if self.settings.sendgrid_configured:
            return TRANSPORT_SENDGRID
        if self.settings.smtp_configured:
            return TRANSPORT_SMTP
        return TRANSPORT_SIMULATED

    async def send(self, message: NotificationMessage) -> NotificationResult:
        transport = self.transport
        try:
            if transport == TRANSPORT_SIMULATED:
                logger.info(
                    "Mail transport not configured. Simulating email send to %s with subject: %s",
                    message.recipient,
                    message.subject,
                )
                await anyio.sleep(self.simulated_delay)
                return NotificationResult.success(f"simulated_email_{to_ticks(now_utc())}")

            is_html = is_html_content(message.content)
            headers = metadata_headers(message.metadata)
            if transport == TRANSPORT_SENDGRID:
                sender = send_sendgrid_email
            else:
                sender = send_smtp_email
            external_id = await anyio.to_thread.run_sync(
                partial(
                    sender,
                    self.settings,
                    recipient=message.recipient,
                    subject=message.subject,
                    content=message.content,
                    is_html=is_html,
                    headers=headers,
                )
            )
            logger.info(
                "Email sent successfully to %s with subject: %s",
                message.recipient,
                message.subject,
            )
            return NotificationResult.success(external_id or f"email_{to_ticks(now_utc())}")
        except EmailDeliveryError as exc:
            logger.error("Error sending email to %s: %s", message.recipient, exc)
            return NotificationResult.failure(str(exc))
        except Exception as exc:
            logger.exception("Unexpected error sending email to %s", message.recipient)
            return NotificationResult.failure(f"Error: {exc}")


__all__ = ["EmailNotificationProvider", "is_html_content", "metadata_headers"]

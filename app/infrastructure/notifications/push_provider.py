"""Push channel producing FCM style payloads."""

from __future__ import annotations

import json
import logging
import random
from typing import Any

import anyio

from app.domain.entities import NOTIFICATION_TYPE_PUSH, NotificationMessage, NotificationResult
from app.domain.providers import NotificationProvider
from app.utils import now_utc, to_ticks

logger = logging.getLogger(__name__)

MIN_DEVICE_TOKEN_LENGTH = 32
_TOKEN_EXTRA_CHARACTERS = frozenset("_-:")


def is_valid_device_token(token: str | None) -> bool:
    if not token or not token.strip() or len(token) < MIN_DEVICE_TOKEN_LENGTH:
        return False
    return all(char.isalnum() or char in _TOKEN_EXTRA_CHARACTERS for char in token)


def build_push_payload(message: NotificationMessage) -> dict[str, Any]:
    """Return the provider payload for ``message``."""

    return {
        "notification": {
            "title": message.subject,
            "body": message.content,
            "icon": "default",
            "sound": "default",
        },
        "data": dict(message.metadata or {}),
        "timestamp": int(now_utc().timestamp()),
    }


class PushNotificationProvider(NotificationProvider):
    type = NOTIFICATION_TYPE_PUSH

    def __init__(
        self,
        *,
        enabled: bool = False,
        failure_rate: float = 0.03,
        delivery_delay: float = 0.3,
        rng: random.Random | None = None,
    ) -> None:
        self.enabled = enabled
        self.failure_rate = failure_rate
        self.delivery_delay = delivery_delay
        self.rng = rng or random.Random()

    async def send(self, message: NotificationMessage) -> NotificationResult:
        try:
            if not self.enabled:
                logger.warning(
                    "Push notification provider is disabled. Skipping push to %s",
                    message.recipient,
                )
                return NotificationResult.failure("Push notification provider is disabled")

            if not is_valid_device_token(message.recipient):
                logger.warning("Invalid device token format: %s", message.recipient)
                return NotificationResult.failure("Invalid device token format")

            payload = build_push_payload(message)
            logger.debug("Push payload for %s: %s", message.recipient, json.dumps(payload, default=str))

            await anyio.sleep(self.delivery_delay)

            if self.rng.random() < self.failure_rate:
                error_message = "Simulated push notification service failure"
                logger.error(
                    "Simulated push notification failure for %s: %s",
                    message.recipient,
                    error_message,
                )
                return NotificationResult.failure(error_message)

            logger.info(
                "Push notification sent successfully to device %s with title: %s",
                message.recipient,
                message.subject,
            )
            suffix = self.rng.randint(10000, 99999)
            return NotificationResult.success(f"push_{to_ticks(now_utc())}_{suffix}")
        except Exception as exc:
            logger.exception("Unexpected error sending push notification to %s", message.recipient)
            return NotificationResult.failure(f"Error: {exc}")


__all__ = ["PushNotificationProvider", "build_push_payload", "is_valid_device_token"]

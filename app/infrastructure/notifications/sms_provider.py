"""SMS channel simulating an external gateway."""

from __future__ import annotations

import logging
import random
import re

import anyio

from app.domain.entities import NOTIFICATION_TYPE_SMS, NotificationMessage, NotificationResult
from app.domain.providers import NotificationProvider
from app.utils import now_utc, to_ticks

logger = logging.getLogger(__name__)

SMS_MAX_LENGTH = 160
_PHONE_SEPARATORS = re.compile(r"[\s\-()]")
_PHONE_PATTERN = re.compile(r"^\+\d{10,15}$")


def is_valid_phone_number(phone_number: str | None) -> bool:
    """Accept ``+`` followed by 10 to 15 digits once separators are removed."""

    if not phone_number or not phone_number.strip():
        return False
    cleaned = _PHONE_SEPARATORS.sub("", phone_number)
    return bool(_PHONE_PATTERN.match(cleaned))


def truncate_content(content: str, max_length: int = SMS_MAX_LENGTH) -> str:
    if len(content) <= max_length:
        return content
    return content[: max_length - 3] + "..."


class SmsNotificationProvider(NotificationProvider):
    type = NOTIFICATION_TYPE_SMS

    def __init__(
        self,
        *,
        enabled: bool = False,
        api_key: str | None = None,
        api_secret: str | None = None,
        failure_rate: float = 0.05,
        simulated_delay: float = 0.3,
        delivery_delay: float = 0.5,
        rng: random.Random | None = None,
    ) -> None:
        self.enabled = enabled
        self.api_key = api_key
        self.api_secret = api_secret
        self.failure_rate = failure_rate
        self.simulated_delay = simulated_delay
        self.delivery_delay = delivery_delay
        self.rng = rng or random.Random()

    @property
    def configured(self) -> bool:
        return bool(self.enabled and self.api_key and self.api_secret)

    async def send(self, message: NotificationMessage) -> NotificationResult:
        try:
            if not self.configured:
                logger.info(
                    "SMS credentials not configured or disabled. Simulating SMS send to %s: %s",
                    message.recipient,
                    truncate_content(message.content or ""),
                )
                await anyio.sleep(self.simulated_delay)
                return NotificationResult.success(f"simulated_sms_{to_ticks(now_utc())}")

            if not is_valid_phone_number(message.recipient):
                logger.warning("Invalid phone number format: %s", message.recipient)
                return NotificationResult.failure("Invalid phone number format")

            await anyio.sleep(self.delivery_delay)

            if self.rng.random() < self.failure_rate:
                error_message = "Simulated SMS provider failure"
                logger.error(
                    "Simulated SMS failure for %s: %s", message.recipient, error_message
                )
                return NotificationResult.failure(error_message)

            logger.info(
                "SMS sent successfully to %s: %s",
                message.recipient,
                truncate_content(message.content or ""),
            )
            suffix = self.rng.randint(1000, 9999)
            return NotificationResult.success(f"sms_{to_ticks(now_utc())}_{suffix}")
        except Exception as exc:
            logger.exception("Unexpected error sending SMS to %s", message.recipient)
            return NotificationResult.failure(f"Error: {exc}")


__all__ = ["SmsNotificationProvider", "is_valid_phone_number", "truncate_content"]

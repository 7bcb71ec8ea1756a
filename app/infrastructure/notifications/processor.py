"""Background worker delivering queued and retryable notifications."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager

from app.application.use_cases.notifications import NotificationDispatchService
from app.domain.entities import Notification, NotificationMessage, NotificationStatus

logger = logging.getLogger(__name__)

ScopeFactory = Callable[[], AbstractContextManager[NotificationDispatchService]]


class NotificationProcessor:
    """Poll the notification store and deliver due records.

    Every cycle opens a fresh scope through ``scope_factory`` so the storage
    session lives only for the duration of one batch.
    """

    def __init__(
        self,
        scope_factory: ScopeFactory,
        *,
        interval: float = 30.0,
        batch_size: int = 50,
        max_attempts: int = 3,
        error_backoff: float = 60.0,
    ) -> None:
        self.scope_factory = scope_factory
        self.interval = interval
        self.batch_size = batch_size
        self.max_attempts = max_attempts
        self.error_backoff = error_backoff
        self._stop_event: asyncio.Event | None = None
        self._task: asyncio.Task | None = None

    async def run_cycle(self) -> int:
        """Process one batch and return the number of records handled."""

        with self.scope_factory() as service:
            batch = self._collect_batch(service)
            if not batch:
                return 0

            logger.info("Processing %d pending notifications", len(batch))
            await asyncio.gather(
                *(self._process_notification(service, notification) for notification in batch)
            )
            logger.info("Processed %d notifications", len(batch))
            return len(batch)

    async def run(self, stop_event: asyncio.Event) -> None:
        logger.info("Notification processor started")
        while not stop_event.is_set():
            try:
                await self.run_cycle()
                delay = self.interval
            except Exception:
                logger.exception("Error in notification processor cycle")
                delay = self.error_backoff
            await self._wait(stop_event, delay)
        logger.info("Notification processor stopped")

    def start(self) -> asyncio.Task:
        if self._task is not None and not self._task.done():
            return self._task
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self.run(self._stop_event))
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        if self._stop_event is not None:
            self._stop_event.set()
        await self._task
        self._task = None
        self._stop_event = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def _collect_batch(self, service: NotificationDispatchService) -> Sequence[Notification]:
        pending = service.notifications.list_pending(self.batch_size)
        retryable = service.notifications.list_retryable(self.max_attempts)

        batch: list[Notification] = []
        seen: set[int] = set()
        for notification in [*pending, *retryable]:
            if notification.id in seen:
                continue
            seen.add(notification.id)
            batch.append(notification)
        return batch

    async def _process_notification(
        self, service: NotificationDispatchService, notification: Notification
    ) -> None:
        store = service.notifications
        try:
            provider = service.resolve_provider(notification.type)
            if provider is None:
                store.update_status(
                    notification.id,
                    NotificationStatus.FAILED,
                    f"No provider found for type: {notification.type}",
                )
                return

            user = service.users.get(notification.user_id)
            if user is None:
                store.update_status(
                    notification.id, NotificationStatus.FAILED, "User not found"
                )
                return

            subject, content = service.resolve_content(
                notification_type=notification.type,
                subject=notification.subject,
                content=notification.content,
                template_id=notification.template_id,
                template_data=notification.template_data,
            )
            message = NotificationMessage(
                recipient=notification.recipient,
                subject=subject,
                content=content,
                metadata=service.build_metadata(
                    user, priority=notification.priority, notification=notification
                ),
            )
            result = await provider.send(message)

            if result.is_success:
                store.update_status(notification.id, NotificationStatus.SENT)
                logger.info("Notification %s sent successfully", notification.id)
            else:
                store.update_status(
                    notification.id, NotificationStatus.FAILED, result.error_message
                )
                logger.warning(
                    "Notification %s failed: %s", notification.id, result.error_message
                )
        except Exception as exc:
            logger.exception("Error processing notification %s", notification.id)
            try:
                store.update_status(notification.id, NotificationStatus.FAILED, str(exc))
            except Exception:
                logger.exception(
                    "Could not record failure for notification %s", notification.id
                )

    @staticmethod
    async def _wait(stop_event: asyncio.Event, timeout: float) -> None:
        try:
            await asyncio.wait_for(stop_event.wait(), timeout)
        except asyncio.TimeoutError:
            pass


__all__ = ["NotificationProcessor"]

"""Assemble providers, services and the processor from settings."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    JokeCreatedNotifier,
    NotificationDispatchService,
    TemplateService,
)
from app.config import Settings, get_settings
from app.domain.providers import ProviderRegistry
from app.infrastructure.database import SessionLocal
from app.infrastructure.repositories import (
    NotificationPreferenceRepository,
    NotificationRepository,
    NotificationTemplateRepository,
    UserRepository,
)

from .email_provider import EmailNotificationProvider
from .processor import NotificationProcessor
from .push_provider import PushNotificationProvider
from .sms_provider import SmsNotificationProvider


def build_provider_registry(settings: Settings | None = None) -> ProviderRegistry:
    settings = settings or get_settings()

    def delay(seconds: float) -> float:
        return seconds if settings.notification_simulated_latency else 0.0

    return ProviderRegistry(
        [
            EmailNotificationProvider(settings, simulated_delay=delay(0.2)),
            SmsNotificationProvider(
                enabled=settings.sms_enabled,
                api_key=settings.sms_api_key,
                api_secret=settings.sms_api_secret,
                failure_rate=settings.sms_failure_rate,
                simulated_delay=delay(0.3),
                delivery_delay=delay(0.5),
            ),
            PushNotificationProvider(
                enabled=settings.push_enabled,
                failure_rate=settings.push_failure_rate,
                delivery_delay=delay(0.3),
            ),
        ]
    )


def build_dispatch_service(
    session: Session,
    settings: Settings | None = None,
    *,
    providers: ProviderRegistry | None = None,
) -> NotificationDispatchService:
    """Return a dispatch service whose stores share ``session``."""

    return NotificationDispatchService(
        notifications=NotificationRepository(session),
        preferences=NotificationPreferenceRepository(session),
        users=UserRepository(session),
        templates=TemplateService(NotificationTemplateRepository(session)),
        providers=providers or build_provider_registry(settings),
    )


def build_joke_notifier(
    session: Session, settings: Settings | None = None
) -> JokeCreatedNotifier:
    return JokeCreatedNotifier(
        build_dispatch_service(session, settings), UserRepository(session)
    )


@contextmanager
def dispatch_scope(
    settings: Settings | None = None,
    *,
    providers: ProviderRegistry | None = None,
    session_factory: Callable[[], Session] = SessionLocal,
) -> Iterator[NotificationDispatchService]:
    """Yield a dispatch service bound to a new session, closed on exit."""

    session = session_factory()
    try:
        yield build_dispatch_service(session, settings, providers=providers)
    finally:
        session.close()


def build_processor(
    settings: Settings | None = None,
    *,
    session_factory: Callable[[], Session] = SessionLocal,
) -> NotificationProcessor:
    settings = settings or get_settings()
    providers = build_provider_registry(settings)
    return NotificationProcessor(
        lambda: dispatch_scope(
            settings, providers=providers, session_factory=session_factory
        ),
        interval=settings.notification_processor_interval_seconds,
        batch_size=settings.notification_processor_batch_size,
        max_attempts=settings.notification_processor_max_attempts,
        error_backoff=settings.notification_processor_error_backoff_seconds,
    )


__all__ = [
    "build_dispatch_service",
    "build_joke_notifier",
    "build_processor",
    "build_provider_registry",
    "dispatch_scope",
]

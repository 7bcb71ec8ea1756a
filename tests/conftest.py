"""Shared fixtures for the notification service test-suite."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["NOTIFICATION_PROCESSOR_ENABLED"] = "false"
os.environ["NOTIFICATION_SIMULATED_LATENCY"] = "false"
for _name in ("SENDGRID_API_KEY", "SENDGRID_SENDER", "SMTP_USERNAME", "SMTP_PASSWORD"):
    os.environ.pop(_name, None)

from sqlalchemy.orm import sessionmaker

from app.application.use_cases.notifications import (
    NotificationDispatchService,
    TemplateService,
)
from app.domain.entities import ADMIN_ROLE, NotificationResult, User
from app.domain.providers import NotificationProvider, ProviderRegistry
from app.infrastructure.database import build_engine, initialize_database
from app.infrastructure.repositories import (
    InMemoryNotificationRepository,
    InMemoryPreferenceRepository,
    InMemoryTemplateRepository,
    InMemoryUserRepository,
)
from app.infrastructure.template_seeder import default_templates


class RecordingProvider(NotificationProvider):
    """Provider double that records every message it is asked to deliver."""

    def __init__(self, notification_type: str, *, results=None, error=None) -> None:
        self.type = notification_type
        self.results = list(results or [])
        self.error = error
        self.messages = []

    async def send(self, message):
        self.messages.append(message)
        if self.error is not None:
            raise self.error
        if self.results:
            return self.results.pop(0)
        return NotificationResult.success(f"{self.type.lower()}-{len(self.messages)}")


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def users():
    return InMemoryUserRepository(
        [
            User(id=1, name="Ana", email="ana@example.com", phone="+573001234567"),
            User(id=2, name="Admin Uno", email="admin1@example.com", role=ADMIN_ROLE),
            User(id=3, name="Admin Dos", email="admin2@example.com", role="admin"),
            User(id=4, name="Luis", email="luis@example.com"),
        ]
    )


@pytest.fixture
def notifications():
    return InMemoryNotificationRepository()


@pytest.fixture
def preferences():
    return InMemoryPreferenceRepository()


@pytest.fixture
def templates():
    return InMemoryTemplateRepository(default_templates())


@pytest.fixture
def email_provider():
    return RecordingProvider("Email")


@pytest.fixture
def sms_provider():
    return RecordingProvider("SMS")


@pytest.fixture
def service(notifications, preferences, users, templates, email_provider, sms_provider):
    return NotificationDispatchService(
        notifications=notifications,
        preferences=preferences,
        users=users,
        templates=TemplateService(templates),
        providers=ProviderRegistry([email_provider, sms_provider]),
    )


@pytest.fixture
def recording_provider():
    """Factory building extra provider doubles inside a test."""

    return RecordingProvider


@pytest.fixture
def db_session():
    engine = build_engine("sqlite://")
    initialize_database(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()

"""Tests for the joke created event bridge."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from app.application.use_cases.jokes import create_joke
from app.application.use_cases.notifications import JokeCreatedNotifier
from app.domain.entities import (
    ADMIN_ROLE,
    Joke,
    NotificationPriority,
    NotificationStatus,
    User,
)
from app.infrastructure.notifications import build_joke_notifier
from app.infrastructure.repositories import (
    JokeRepository,
    NotificationRepository,
    UserRepository,
)
from app.infrastructure.template_seeder import seed_notification_templates

pytestmark = pytest.mark.anyio


def _joke(author_id: int = 1) -> Joke:
    return Joke(
        id=10,
        text="Un chiste bastante gracioso",
        author_id=author_id,
        origin="Local",
        created_at=datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc),
    )


class ExplodingDispatcher:
    async def send(self, request):
        raise RuntimeError("dispatcher down")

    async def send_bulk(self, requests):
        raise RuntimeError("dispatcher down")


class ExplodingNotifier:
    async def handle_joke_created(self, joke, author=None):
        raise RuntimeError("handler down")


async def test_joke_created_notifies_author_and_admins(
    service, users, notifications, email_provider
):
    notifier = JokeCreatedNotifier(service, users)

    await notifier.handle_joke_created(_joke())

    recipients = sorted(message.recipient for message in email_provider.messages)
    assert recipients == ["admin1@example.com", "admin2@example.com", "ana@example.com"]

    author_message = next(
        message for message in email_provider.messages if message.recipient == "ana@example.com"
    )
    assert author_message.subject == "Tu chiste ha sido publicado exitosamente"
    assert "Un chiste bastante gracioso" in author_message.content
    assert "01/05/2024 12:30" in author_message.content

    [author_row] = notifications.list_for_user(1)
    assert author_row.priority is NotificationPriority.NORMAL
    assert author_row.template_id == "chiste_created_author"
    [admin_row] = notifications.list_for_user(2)
    assert admin_row.priority is NotificationPriority.LOW
    assert admin_row.template_data["adminName"] == "Admin Uno"


async def test_missing_author_sends_nothing(service, users, email_provider):
    notifier = JokeCreatedNotifier(service, users)

    await notifier.handle_joke_created(_joke(author_id=999))

    assert email_provider.messages == []


async def test_dispatcher_failures_never_escape(users):
    notifier = JokeCreatedNotifier(ExplodingDispatcher(), users)

    await notifier.handle_joke_created(_joke())


async def test_author_notification_failure_does_not_block_admins(
    service, users, notifications, email_provider
):
    email_provider.error = RuntimeError("smtp down")
    notifier = JokeCreatedNotifier(service, users)

    await notifier.handle_joke_created(_joke())

    assert len(email_provider.messages) == 3
    assert notifications.get_stats(1).total == 0


def _seed_users(session) -> tuple[User, User]:
    repository = UserRepository(session)
    author = repository.create(User(id=None, name="Ana", email="ana@example.com"))
    admin = repository.create(
        User(id=None, name="Admin", email="admin@example.com", role=ADMIN_ROLE)
    )
    return author, admin


async def test_create_joke_notifies_through_database(db_session):
    author, admin = _seed_users(db_session)
    seed_notification_templates(db_session)

    joke = await create_joke(
        db_session,
        author_id=author.id,
        text="  ¿Por qué el libro de matemáticas estaba triste?  ",
        notifier=build_joke_notifier(db_session),
    )

    assert joke.id is not None
    assert joke.origin == "Local"
    assert JokeRepository(db_session).get(joke.id).text.startswith("¿Por qué")

    repository = NotificationRepository(db_session)
    [author_row] = repository.list_for_user(author.id)
    assert author_row.status is NotificationStatus.SENT
    assert "Ana" in author_row.content
    [admin_row] = repository.list_for_user(admin.id)
    assert admin_row.template_id == "chiste_created_admin"


async def test_create_joke_survives_notifier_errors(db_session):
    author, _ = _seed_users(db_session)

    joke = await create_joke(
        db_session,
        author_id=author.id,
        text="Un chiste que sobrevive a todo",
        notifier=ExplodingNotifier(),
    )

    assert JokeRepository(db_session).get(joke.id) is not None


@pytest.mark.parametrize(
    ("text", "author_id", "message"),
    [
        ("   ", 1, "El texto del chiste es requerido"),
        ("corto", 1, "al menos 10"),
        ("x" * 1001, 1, "no puede exceder 1000"),
        ("Un chiste sin autor valido", 999, "Usuario no encontrado"),
    ],
)
async def test_create_joke_validation(db_session, text, author_id, message):
    _seed_users(db_session)

    with pytest.raises(ValueError, match=message):
        await create_joke(db_session, author_id=author_id, text=text)

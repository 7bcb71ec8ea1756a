"""Tests for the SQLAlchemy repositories."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import inspect as sa_inspect

from app.domain.entities import (
    ADMIN_ROLE,
    Notification,
    NotificationPriority,
    NotificationStatus,
    NotificationTemplate,
    User,
)
from app.infrastructure.models import NotificationModel
from app.infrastructure.repositories import (
    NotificationPreferenceRepository,
    NotificationRepository,
    NotificationTemplateRepository,
    UserRepository,
)
from app.infrastructure.template_seeder import seed_notification_templates

BASE_TIME = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def user(db_session) -> User:
    return UserRepository(db_session).create(
        User(id=None, name="Ana", email="Ana@Example.com", phone="+573001234567")
    )


def _notification(user_id: int, **overrides) -> Notification:
    values = {
        "id": None,
        "user_id": user_id,
        "type": "Email",
        "subject": "Hola",
        "content": "Texto",
        "recipient": "ana@example.com",
        "created_at": BASE_TIME,
    }
    values.update(overrides)
    return Notification(**values)


def test_user_repository_lookups(db_session, user):
    repository = UserRepository(db_session)
    admin = repository.create(
        User(id=None, name="Admin", email="admin@example.com", role=ADMIN_ROLE)
    )
    repository.create(User(id=None, name="Otro admin", email="otro@example.com", role="admin"))

    assert repository.get(user.id).phone == "+573001234567"
    assert repository.get_by_email("ana@example.com").id == user.id
    assert repository.get(9999) is None
    assert [item.email for item in repository.list_admins()] == [
        admin.email,
        "otro@example.com",
    ]


def test_notification_round_trip(db_session, user):
    repository = NotificationRepository(db_session)

    created = repository.create(
        _notification(
            user.id,
            template_id="welcome_user",
            template_data={"userName": "Ana"},
            priority=NotificationPriority.HIGH,
        )
    )
    stored = repository.get(created.id)

    assert stored.status is NotificationStatus.PENDING
    assert stored.priority is NotificationPriority.HIGH
    assert stored.template_data == {"userName": "Ana"}
    assert stored.created_at == BASE_TIME
    assert stored.created_at.tzinfo is not None


def test_list_pending_orders_by_priority_then_age(db_session, user):
    repository = NotificationRepository(db_session)
    repository.create(_notification(user.id, subject="vieja-baja", priority=NotificationPriority.LOW))
    repository.create(
        _notification(
            user.id,
            subject="nueva-alta",
            priority=NotificationPriority.HIGH,
            created_at=BASE_TIME + timedelta(minutes=5),
        )
    )
    repository.create(
        _notification(user.id, subject="vieja-alta", priority=NotificationPriority.HIGH)
    )
    repository.create(
        _notification(user.id, subject="enviada", status=NotificationStatus.SENT)
    )

    assert [item.subject for item in repository.list_pending()] == [
        "vieja-baja",
        "vieja-alta",
        "nueva-alta",
    ]
    assert len(repository.list_pending(batch_size=1)) == 1


def test_notification_model_loads_without_joined_user():
    assert not sa_inspect(NotificationModel).relationships


def test_list_retryable_respects_attempt_bound(db_session, user):
    repository = NotificationRepository(db_session)
    retry = repository.create(
        _notification(user.id, status=NotificationStatus.FAILED, attempts=2)
    )
    repository.create(_notification(user.id, status=NotificationStatus.FAILED, attempts=3))

    assert [item.id for item in repository.list_retryable(max_attempts=3)] == [retry.id]


def test_update_status_tracks_attempts_and_delivery(db_session, user):
    repository = NotificationRepository(db_session)
    created = repository.create(_notification(user.id))

    assert repository.update_status(created.id, NotificationStatus.FAILED, "timeout") is True
    failed = repository.get(created.id)
    assert (failed.status, failed.attempts, failed.error_message) == (
        NotificationStatus.FAILED,
        1,
        "timeout",
    )
    assert failed.sent_at is None

    repository.update_status(created.id, NotificationStatus.SENT)
    sent = repository.get(created.id)
    assert sent.status is NotificationStatus.SENT
    assert sent.attempts == 2
    assert sent.error_message is None
    assert sent.sent_at is not None

    assert repository.update_status(9999, NotificationStatus.SENT) is False


def test_mark_as_read_only_for_owner(db_session, user):
    repository = NotificationRepository(db_session)
    created = repository.create(_notification(user.id))

    assert repository.mark_as_read(created.id, user_id=user.id + 1) is False
    assert repository.get(created.id).read_at is None
    assert repository.mark_as_read(created.id, user_id=user.id) is True
    assert repository.get(created.id).read_at is not None


def test_stats_and_history(db_session, user):
    repository = NotificationRepository(db_session)
    for offset, status in enumerate(
        (
            NotificationStatus.SENT,
            NotificationStatus.SENT,
            NotificationStatus.FAILED,
            NotificationStatus.PENDING,
        )
    ):
        repository.create(
            _notification(
                user.id,
                subject=f"n{offset}",
                status=status,
                type="SMS" if offset == 3 else "Email",
                created_at=BASE_TIME + timedelta(minutes=offset),
            )
        )

    stats = repository.get_stats(user.id)
    assert (stats.total, stats.unread, stats.pending, stats.failed) == (4, 2, 1, 1)
    assert repository.get_stats(9999).total == 0

    history = repository.list_for_user(user.id, page=1, page_size=3)
    assert [item.subject for item in history] == ["n3", "n2", "n1"]
    assert [item.subject for item in repository.list_for_user(user.id, page=2, page_size=3)] == ["n0"]
    assert [
        item.subject
        for item in repository.list_for_user(user.id, status=NotificationStatus.SENT)
    ] == ["n1", "n0"]
    assert [
        item.subject for item in repository.list_for_user(user.id, notification_type="SMS")
    ] == ["n3"]


def test_preference_upsert(db_session, user):
    repository = NotificationPreferenceRepository(db_session)

    assert repository.is_enabled(user.id, "Email", "General") is True

    created = repository.set_preference(user.id, "Email", "General", False)
    updated = repository.set_preference(user.id, "Email", "General", True)

    assert created.id == updated.id
    assert updated.is_enabled is True
    assert updated.updated_at is not None
    assert repository.is_enabled(user.id, "Email", "General") is True
    assert len(repository.list_for_user(user.id)) == 1
    assert repository.get_preference(user.id, "SMS", "General") is None


def test_template_repository_crud(db_session):
    repository = NotificationTemplateRepository(db_session)
    created = repository.create(
        NotificationTemplate(
            id=None,
            template_id="promo",
            name="Promo",
            type="SMS",
            subject="",
            content="Oferta para {{userName}}",
        )
    )

    assert repository.get_by_template_id("promo", "SMS").id == created.id
    assert repository.get_by_template_id("promo", "Email") is None

    created.is_active = False
    updated = repository.update(created)
    assert updated.is_active is False

    assert [item.type for item in repository.list_by_template_id("promo")] == ["SMS"]
    repository.delete(created.id)
    assert repository.count() == 0


def test_seed_notification_templates_runs_once(db_session):
    assert seed_notification_templates(db_session) == 4
    assert seed_notification_templates(db_session) == 0

    repository = NotificationTemplateRepository(db_session)
    names = [template.template_id for template in repository.list_by_type("Email")]
    assert sorted(names) == [
        "chiste_created_admin",
        "chiste_created_author",
        "system_maintenance",
        "welcome_user",
    ]

"""Tests for the notification dispatch service."""

from __future__ import annotations

import pytest

from app.application.use_cases.notifications import (
    list_preferences,
    set_preference,
)
from app.domain.entities import (
    NotificationPriority,
    NotificationRequest,
    NotificationResult,
    NotificationStatus,
    NotificationTemplate,
)
from app.domain.exceptions import (
    NotificationError,
    RecipientNotResolvedError,
    UserNotFoundError,
)

pytestmark = pytest.mark.anyio


async def test_send_with_template_records_sent_notification(service, notifications, email_provider):
    request = NotificationRequest(
        user_id=1,
        type="Email",
        template_id="welcome_user",
        template_data={"userName": "Ana"},
    )

    assert await service.send(request) is True

    [stored] = notifications.list_for_user(1)
    assert stored.status is NotificationStatus.SENT
    assert stored.sent_at is not None
    assert stored.attempts == 1
    assert stored.recipient == "ana@example.com"
    assert stored.subject == "¡Bienvenido a RetoSquadmakers!"
    assert "¡Hola Ana!" in stored.content
    assert stored.template_data == {"userName": "Ana"}

    [message] = email_provider.messages
    assert message.metadata["userId"] == 1
    assert message.metadata["priority"] == "Normal"
    assert "timestamp" in message.metadata


async def test_send_renders_template_with_empty_data(service, notifications, templates):
    templates.create(
        NotificationTemplate(
            id=None,
            template_id="aviso_fijo",
            name="Aviso fijo",
            type="Email",
            subject="Aviso general",
            content="Contenido de plantilla",
        )
    )
    request = NotificationRequest(
        user_id=1, type="Email", template_id="aviso_fijo", template_data={}
    )

    assert await service.send(request) is True

    [stored] = notifications.list_for_user(1)
    assert stored.subject == "Aviso general"
    assert stored.content == "Contenido de plantilla"
    assert stored.template_data == {}


async def test_send_disabled_by_preference_writes_nothing(
    service, notifications, preferences, email_provider
):
    preferences.set_preference(1, "Email", "welcome_user", False)
    request = NotificationRequest(
        user_id=1,
        type="Email",
        template_id="welcome_user",
        template_data={"userName": "Ana"},
    )

    assert await service.send(request) is False
    assert notifications.get_stats(1).total == 0
    assert email_provider.messages == []


async def test_preference_only_applies_to_its_event(service, preferences):
    preferences.set_preference(1, "Email", "welcome_user", False)

    request = NotificationRequest(user_id=1, type="Email", subject="Hola", content="Texto")

    assert await service.send(request) is True


async def test_send_unknown_user_returns_false(service, notifications):
    request = NotificationRequest(user_id=999, type="Email", subject="Hola", content="Texto")

    assert await service.send(request) is False
    assert notifications.get(1) is None


async def test_send_selects_provider_case_insensitively(
    service, notifications, email_provider, sms_provider
):
    request = NotificationRequest(user_id=1, type="sMs", content="Codigo 1234")

    assert await service.send(request) is True

    assert email_provider.messages == []
    [message] = sms_provider.messages
    assert message.recipient == "+573001234567"
    assert notifications.list_for_user(1)[0].type == "SMS"


async def test_send_without_provider_writes_nothing(service, notifications):
    request = NotificationRequest(user_id=1, type="Push", recipient="x" * 40, content="Hola")

    assert await service.send(request) is False
    assert notifications.get_stats(1).total == 0


async def test_send_without_recipient_writes_nothing(service, notifications, sms_provider):
    request = NotificationRequest(user_id=4, type="SMS", content="Hola")

    assert await service.send(request) is False
    assert sms_provider.messages == []
    assert notifications.get_stats(4).total == 0


async def test_provider_failure_is_recorded(service, notifications, email_provider):
    email_provider.results = [NotificationResult.failure("SMTP Error: mailbox unavailable")]

    request = NotificationRequest(user_id=1, type="Email", subject="Hola", content="Texto")

    assert await service.send(request) is False
    [stored] = notifications.list_for_user(1)
    assert stored.status is NotificationStatus.FAILED
    assert stored.error_message == "SMTP Error: mailbox unavailable"
    assert stored.attempts == 1
    assert stored.sent_at is None


async def test_provider_exception_is_reported_as_false(service, email_provider):
    email_provider.error = RuntimeError("boom")

    request = NotificationRequest(user_id=1, type="Email", subject="Hola", content="Texto")

    assert await service.send(request) is False


async def test_template_error_falls_back_to_literal_content(service, notifications):
    request = NotificationRequest(
        user_id=1,
        type="Email",
        subject="Asunto literal",
        content="Contenido literal",
        template_id="does_not_exist",
        template_data={"userName": "Ana"},
    )

    assert await service.send(request) is True

    [stored] = notifications.list_for_user(1)
    assert stored.subject == "Asunto literal"
    assert stored.content == "Contenido literal"


async def test_send_bulk_reports_partial_failure(service, notifications):
    requests = [
        NotificationRequest(user_id=user_id, type="Email", subject="Hola", content="Texto")
        for user_id in (1, 2, 3, 4, 999)
    ]

    assert await service.send_bulk(requests) is False
    for user_id in (1, 2, 3, 4):
        [stored] = notifications.list_for_user(user_id)
        assert stored.status is NotificationStatus.SENT


async def test_send_bulk_all_successful(service):
    requests = [
        NotificationRequest(user_id=user_id, type="Email", subject="Hola", content="Texto")
        for user_id in (1, 2)
    ]

    assert await service.send_bulk(requests) is True
    assert await service.send_bulk([]) is True


async def test_queue_stores_pending_notification(service, email_provider):
    request = NotificationRequest(
        user_id=1,
        type="email",
        subject="Hola",
        content="Texto",
        priority=NotificationPriority.HIGH,
    )

    queued = await service.queue(request)

    assert queued.id is not None
    assert queued.status is NotificationStatus.PENDING
    assert queued.attempts == 0
    assert queued.type == "Email"
    assert queued.recipient == "ana@example.com"
    assert queued.priority is NotificationPriority.HIGH
    assert email_provider.messages == []


async def test_queue_unknown_user_raises(service):
    with pytest.raises(UserNotFoundError):
        await service.queue(NotificationRequest(user_id=999, type="SMS", content="Hola"))


async def test_queue_without_recipient_raises(service):
    with pytest.raises(RecipientNotResolvedError):
        await service.queue(NotificationRequest(user_id=1, type="Push", content="Hola"))


async def test_mark_read_requires_ownership(service):
    queued = await service.queue(
        NotificationRequest(user_id=1, type="Email", subject="Hola", content="Texto")
    )

    assert service.mark_read(queued.id, 2) is False
    assert service.get_notification(queued.id).read_at is None
    assert service.mark_read(queued.id, 1) is True
    assert service.get_notification(queued.id).read_at is not None
    assert service.mark_read(12345, 1) is False


async def test_stats_and_history_filters(service, email_provider):
    await service.send(NotificationRequest(user_id=1, type="Email", subject="Uno", content="1"))
    email_provider.results = [NotificationResult.failure("rechazado")]
    await service.send(NotificationRequest(user_id=1, type="Email", subject="Dos", content="2"))
    await service.queue(NotificationRequest(user_id=1, type="SMS", content="3"))

    stats = service.get_stats(1)
    assert (stats.total, stats.unread, stats.pending, stats.failed) == (3, 1, 1, 1)

    failed = service.get_user_notifications(1, status=NotificationStatus.FAILED)
    assert [notification.subject for notification in failed] == ["Dos"]
    sms = service.get_user_notifications(1, notification_type="sms")
    assert [notification.content for notification in sms] == ["3"]
    assert len(service.get_user_notifications(1, page=2, page_size=2)) == 1


async def test_set_preference_normalizes_type_and_event(preferences):
    preference = set_preference(
        preferences, user_id=1, notification_type="sms", event_type=None, is_enabled=False
    )

    assert preference.notification_type == "SMS"
    assert preference.event_type == "General"
    assert preferences.is_enabled(1, "SMS", "General") is False
    assert [item.id for item in list_preferences(preferences, user_id=1)] == [preference.id]


async def test_set_preference_rejects_unknown_type(preferences):
    with pytest.raises(NotificationError):
        set_preference(
            preferences, user_id=1, notification_type="fax", event_type=None, is_enabled=True
        )

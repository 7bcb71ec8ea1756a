"""Tests for the email, SMS and push delivery providers."""

from __future__ import annotations

import random

import pytest

from app.config import Settings
from app.domain.entities import NotificationMessage
from app.domain.providers import ProviderRegistry
from app.infrastructure.email import EmailDeliveryError
from app.infrastructure.notifications import (
    EmailNotificationProvider,
    PushNotificationProvider,
    SmsNotificationProvider,
    build_provider_registry,
    build_push_payload,
    is_html_content,
    is_valid_device_token,
    is_valid_phone_number,
    metadata_headers,
    truncate_content,
)
from app.infrastructure.notifications import email_provider as email_provider_module

VALID_TOKEN = "fcm_token:" + "a1B2" * 10


def _message(recipient: str, **overrides) -> NotificationMessage:
    values = {
        "recipient": recipient,
        "subject": "Asunto",
        "content": "Contenido",
        "metadata": {"userId": 1, "priority": "Normal"},
    }
    values.update(overrides)
    return NotificationMessage(**values)


def _settings(**overrides) -> Settings:
    values = {"secret_key": "test", "notification_simulated_latency": False}
    values.update(overrides)
    return Settings(**values)


@pytest.mark.parametrize(
    ("phone", "expected"),
    [
        ("+573001234567", True),
        ("+57 (300) 123-4567", True),
        ("573001234567", False),
        ("+57300", False),
        ("+5730012345678901", False),
        ("+57300123456a", False),
        ("", False),
        (None, False),
    ],
)
def test_is_valid_phone_number(phone, expected):
    assert is_valid_phone_number(phone) is expected


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        (VALID_TOKEN, True),
        ("a" * 32, True),
        ("a" * 31, False),
        ("a" * 31 + "!", False),
        ("", False),
        (None, False),
    ],
)
def test_is_valid_device_token(token, expected):
    assert is_valid_device_token(token) is expected


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ("<p>Hola</p>", True),
        ("Linea<BR>otra", True),
        ("<DIV>bloque", True),
        ("texto plano", False),
        ("2 < 3 y 4 > 1", False),
    ],
)
def test_is_html_content(content, expected):
    assert is_html_content(content) is expected


def test_truncate_content_limits_to_sms_length():
    truncated = truncate_content("x" * 200)

    assert len(truncated) == 160
    assert truncated.endswith("...")
    assert truncate_content("corto") == "corto"


def test_metadata_headers_skip_empty_values():
    assert metadata_headers({"userId": 1, "note": None}) == {"X-Custom-userId": "1"}


def test_build_push_payload_includes_metadata():
    payload = build_push_payload(_message(VALID_TOKEN))

    assert payload["notification"]["title"] == "Asunto"
    assert payload["notification"]["body"] == "Contenido"
    assert payload["data"] == {"userId": 1, "priority": "Normal"}
    assert isinstance(payload["timestamp"], int)


@pytest.mark.anyio
async def test_email_provider_simulates_without_transport():
    provider = EmailNotificationProvider(_settings(), simulated_delay=0)

    result = await provider.send(_message("ana@example.com"))

    assert provider.transport == "simulated"
    assert result.is_success is True
    assert result.external_id.startswith("simulated_email_")


@pytest.mark.anyio
async def test_email_provider_sends_through_smtp(monkeypatch):
    sent = {}

    def fake_send(settings, **kwargs):
        sent.update(kwargs)

    monkeypatch.setattr(email_provider_module, "send_smtp_email", fake_send)
    provider = EmailNotificationProvider(
        _settings(smtp_username="bot@example.com", smtp_password="secret")
    )

    result = await provider.send(_message("ana@example.com", content="<p>Hola</p>"))

    assert provider.transport == "smtp"
    assert result.is_success is True
    assert result.external_id.startswith("email_")
    assert sent["is_html"] is True
    assert sent["headers"]["X-Custom-userId"] == "1"


@pytest.mark.anyio
async def test_email_provider_prefers_sendgrid(monkeypatch):
    monkeypatch.setattr(
        email_provider_module, "send_sendgrid_email", lambda settings, **kwargs: "sg-123"
    )
    provider = EmailNotificationProvider(
        _settings(
            sendgrid_api_key="SG.fake",
            sendgrid_sender="sender@example.com",
            smtp_username="bot@example.com",
            smtp_password="secret",
        )
    )

    result = await provider.send(_message("ana@example.com"))

    assert provider.transport == "sendgrid"
    assert result.external_id == "sg-123"


@pytest.mark.anyio
async def test_email_provider_maps_transport_errors(monkeypatch):
    def failing_send(settings, **kwargs):
        raise EmailDeliveryError("SMTP Error: connection refused")

    monkeypatch.setattr(email_provider_module, "send_smtp_email", failing_send)
    provider = EmailNotificationProvider(
        _settings(smtp_username="bot@example.com", smtp_password="secret")
    )

    result = await provider.send(_message("ana@example.com"))

    assert result.is_success is False
    assert result.error_message == "SMTP Error: connection refused"


@pytest.mark.anyio
async def test_email_provider_never_raises(monkeypatch):
    def broken_send(settings, **kwargs):
        raise KeyError("boom")

    monkeypatch.setattr(email_provider_module, "send_smtp_email", broken_send)
    provider = EmailNotificationProvider(
        _settings(smtp_username="bot@example.com", smtp_password="secret")
    )

    result = await provider.send(_message("ana@example.com"))

    assert result.is_success is False
    assert result.error_message.startswith("Error: ")


@pytest.mark.anyio
async def test_sms_provider_simulates_when_not_configured():
    provider = SmsNotificationProvider(enabled=False, simulated_delay=0)

    result = await provider.send(_message("not-a-phone"))

    assert result.is_success is True
    assert result.external_id.startswith("simulated_sms_")


@pytest.mark.anyio
async def test_sms_provider_rejects_invalid_numbers():
    provider = SmsNotificationProvider(
        enabled=True, api_key="key", api_secret="secret", delivery_delay=0
    )

    result = await provider.send(_message("300-123"))

    assert result.is_success is False
    assert result.error_message == "Invalid phone number format"


@pytest.mark.anyio
async def test_sms_provider_success_and_simulated_failure():
    delivered = SmsNotificationProvider(
        enabled=True,
        api_key="key",
        api_secret="secret",
        failure_rate=0.0,
        delivery_delay=0,
        rng=random.Random(7),
    )
    failing = SmsNotificationProvider(
        enabled=True,
        api_key="key",
        api_secret="secret",
        failure_rate=1.0,
        delivery_delay=0,
    )

    success = await delivered.send(_message("+573001234567"))
    failure = await failing.send(_message("+573001234567"))

    assert success.is_success is True
    prefix, _, suffix = success.external_id.rpartition("_")
    assert prefix.startswith("sms_")
    assert 1000 <= int(suffix) <= 9999
    assert failure.error_message == "Simulated SMS provider failure"


@pytest.mark.anyio
async def test_push_provider_disabled_fails():
    provider = PushNotificationProvider(enabled=False)

    result = await provider.send(_message(VALID_TOKEN))

    assert result.is_success is False
    assert result.error_message == "Push notification provider is disabled"


@pytest.mark.anyio
async def test_push_provider_validates_token_and_delivers():
    provider = PushNotificationProvider(enabled=True, failure_rate=0.0, delivery_delay=0)

    invalid = await provider.send(_message("short-token"))
    delivered = await provider.send(_message(VALID_TOKEN))

    assert invalid.error_message == "Invalid device token format"
    assert delivered.is_success is True
    assert 10000 <= int(delivered.external_id.rsplit("_", 1)[1]) <= 99999


@pytest.mark.anyio
async def test_push_provider_simulated_failure():
    provider = PushNotificationProvider(enabled=True, failure_rate=1.0, delivery_delay=0)

    result = await provider.send(_message(VALID_TOKEN))

    assert result.error_message == "Simulated push notification service failure"


def test_registry_resolves_first_matching_provider():
    first = SmsNotificationProvider()
    second = SmsNotificationProvider()
    registry = ProviderRegistry([first])
    registry.register(second)

    assert registry.resolve("sms") is first
    assert registry.resolve("fax") is None
    assert len(registry) == 2


def test_build_provider_registry_covers_every_channel():
    registry = build_provider_registry(_settings())

    assert registry.types == ["Email", "SMS", "Push"]
    assert registry.resolve("PUSH").enabled is False

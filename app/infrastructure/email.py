"""Blocking mail transports used by the email notification provider.

Both transports raise :class:`EmailDeliveryError` on failure so the provider can
turn the problem into a failed delivery result.
"""

from __future__ import annotations

import json
import logging
import smtplib
from collections.abc import Mapping
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Header, Mail

from app.config import Settings

logger = logging.getLogger(__name__)

SMTP_TIMEOUT_SECONDS = 30


class EmailDeliveryError(RuntimeError):
    """Raised when a mail transport rejects or cannot deliver a message."""


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                message = item.get("message")
                help_link = item.get("help")
                if message and help_link:
                    messages.append(f"{message} (help: {help_link})")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        # Fall back to a JSON string for unrecognised payloads
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _describe_sendgrid_failure(status_code: Any, body: Any) -> str:
    details = _extract_sendgrid_error_details(body)
    if status_code and details:
        return f"SendGrid API request failed with status {status_code}: {details}"
    if status_code:
        return f"SendGrid API request failed with status {status_code}"
    if details:
        return f"SendGrid API request failed: {details}"
    return "SendGrid API request failed"


def send_sendgrid_email(
    settings: Settings,
    *,
    recipient: str,
    subject: str,
    content: str,
    is_html: bool,
    headers: Mapping[str, str] | None = None,
) -> str | None:
    """Send one message through the SendGrid REST API.

    Returns the ``X-Message-Id`` reported by SendGrid when available.
    """

    if not settings.sendgrid_configured:
        raise EmailDeliveryError("SendGrid configuration incomplete")

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=content if is_html else None,
        plain_text_content=None if is_html else content,
    )
    for key, value in (headers or {}).items():
        message.header = Header(key, value)

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:  # pragma: no cover - network failures depend on environment
        description = _describe_sendgrid_failure(
            getattr(exc, "status_code", None), getattr(exc, "body", None)
        )
        logger.error("%s", description)
        raise EmailDeliveryError(description) from exc

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        description = _describe_sendgrid_failure(status_code, getattr(response, "body", None))
        logger.error("%s", description)
        raise EmailDeliveryError(description)

    response_headers = getattr(response, "headers", None) or {}
    try:
        return response_headers.get("X-Message-Id")
    except AttributeError:
        return None


def build_smtp_message(
    settings: Settings,
    *,
    recipient: str,
    subject: str,
    content: str,
    is_html: bool,
    headers: Mapping[str, str] | None = None,
) -> MIMEMultipart:
    """Build the MIME message sent over SMTP."""

    sender = settings.smtp_from_email or settings.smtp_username or ""
    message = MIMEMultipart("alternative")
    message["Subject"] = subject
    message["From"] = formataddr((settings.smtp_from_name, sender))
    message["To"] = recipient
    for key, value in (headers or {}).items():
        message[key] = value
    message.attach(MIMEText(content, "html" if is_html else "plain", "utf-8"))
    return message


def send_smtp_email(
    settings: Settings,
    *,
    recipient: str,
    subject: str,
    content: str,
    is_html: bool,
    headers: Mapping[str, str] | None = None,
) -> None:
    """Send one message through the configured SMTP server."""

    if not settings.smtp_configured:
        raise EmailDeliveryError("SMTP credentials are not configured")

    message = build_smtp_message(
        settings,
        recipient=recipient,
        subject=subject,
        content=content,
        is_html=is_html,
        headers=headers,
    )
    try:
        with smtplib.SMTP(
            settings.smtp_host, settings.smtp_port, timeout=SMTP_TIMEOUT_SECONDS
        ) as server:
            if settings.smtp_use_tls:
                server.starttls()
            server.login(settings.smtp_username, settings.smtp_password)
            server.send_message(message)
    except (smtplib.SMTPException, OSError) as exc:
        raise EmailDeliveryError(f"SMTP Error: {exc}") from exc


__all__ = [
    "EmailDeliveryError",
    "build_smtp_message",
    "send_sendgrid_email",
    "send_smtp_email",
]

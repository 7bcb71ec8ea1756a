"""Delivery channels and background processing for notifications."""

from .email_provider import EmailNotificationProvider, is_html_content, metadata_headers
from .factory import (
    build_dispatch_service,
    build_joke_notifier,
    build_processor,
    build_provider_registry,
    dispatch_scope,
)
from .processor import NotificationProcessor
from .push_provider import PushNotificationProvider, build_push_payload, is_valid_device_token
from .sms_provider import SmsNotificationProvider, is_valid_phone_number, truncate_content

__all__ = [
    "EmailNotificationProvider",
    "NotificationProcessor",
    "PushNotificationProvider",
    "SmsNotificationProvider",
    "build_dispatch_service",
    "build_joke_notifier",
    "build_processor",
    "build_provider_registry",
    "build_push_payload",
    "dispatch_scope",
    "is_html_content",
    "is_valid_device_token",
    "is_valid_phone_number",
    "metadata_headers",
    "truncate_content",
]

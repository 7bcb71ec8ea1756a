"""Template engine for notification content.

Templates are looked up by ``(template_id, type)`` and rendered by replacing
``{{identifier}}`` placeholders with values from a flat data bag. Placeholders
without a value are kept verbatim so partially parameterised templates still
render.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

from app.domain.entities import NOTIFICATION_TYPES, NotificationTemplate
from app.domain.exceptions import (
    TemplateConflictError,
    TemplateInactiveError,
    TemplateNotFoundError,
    TemplateValidationError,
)
from app.domain.repositories import TemplateStore
from app.utils import now_utc

logger = logging.getLogger(__name__)

_PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")
_ANY_PLACEHOLDER_PATTERN = re.compile(r"\{\{(.*?)\}\}")
_IDENTIFIER_PATTERN = re.compile(r"^\w+$")


def substitute_placeholders(text: str, data: Mapping[str, Any] | None) -> str:
    """Replace every known ``{{name}}`` in ``text`` with ``str(data[name])``."""

    if not text or not data:
        return text

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in data:
            return match.group(0)
        value = data[name]
        return "" if value is None else str(value)

    return _PLACEHOLDER_PATTERN.sub(_replace, text)


def canonical_type(notification_type: str | None) -> str | None:
    """Return the registered spelling of ``notification_type`` (``sms`` -> ``SMS``)."""

    folded = (notification_type or "").casefold()
    for candidate in NOTIFICATION_TYPES:
        if candidate.casefold() == folded:
            return candidate
    return None


def validate_template(template: NotificationTemplate) -> None:
    """Raise :class:`TemplateValidationError` when ``template`` cannot be stored."""

    if not (template.template_id or "").strip():
        raise TemplateValidationError("El identificador de la plantilla es obligatorio")
    if not (template.name or "").strip():
        raise TemplateValidationError("El nombre de la plantilla es obligatorio")
    if not (template.type or "").strip():
        raise TemplateValidationError("El tipo de la plantilla es obligatorio")
    if not (template.content or "").strip():
        raise TemplateValidationError("El contenido de la plantilla es obligatorio")
    if template.type not in NOTIFICATION_TYPES:
        raise TemplateValidationError(
            "El tipo de la plantilla debe ser uno de: " + ", ".join(NOTIFICATION_TYPES)
        )

    for text in (template.subject or "", template.content):
        for match in _ANY_PLACEHOLDER_PATTERN.finditer(text):
            if not _IDENTIFIER_PATTERN.match(match.group(1)):
                raise TemplateValidationError(
                    f"Sintaxis de variable inválida: {match.group(0)}"
                )


class TemplateService:
    """Render, look up and maintain notification templates."""

    #: Lookup order used when the caller does not know the template type.
    render_type_order: Sequence[str] = NOTIFICATION_TYPES

    def __init__(self, repository: TemplateStore) -> None:
        self.repository = repository

    def render(self, template_id: str, data: Mapping[str, Any] | None) -> str:
        """Return the content of ``template_id`` with ``data`` substituted."""

        template = self._find_renderable(template_id)
        rendered = substitute_placeholders(template.content, data)
        logger.debug("Template %s rendered", template_id)
        return rendered

    def render_subject(
        self, template_id: str, notification_type: str, data: Mapping[str, Any] | None
    ) -> str | None:
        """Return the substituted subject of ``(template_id, notification_type)``."""

        template = self.get_template(template_id, notification_type)
        if template is None or not template.is_active:
            return None
        return substitute_placeholders(template.subject or "", data)

    def get_template(
        self, template_id: str, notification_type: str
    ) -> NotificationTemplate | None:
        template = self.repository.get_by_template_id(template_id, notification_type)
        if template is None:
            # Stored types use canonical casing; requests may not.
            canonical = canonical_type(notification_type)
            if canonical is not None and canonical != notification_type:
                template = self.repository.get_by_template_id(template_id, canonical)
        return template

    def get_templates(self, notification_type: str | None = None) -> Sequence[NotificationTemplate]:
        if not notification_type:
            return self.repository.list()
        return self.repository.list_by_type(
            canonical_type(notification_type) or notification_type
        )

    def create_template(self, template: NotificationTemplate) -> NotificationTemplate:
        validate_template(template)
        existing = self.repository.get_by_template_id(template.template_id, template.type)
        if existing is not None:
            raise TemplateConflictError(template.template_id, template.type)

        template.created_at = now_utc()
        template.updated_at = None
        created = self.repository.create(template)
        logger.info("Template %s (%s) created", created.template_id, created.type)
        return created

    def update_template(self, template: NotificationTemplate) -> NotificationTemplate:
        validate_template(template)
        existing = self.repository.get_by_template_id(template.template_id, template.type)
        if existing is None:
            raise TemplateNotFoundError(template.template_id, template.type)

        existing.name = template.name
        existing.subject = template.subject
        existing.content = template.content
        existing.is_active = template.is_active
        existing.updated_at = now_utc()
        return self.repository.update(existing)

    def delete_template(self, template_id: str) -> bool:
        """Delete every type variant of ``template_id``; ``False`` when none exist."""

        templates = self.repository.list_by_template_id(template_id)
        if not templates:
            return False
        for template in templates:
            self.repository.delete(template.id)
        logger.info("Template %s deleted (%d variants)", template_id, len(templates))
        return True

    def _find_renderable(self, template_id: str) -> NotificationTemplate:
        inactive: NotificationTemplate | None = None
        for notification_type in self.render_type_order:
            template = self.repository.get_by_template_id(template_id, notification_type)
            if template is None:
                continue
            if template.is_active:
                return template
            if inactive is None:
                inactive = template

        if inactive is not None:
            logger.warning("Template is inactive: %s", template_id)
            raise TemplateInactiveError(template_id)
        logger.warning("Template not found: %s", template_id)
        raise TemplateNotFoundError(template_id)


__all__ = [
    "TemplateService",
    "canonical_type",
    "substitute_placeholders",
    "validate_template",
]

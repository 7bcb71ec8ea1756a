"""Persistence helpers for notification templates."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import NotificationTemplate
from app.infrastructure.models import NotificationTemplateModel
from app.utils import ensure_utc, ensure_utc_naive


class NotificationTemplateRepository:
    """Provide CRUD operations for :class:`NotificationTemplate` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self) -> Sequence[NotificationTemplate]:
        query = self.session.query(NotificationTemplateModel).order_by(
            NotificationTemplateModel.type, NotificationTemplateModel.name
        )
        return [self._to_entity(model) for model in query.all()]

    def list_by_type(self, notification_type: str) -> Sequence[NotificationTemplate]:
        query = (
            self.session.query(NotificationTemplateModel)
            .filter(NotificationTemplateModel.type == notification_type)
            .order_by(NotificationTemplateModel.name)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_by_template_id(self, template_id: str) -> Sequence[NotificationTemplate]:
        query = self.session.query(NotificationTemplateModel).filter(
            NotificationTemplateModel.template_id == template_id
        )
        return [self._to_entity(model) for model in query.all()]

    def get_by_template_id(
        self, template_id: str, notification_type: str
    ) -> NotificationTemplate | None:
        model = (
            self.session.query(NotificationTemplateModel)
            .filter(NotificationTemplateModel.template_id == template_id)
            .filter(NotificationTemplateModel.type == notification_type)
            .order_by(NotificationTemplateModel.is_active.desc())
            .first()
        )
        return self._to_entity(model) if model else None

    def count(self) -> int:
        return self.session.query(NotificationTemplateModel).count()

    def create(self, template: NotificationTemplate) -> NotificationTemplate:
        model = NotificationTemplateModel()
        self._apply_entity_to_model(model, template)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, template: NotificationTemplate) -> NotificationTemplate:
        if template.id is None:
            raise ValueError("Template id is required for updates")
        model = self.session.get(NotificationTemplateModel, template.id)
        if model is None:
            msg = f"Notification template with id {template.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, template)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, template_pk: int) -> None:
        model = self.session.get(NotificationTemplateModel, template_pk)
        if model is None:
            return
        self.session.delete(model)
        self.session.commit()

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationTemplateModel, template: NotificationTemplate
    ) -> None:
        model.template_id = template.template_id
        model.name = template.name
        model.type = template.type
        model.subject = template.subject or ""
        model.content = template.content
        model.is_active = template.is_active
        if template.created_at is not None:
            model.created_at = ensure_utc_naive(template.created_at)
        model.updated_at = ensure_utc_naive(template.updated_at)

    @staticmethod
    def _to_entity(model: NotificationTemplateModel) -> NotificationTemplate:
        return NotificationTemplate(
            id=model.id,
            template_id=model.template_id,
            name=model.name,
            type=model.type,
            subject=model.subject or "",
            content=model.content,
            is_active=bool(model.is_active),
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )


__all__ = ["NotificationTemplateRepository"]

"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.entities import (
    Notification,
    NotificationPriority,
    NotificationStats,
    NotificationStatus,
)
from app.infrastructure.models import NotificationModel
from app.utils import ensure_utc, ensure_utc_naive, now_utc


class NotificationRepository:
    """Provide CRUD and queue queries for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        *,
        page: int = 1,
        page_size: int = 20,
        status: NotificationStatus | None = None,
        notification_type: str | None = None,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id
        )
        if status is not None:
            query = query.filter(NotificationModel.status == NotificationStatus(status).value)
        if notification_type:
            query = query.filter(NotificationModel.type == notification_type)
        query = (
            query.order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_pending(self, batch_size: int = 50) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.status == NotificationStatus.PENDING.value)
            .order_by(*self._queue_order())
            .limit(batch_size)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_retryable(self, max_attempts: int = 3) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.status == NotificationStatus.FAILED.value)
            .filter(NotificationModel.attempts < max_attempts)
            .order_by(*self._queue_order())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_status(
        self,
        notification_id: int,
        status: NotificationStatus,
        error_message: str | None = None,
    ) -> bool:
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            return False

        status = NotificationStatus(status)
        model.status = status.value
        model.error_message = error_message
        if status is NotificationStatus.SENT:
            model.sent_at = ensure_utc_naive(now_utc())
        model.attempts = (model.attempts or 0) + 1
        self.session.add(model)
        self.session.commit()
        return True

    def mark_as_read(self, notification_id: int, *, user_id: int) -> bool:
        model = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id == notification_id)
            .filter(NotificationModel.user_id == user_id)
            .first()
        )
        if model is None:
            return False
        if model.read_at is None:
            model.read_at = ensure_utc_naive(now_utc())
            self.session.add(model)
            self.session.commit()
        return True

    def get_stats(self, user_id: int) -> NotificationStats:
        rows = (
            self.session.query(NotificationModel.status, func.count(NotificationModel.id))
            .filter(NotificationModel.user_id == user_id)
            .group_by(NotificationModel.status)
            .all()
        )
        counts = {status: count for status, count in rows}
        sent = counts.get(NotificationStatus.SENT.value, 0)
        return NotificationStats(
            total=sum(counts.values()),
            unread=sent,
            pending=counts.get(NotificationStatus.PENDING.value, 0),
            failed=counts.get(NotificationStatus.FAILED.value, 0),
        )

    @staticmethod
    def _queue_order():
        return (
            NotificationModel.priority.asc(),
            NotificationModel.created_at.asc(),
            NotificationModel.id.asc(),
        )

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        model.user_id = notification.user_id
        model.type = notification.type
        model.subject = notification.subject or ""
        model.content = notification.content or ""
        model.recipient = notification.recipient or ""
        model.status = NotificationStatus(notification.status).value
        model.created_at = ensure_utc_naive(notification.created_at) or ensure_utc_naive(
            now_utc()
        )
        model.sent_at = ensure_utc_naive(notification.sent_at)
        model.attempts = notification.attempts
        model.error_message = notification.error_message
        model.template_id = notification.template_id
        model.template_data = (
            dict(notification.template_data) if notification.template_data is not None else None
        )
        model.priority = int(notification.priority)
        model.read_at = ensure_utc_naive(notification.read_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            subject=model.subject or "",
            content=model.content or "",
            recipient=model.recipient or "",
            status=NotificationStatus(model.status),
            created_at=ensure_utc(model.created_at),
            sent_at=ensure_utc(model.sent_at),
            attempts=model.attempts or 0,
            error_message=model.error_message,
            template_id=model.template_id,
            template_data=dict(model.template_data) if model.template_data is not None else None,
            priority=NotificationPriority(model.priority),
            read_at=ensure_utc(model.read_at),
        )


__all__ = ["NotificationRepository"]

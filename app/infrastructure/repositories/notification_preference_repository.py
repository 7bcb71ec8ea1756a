"""Persistence helpers for notification preferences."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import NotificationPreference
from app.infrastructure.models import NotificationPreferenceModel
from app.utils import ensure_utc, ensure_utc_naive, now_utc


class NotificationPreferenceRepository:
    """Read and upsert :class:`NotificationPreference` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(self, user_id: int) -> Sequence[NotificationPreference]:
        query = (
            self.session.query(NotificationPreferenceModel)
            .filter(NotificationPreferenceModel.user_id == user_id)
            .order_by(
                NotificationPreferenceModel.notification_type,
                NotificationPreferenceModel.event_type,
            )
        )
        return [self._to_entity(model) for model in query.all()]

    def get_preference(
        self, user_id: int, notification_type: str, event_type: str
    ) -> NotificationPreference | None:
        model = self._get_model(user_id, notification_type, event_type)
        return self._to_entity(model) if model else None

    def is_enabled(self, user_id: int, notification_type: str, event_type: str) -> bool:
        # A missing row means the user never opted out.
        preference = self.get_preference(user_id, notification_type, event_type)
        return True if preference is None else preference.is_enabled

    def set_preference(
        self,
        user_id: int,
        notification_type: str,
        event_type: str,
        is_enabled: bool,
    ) -> NotificationPreference:
        now = ensure_utc_naive(now_utc())
        model = self._get_model(user_id, notification_type, event_type)
        if model is None:
            model = NotificationPreferenceModel(
                user_id=user_id,
                notification_type=notification_type,
                event_type=event_type,
                is_enabled=is_enabled,
                created_at=now,
            )
        else:
            model.is_enabled = is_enabled
            model.updated_at = now
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(
        self, user_id: int, notification_type: str, event_type: str
    ) -> NotificationPreferenceModel | None:
        return (
            self.session.query(NotificationPreferenceModel)
            .filter_by(
                user_id=user_id,
                notification_type=notification_type,
                event_type=event_type,
            )
            .first()
        )

    @staticmethod
    def _to_entity(model: NotificationPreferenceModel) -> NotificationPreference:
        return NotificationPreference(
            id=model.id,
            user_id=model.user_id,
            notification_type=model.notification_type,
            event_type=model.event_type,
            is_enabled=bool(model.is_enabled),
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )


__all__ = ["NotificationPreferenceRepository"]

"""SQLAlchemy model for notification preferences."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import now_utc_naive


class NotificationPreferenceModel(Base):
    """Per user, channel and event opt-out flag."""

    __tablename__ = "notification_preference"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "notification_type",
            "event_type",
            name="uq_notification_preference_scope",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    notification_type = Column(String(20), nullable=False)
    event_type = Column(String(100), nullable=False)
    is_enabled = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    created_at = Column(DateTime(), nullable=False, default=now_utc_naive)
    updated_at = Column(DateTime(), nullable=True)


__all__ = ["NotificationPreferenceModel"]

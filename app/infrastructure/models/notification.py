"""SQLAlchemy model for persisted notification attempts."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, JSON, String, Text

from app.infrastructure.database import Base
from app.utils import now_utc_naive


class NotificationModel(Base):
    """Database representation of a notification delivery attempt."""

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_status_attempts", "status", "attempts"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False)
    subject = Column(String(255), nullable=False, default="")
    content = Column(Text, nullable=False, default="")
    recipient = Column(String(255), nullable=False, default="")
    status = Column(String(20), nullable=False, default="Pending")
    created_at = Column(DateTime(), nullable=False, default=now_utc_naive)
    sent_at = Column(DateTime(), nullable=True)
    attempts = Column(Integer, nullable=False, default=0)
    error_message = Column(Text, nullable=True)
    template_id = Column(String(100), nullable=True)
    template_data = Column(JSON, nullable=True)
    priority = Column(Integer, nullable=False, default=1)
    read_at = Column(DateTime(), nullable=True)


__all__ = ["NotificationModel"]

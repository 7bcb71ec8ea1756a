"""SQLAlchemy model for notification templates."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import now_utc_naive


class NotificationTemplateModel(Base):
    """Database representation of a notification template."""

    __tablename__ = "notification_template"
    __table_args__ = (
        UniqueConstraint("template_id", "type", name="uq_notification_template_id_type"),
    )

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(String(100), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    type = Column(String(20), nullable=False)
    subject = Column(String(255), nullable=False, default="")
    content = Column(Text, nullable=False)
    is_active = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    created_at = Column(DateTime(), nullable=False, default=now_utc_naive)
    updated_at = Column(DateTime(), nullable=True)


__all__ = ["NotificationTemplateModel"]

"""SQLAlchemy model for jokes."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_utc_naive


class JokeModel(Base):
    """Database representation of a published joke."""

    __tablename__ = "joke"

    id = Column(Integer, primary_key=True, index=True)
    text = Column(Text, nullable=False)
    author_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    origin = Column(String(50), nullable=False, default="Local")
    created_at = Column(DateTime, nullable=False, default=now_utc_naive)

    author = relationship("UserModel", lazy="joined")


__all__ = ["JokeModel"]

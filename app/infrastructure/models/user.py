"""SQLAlchemy model for the user table."""

from sqlalchemy import Column, DateTime, Integer, String

from app.infrastructure.database import Base
from app.utils import now_utc_naive


class UserModel(Base):
    """Database representation of the platform user."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    phone = Column(String(30), nullable=True)
    role = Column(String(20), nullable=False, default="User")
    created_at = Column(DateTime, nullable=False, default=now_utc_naive)


__all__ = ["UserModel"]

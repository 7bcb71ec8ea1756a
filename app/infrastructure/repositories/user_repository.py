"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.entities import ADMIN_ROLE, User
from app.infrastructure.models import UserModel
from app.utils import ensure_utc, ensure_utc_naive


class UserRepository:
    """Look up the contact details of users."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(func.lower(UserModel.email) == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def list_admins(self) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .filter(func.lower(UserModel.role) == ADMIN_ROLE.lower())
            .order_by(UserModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, user: User) -> User:
        model = UserModel(
            name=user.name,
            email=user.email,
            phone=user.phone,
            role=user.role,
        )
        if user.created_at is not None:
            model.created_at = ensure_utc_naive(user.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            phone=model.phone,
            role=model.role,
            created_at=ensure_utc(model.created_at),
        )

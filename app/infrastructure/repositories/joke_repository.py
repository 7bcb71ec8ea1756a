"""Persistence layer for jokes."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import Joke
from app.infrastructure.models import JokeModel
from app.utils import ensure_utc, ensure_utc_naive


class JokeRepository:
    """Store and fetch :class:`Joke` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, joke_id: int) -> Joke | None:
        model = self.session.get(JokeModel, joke_id)
        return self._to_entity(model) if model else None

    def create(self, joke: Joke) -> Joke:
        model = JokeModel(text=joke.text, author_id=joke.author_id, origin=joke.origin)
        if joke.created_at is not None:
            model.created_at = ensure_utc_naive(joke.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: JokeModel) -> Joke:
        return Joke(
            id=model.id,
            text=model.text,
            author_id=model.author_id,
            origin=model.origin,
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["JokeRepository"]

"""Use case for publishing a joke."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import JokeEventHandler, NullJokeNotifier
from app.domain.entities import DEFAULT_JOKE_ORIGIN, Joke
from app.infrastructure.repositories import JokeRepository, UserRepository
from app.utils import now_utc

logger = logging.getLogger(__name__)

MIN_JOKE_LENGTH = 10
MAX_JOKE_LENGTH = 1000


async def create_joke(
    session: Session,
    *,
    author_id: int,
    text: str,
    origin: str | None = DEFAULT_JOKE_ORIGIN,
    notifier: JokeEventHandler | None = None,
) -> Joke:
    """Persist a new joke and emit the "joke created" event.

    The event handler runs after the joke is stored; its failures are logged and
    never change the outcome of this call.
    """

    normalized_text = (text or "").strip()
    if not normalized_text:
        raise ValueError("El texto del chiste es requerido")
    if len(normalized_text) < MIN_JOKE_LENGTH:
        raise ValueError(f"El chiste debe tener al menos {MIN_JOKE_LENGTH} caracteres")
    if len(normalized_text) > MAX_JOKE_LENGTH:
        raise ValueError(f"El chiste no puede exceder {MAX_JOKE_LENGTH} caracteres")

    author = UserRepository(session).get(author_id)
    if author is None:
        raise ValueError("Usuario no encontrado")

    joke = Joke(
        id=None,
        text=normalized_text,
        author_id=author_id,
        origin=(origin or "").strip() or DEFAULT_JOKE_ORIGIN,
        created_at=now_utc(),
    )
    saved = JokeRepository(session).create(joke)

    handler = notifier or NullJokeNotifier()
    try:
        await handler.handle_joke_created(saved, author=author)
    except Exception:
        logger.exception("Error processing joke created event for joke %s", saved.id)

    return saved

"""Translate domain events into notification requests."""

from __future__ import annotations

import logging
from typing import Protocol

from app.domain.entities import (
    NOTIFICATION_TYPE_EMAIL,
    Joke,
    NotificationPriority,
    NotificationRequest,
    User,
)
from app.domain.repositories import UserDirectory
from app.utils import ensure_utc, now_utc

from .dispatch import NotificationDispatchService

logger = logging.getLogger(__name__)

JOKE_CREATED_AUTHOR_TEMPLATE = "chiste_created_author"
JOKE_CREATED_ADMIN_TEMPLATE = "chiste_created_admin"
PUBLISH_DATE_FORMAT = "%d/%m/%Y %H:%M"


class JokeEventHandler(Protocol):
    async def handle_joke_created(self, joke: Joke, author: User | None = None) -> None: ...


class NullJokeNotifier:
    """Event handler used when notifications are not wired in."""

    async def handle_joke_created(self, joke: Joke, author: User | None = None) -> None:
        return None


class JokeCreatedNotifier:
    """Notify the author and every administrator about a new joke.

    Failures are logged and never propagate to the code that created the joke.
    """

    def __init__(self, dispatcher: NotificationDispatchService, users: UserDirectory) -> None:
        self.dispatcher = dispatcher
        self.users = users

    async def handle_joke_created(self, joke: Joke, author: User | None = None) -> None:
        try:
            if author is None:
                author = self.users.get(joke.author_id)
            if author is None:
                logger.warning("Author not found for joke %s", joke.id)
                return

            logger.info(
                "Processing notifications for new joke %s by %s", joke.id, author.name
            )
            await self._notify_author(joke, author)
            await self._notify_admins(joke, author)
            logger.info("Notifications processed for joke %s", joke.id)
        except Exception:
            logger.exception("Error processing notifications for joke %s", joke.id)

    async def _notify_author(self, joke: Joke, author: User) -> None:
        try:
            request = NotificationRequest(
                user_id=author.id,
                type=NOTIFICATION_TYPE_EMAIL,
                subject="Tu chiste ha sido publicado exitosamente",
                content=(
                    f"¡Hola {author.name}!\n\n"
                    "Tu chiste ha sido publicado exitosamente en la plataforma.\n\n"
                    f'Chiste: "{joke.text}"\n\n'
                    "¡Gracias por compartir tu humor con nosotros!"
                ),
                template_id=JOKE_CREATED_AUTHOR_TEMPLATE,
                template_data={
                    "authorName": author.name,
                    "chisteText": joke.text,
                    "chisteId": joke.id,
                    "publishDate": _publish_date(joke),
                    "origen": joke.origin,
                },
                priority=NotificationPriority.NORMAL,
            )
            if await self.dispatcher.send(request):
                logger.debug("Author notification sent for joke %s", joke.id)
            else:
                logger.warning("Failed to send author notification for joke %s", joke.id)
        except Exception:
            logger.exception("Error sending author notification for joke %s", joke.id)

    async def _notify_admins(self, joke: Joke, author: User) -> None:
        try:
            admins = list(self.users.list_admins())
            if not admins:
                logger.info("No admin users found to notify about joke %s", joke.id)
                return

            publish_date = _publish_date(joke)
            requests = [
                NotificationRequest(
                    user_id=admin.id,
                    type=NOTIFICATION_TYPE_EMAIL,
                    subject="Nuevo chiste publicado en la plataforma",
                    content=(
                        f"Hola {admin.name},\n\n"
                        "Se ha publicado un nuevo chiste en la plataforma.\n\n"
                        f"Autor: {author.name}\n"
                        f'Chiste: "{joke.text}"\n'
                        f"Fecha: {publish_date}\n"
                        f"Origen: {joke.origin}\n\n"
                        "Puedes revisar la actividad en el panel de administración."
                    ),
                    template_id=JOKE_CREATED_ADMIN_TEMPLATE,
                    template_data={
                        "adminName": admin.name,
                        "authorName": author.name,
                        "chisteText": joke.text,
                        "chisteId": joke.id,
                        "publishDate": publish_date,
                        "origen": joke.origin,
                    },
                    priority=NotificationPriority.LOW,
                )
                for admin in admins
            ]
            if await self.dispatcher.send_bulk(requests):
                logger.debug(
                    "Admin notifications sent for joke %s to %d admins", joke.id, len(admins)
                )
            else:
                logger.warning("Some admin notifications failed for joke %s", joke.id)
        except Exception:
            logger.exception("Error sending admin notifications for joke %s", joke.id)


def _publish_date(joke: Joke) -> str:
    created_at = ensure_utc(joke.created_at) or now_utc()
    return created_at.strftime(PUBLISH_DATE_FORMAT)


__all__ = [
    "JOKE_CREATED_ADMIN_TEMPLATE",
    "JOKE_CREATED_AUTHOR_TEMPLATE",
    "JokeCreatedNotifier",
    "JokeEventHandler",
    "NullJokeNotifier",
]

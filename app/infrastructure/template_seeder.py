"""Insert the default notification templates into an empty database."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.domain.entities import NOTIFICATION_TYPE_EMAIL, NotificationTemplate
from app.infrastructure.repositories import NotificationTemplateRepository
from app.utils import now_utc

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES: tuple[dict[str, str], ...] = (
    {
        "template_id": "chiste_created_author",
        "name": "Chiste Publicado - Autor",
        "subject": "¡Tu chiste ha sido publicado exitosamente!",
        "content": (
            "¡Hola {{authorName}}!\n\n"
            "Tu chiste ha sido publicado exitosamente en nuestra plataforma de humor.\n\n"
            "📝 **Tu chiste:**\n"
            '"{{chisteText}}"\n\n'
            "📅 **Fecha de publicación:** {{publishDate}}\n"
            "🌍 **Origen:** {{origen}}\n"
            "🆔 **ID del chiste:** #{{chisteId}}\n\n"
            "¡Gracias por compartir tu humor con nosotros! Esperamos que inspire "
            "sonrisas en muchas personas.\n\n"
            "¡Que tengas un día lleno de risas!\n\n"
            "---\n"
            "El equipo de RetoSquadmakers 😄"
        ),
    },
    {
        "template_id": "chiste_created_admin",
        "name": "Nuevo Chiste - Administradores",
        "subject": "Nuevo chiste publicado en la plataforma",
        "content": (
            "Hola {{adminName}},\n\n"
            "Se ha publicado un nuevo chiste en la plataforma RetoSquadmakers.\n\n"
            "👤 **Autor:** {{authorName}}\n"
            '📝 **Chiste:** "{{chisteText}}"\n'
            "📅 **Fecha:** {{publishDate}}\n"
            "🌍 **Origen:** {{origen}}\n"
            "🆔 **ID:** #{{chisteId}}\n\n"
            "Puedes revisar la actividad y gestionar el contenido desde el panel de "
            "administración.\n\n"
            "---\n"
            "Sistema de Notificaciones RetoSquadmakers"
        ),
    },
    {
        "template_id": "welcome_user",
        "name": "Bienvenida Usuario",
        "subject": "¡Bienvenido a RetoSquadmakers!",
        "content": (
            "¡Hola {{userName}}!\n\n"
            "¡Te damos la bienvenida a RetoSquadmakers! 🎉\n\n"
            "Ahora puedes:\n"
            "✅ Crear y compartir tus chistes favoritos\n"
            "✅ Explorar el humor de otros usuarios\n"
            "✅ Disfrutar de una gran variedad de chistes\n\n"
            "¡Esperamos que disfrutes tu experiencia con nosotros!\n\n"
            "---\n"
            "El equipo de RetoSquadmakers 😄"
        ),
    },
    {
        "template_id": "system_maintenance",
        "name": "Mantenimiento del Sistema",
        "subject": "Mantenimiento programado - RetoSquadmakers",
        "content": (
            "Hola {{userName}},\n\n"
            "Te informamos que realizaremos un mantenimiento programado en la plataforma.\n\n"
            "🕐 **Inicio:** {{startTime}}\n"
            "🕐 **Fin estimado:** {{endTime}}\n"
            "⚠️ **Impacto:** {{impactDescription}}\n\n"
            "Durante este tiempo, algunas funcionalidades podrían no estar disponibles.\n\n"
            "¡Gracias por tu comprensión!\n\n"
            "---\n"
            "El equipo técnico de RetoSquadmakers"
        ),
    },
)


def default_templates() -> list[NotificationTemplate]:
    created_at = now_utc()
    return [
        NotificationTemplate(
            id=None,
            type=NOTIFICATION_TYPE_EMAIL,
            is_active=True,
            created_at=created_at,
            **definition,
        )
        for definition in DEFAULT_TEMPLATES
    ]


def seed_notification_templates(session: Session) -> int:
    """Store the default templates when the table is empty.

    Returns the number of inserted templates.
    """

    repository = NotificationTemplateRepository(session)
    if repository.count():
        logger.debug("Notification templates already present; skipping seed")
        return 0

    templates = default_templates()
    for template in templates:
        repository.create(template)
    logger.info("Seeded %d default notification templates", len(templates))
    return len(templates)


__all__ = ["DEFAULT_TEMPLATES", "default_templates", "seed_notification_templates"]

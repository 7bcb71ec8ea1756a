from fastapi import FastAPI

from .jokes import router as jokes_router
from .notification_templates import router as notification_templates_router
from .notifications import router as notifications_router


def register_routes(app: FastAPI) -> None:
    """Registra todos los routers de la API en la aplicación FastAPI."""

    # Template paths must be matched before /notifications/{notification_id}.
    app.include_router(notification_templates_router)
    app.include_router(notifications_router)
    app.include_router(jokes_router)

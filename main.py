from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.infrastructure.database import SessionLocal, engine, initialize_database
from app.infrastructure.notifications import build_processor
from app.infrastructure.template_seeder import seed_notification_templates
from app.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Inicializa la base de datos y el procesador de notificaciones."""

    settings = get_settings()
    initialize_database()

    if settings.seed_notification_templates:
        session = SessionLocal()
        try:
            seed_notification_templates(session)
        finally:
            session.close()

    processor = None
    if settings.notification_processor_enabled:
        processor = build_processor(settings)
        processor.start()
    app.state.notification_processor = processor

    try:
        yield
    finally:
        if processor is not None:
            await processor.stop()
        engine.dispose()


def create_app() -> FastAPI:
    """Crea y configura la aplicación principal de FastAPI."""

    app = FastAPI(title="Notification Service", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:4200"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()

from __future__ import annotations

import logging

from fastapi import FastAPI

from agentsflow.config import get_settings
from agentsflow.dependencies import register_exception_handlers
from agentsflow.routers import ai, appointments, conversations, health, leads, services


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="agentsflow",
        description="Lead management backend with a local/cloud AI generation gateway",
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url=None,
    )

    register_exception_handlers(app)

    app.include_router(ai.router)
    app.include_router(leads.router)
    app.include_router(conversations.router)
    app.include_router(appointments.router)
    app.include_router(services.router)
    app.include_router(health.router)

    return app


app = create_app()

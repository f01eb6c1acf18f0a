"""Application factory for the Taskboard API."""

from __future__ import annotations

from fastapi import FastAPI

from taskboard import __version__, deps
from taskboard.config import settings
from taskboard.domain.errors import add_exception_handlers
from taskboard.domain.models import Base
from taskboard.instrumentation.middleware import TraceRequestMiddleware
from taskboard.instrumentation.trace import tracepoint
from taskboard.logging_setup import setup_logging


def create_app() -> FastAPI:
    """Initialise and configure the FastAPI application."""

    setup_logging()
    Base.metadata.create_all(bind=deps.engine)
    tracepoint("app.start", env=settings.env)

    app = FastAPI(title="Taskboard API", version=__version__)
    add_exception_handlers(app)
    app.add_middleware(TraceRequestMiddleware)
    from taskboard.routes import auth_routes, project_routes, ui_routes, user_routes

    app.include_router(auth_routes.router)
    app.include_router(user_routes.router)
    app.include_router(project_routes.router)
    app.include_router(ui_routes.router)

    @app.get("/")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()

from __future__ import annotations

import logging
from typing import Any, Dict, Generator

from fastapi import Depends, HTTPException, Request
from jwt import PyJWTError
from sqlalchemy import create_engine
from sqlalchemy.engine import URL
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import Session, sessionmaker

from taskboard.config import settings
from taskboard.controllers.projects_controller import ProjectsController
from taskboard.services.project_member_service import ProjectMemberService
from taskboard.services.projects_service import ProjectsService
from taskboard.services.tasks_service import TasksService
from taskboard.services.users_service import UsersService
from taskboard.utils.tokens import decode_token


logger = logging.getLogger(__name__)

# --- SQLAlchemy engine + session factory ----------------------------------------------------
def _build_connect_args(url: URL) -> Dict[str, Any]:
    dialect_name = url.get_dialect().name
    if dialect_name == "sqlite":
        return {"check_same_thread": False}
    if dialect_name.startswith("postgresql") and settings.db_connect_timeout:
        return {"connect_timeout": settings.db_connect_timeout}
    return {}


_db_url = make_url(settings.database_url)
logger.info("Initializing database engine", extra={"db_url": _db_url.render_as_string(hide_password=True)})
engine = create_engine(
    _db_url,
    connect_args=_build_connect_args(_db_url),
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency that yields one Session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(request: Request) -> Dict[str, Any]:
    """
    Decode the bearer token and return its claims; enforce presence.
    Also sets request.state.user for the access log middleware.
    """
    auth = request.headers.get("Authorization", "")
    if not auth.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing bearer token")

    token = auth.split(" ", 1)[1]
    try:
        claims = decode_token(token)
    except PyJWTError as exc:
        raise HTTPException(status_code=401, detail=f"Invalid token: {exc}") from exc

    request.state.user = claims
    return claims


def get_users_service(db: Session = Depends(get_db)) -> UsersService:
    return UsersService(db)


def get_projects_controller(db: Session = Depends(get_db)) -> ProjectsController:
    """Wire the controller with services sharing the request's session."""
    return ProjectsController(
        projects=ProjectsService(db),
        tasks=TasksService(db),
        users=UsersService(db),
        members=ProjectMemberService(db),
    )

from __future__ import annotations

from collections.abc import Callable, Generator
import os
from typing import Dict, Tuple

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure required settings exist before importing application modules
os.environ.setdefault("ENV", "test")
os.environ.setdefault("JWT_SECRET", "testing-secret")
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"

import taskboard.deps as deps
from taskboard.controllers.projects_controller import ProjectsController
from taskboard.main import create_app
from taskboard.services.project_member_service import ProjectMemberService
from taskboard.services.projects_service import ProjectsService
from taskboard.services.tasks_service import TasksService
from taskboard.services.users_service import UsersService

UserFactory = Callable[[str], Tuple[int, Dict[str, str]]]


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    deps.engine = engine
    deps.SessionLocal = TestingSessionLocal

    app = create_app()

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session(client: TestClient) -> Generator[Session, None, None]:
    """Provide a database session scoped to the in-memory test engine."""

    with deps.SessionLocal() as session:
        yield session


@pytest.fixture
def controller(db_session: Session) -> ProjectsController:
    return ProjectsController(
        projects=ProjectsService(db_session),
        tasks=TasksService(db_session),
        users=UsersService(db_session),
        members=ProjectMemberService(db_session),
    )


@pytest.fixture
def make_user(client: TestClient) -> UserFactory:
    """Register a user and return its id with bearer headers."""

    def _make(username: str) -> Tuple[int, Dict[str, str]]:
        registered = client.post("/auth/register", json={"username": username, "password": "pw"})
        assert registered.status_code == 201, registered.text
        user_id = registered.json()["user"]["id"]

        response = client.post("/auth/token", json={"username": username, "password": "pw"})
        assert response.status_code == 200, response.text
        token = response.json()["access_token"]
        return user_id, {"Authorization": f"Bearer {token}"}

    return _make

"""Pydantic schemas for API requests and responses.

JSON payloads use camelCase keys (``leaderId``, ``timeEstimation``); request
bodies accept either camelCase or the snake_case attribute names.
"""

from __future__ import annotations

from typing import Annotated, List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# largest value a 64-bit signed primary key can hold
MAX_ID = 2**63 - 1

EntityId = Annotated[int, Field(ge=1, le=MAX_ID)]


class CamelModel(BaseModel):
    """Base schema serialising attributes with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class TokenResp(BaseModel):
    """OAuth-style token response returned during authentication."""

    access_token: str
    token_type: Literal["bearer"] = "bearer"
    expires_in: int = 3600


class CredentialsReq(BaseModel):
    """Username/password pair used for registration and login."""

    username: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=1)


class UserResp(CamelModel):
    id: int
    username: str


class UserEnvelope(CamelModel):
    user: UserResp


class ProjectBody(CamelModel):
    """Request body for project creation."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)


class ProjectResp(CamelModel):
    id: int
    name: str
    leader_id: int


class LeaderProjectsResp(CamelModel):
    leader_projects: List[ProjectResp]


class MemberProjectsResp(CamelModel):
    member_projects: List[ProjectResp]


class ProjectListResp(CamelModel):
    projects: List[ProjectResp]


class ProjectEnvelope(CamelModel):
    project: ProjectResp


class MemberBody(CamelModel):
    """Request body for adding a member to a project."""

    user_id: EntityId


class ProjectMemberResp(CamelModel):
    id: int
    project_id: int
    user_id: int


class MemberListResp(CamelModel):
    members: List[ProjectMemberResp]


class MemberEnvelope(CamelModel):
    member: ProjectMemberResp


class TaskCreateReq(CamelModel):
    """Request body for task creation; the project comes from the path."""

    user_id: EntityId | None = None
    project_id: EntityId | None = None
    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    time_estimation: str = ""
    status: str = "todo"


class TaskUpdateReq(CamelModel):
    """Partial task update; only fields present in the body are applied."""

    user_id: EntityId | None = None
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    time_estimation: str | None = None
    status: str | None = None


class TaskResp(CamelModel):
    id: int
    project_id: int
    user_id: int
    title: str
    description: str
    time_estimation: str
    status: str


class TaskListResp(CamelModel):
    tasks: List[TaskResp]


class TaskEnvelope(CamelModel):
    task: TaskResp


class UpdatedTaskEnvelope(CamelModel):
    updated_task: TaskResp


class SuccessResp(CamelModel):
    success: bool

"""Project, membership and task routes.

Every handler builds a :class:`RequestContext` from the decoded token, the raw
path parameters and the parsed body, then delegates to
:class:`ProjectsController`.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from taskboard.controllers.context import RequestContext
from taskboard.controllers.projects_controller import ProjectsController
from taskboard.deps import get_current_user, get_projects_controller
from taskboard.domain.schemas import (
    LeaderProjectsResp,
    MemberBody,
    MemberEnvelope,
    MemberListResp,
    MemberProjectsResp,
    ProjectBody,
    ProjectEnvelope,
    ProjectListResp,
    SuccessResp,
    TaskCreateReq,
    TaskEnvelope,
    TaskListResp,
    TaskUpdateReq,
    UpdatedTaskEnvelope,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("/leader", response_model=LeaderProjectsResp)
def list_leader_projects(
    user: Dict[str, Any] = Depends(get_current_user),
    controller: ProjectsController = Depends(get_projects_controller),
) -> LeaderProjectsResp:
    """Return projects led by the caller."""

    return controller.index(RequestContext.build(user))


@router.get("/member", response_model=MemberProjectsResp)
def list_member_projects(
    user: Dict[str, Any] = Depends(get_current_user),
    controller: ProjectsController = Depends(get_projects_controller),
) -> MemberProjectsResp:
    """Return projects the caller is a member of."""

    return controller.index_member_of(RequestContext.build(user))


@router.get("/memberOf", response_model=ProjectListResp)
def list_projects_from_memberships(
    user: Dict[str, Any] = Depends(get_current_user),
    controller: ProjectsController = Depends(get_projects_controller),
) -> ProjectListResp:
    return controller.member_of(RequestContext.build(user))


@router.post("", response_model=ProjectEnvelope)
def create_project(
    body: ProjectBody,
    user: Dict[str, Any] = Depends(get_current_user),
    controller: ProjectsController = Depends(get_projects_controller),
) -> ProjectEnvelope:
    """Create a project led by the caller."""

    return controller.create(RequestContext.build(user, body=body))


@router.delete("/{project_id}", response_model=SuccessResp)
def delete_project(
    project_id: str,
    user: Dict[str, Any] = Depends(get_current_user),
    controller: ProjectsController = Depends(get_projects_controller),
) -> SuccessResp:
    """Delete a project; only its leader may do so."""

    return controller.destroy(RequestContext.build(user, id=project_id))


@router.get("/{project_id}/members", response_model=MemberListResp)
def list_project_members(
    project_id: str,
    user: Dict[str, Any] = Depends(get_current_user),
    controller: ProjectsController = Depends(get_projects_controller),
) -> MemberListResp:
    return controller.get_project_members(RequestContext.build(user, id=project_id))


@router.post("/{project_id}/members", response_model=MemberEnvelope)
def add_project_member(
    project_id: str,
    body: MemberBody,
    user: Dict[str, Any] = Depends(get_current_user),
    controller: ProjectsController = Depends(get_projects_controller),
) -> MemberEnvelope:
    """Add a user to the project; only the leader may do so."""

    return controller.add_project_member(RequestContext.build(user, body=body, id=project_id))


@router.get("/{project_id}/tasks", response_model=TaskListResp)
def list_tasks(
    project_id: str,
    user: Dict[str, Any] = Depends(get_current_user),
    controller: ProjectsController = Depends(get_projects_controller),
) -> TaskListResp:
    return controller.get_tasks(RequestContext.build(user, id=project_id))


@router.post("/{project_id}/tasks", response_model=TaskEnvelope)
def create_task(
    project_id: str,
    body: TaskCreateReq,
    user: Dict[str, Any] = Depends(get_current_user),
    controller: ProjectsController = Depends(get_projects_controller),
) -> TaskEnvelope:
    return controller.create_task(RequestContext.build(user, body=body, id=project_id))


@router.put("/{project_id}/tasks/{task_id}", response_model=UpdatedTaskEnvelope)
def update_task(
    project_id: str,
    task_id: str,
    body: TaskUpdateReq,
    user: Dict[str, Any] = Depends(get_current_user),
    controller: ProjectsController = Depends(get_projects_controller),
) -> UpdatedTaskEnvelope:
    """Update an existing task in place."""

    return controller.update_task(RequestContext.build(user, body=body, id=project_id, task_id=task_id))


@router.delete("/{project_id}/tasks/{task_id}", response_model=SuccessResp)
def delete_task(
    project_id: str,
    task_id: str,
    user: Dict[str, Any] = Depends(get_current_user),
    controller: ProjectsController = Depends(get_projects_controller),
) -> SuccessResp:
    """Delete a task; allowed for its assignee and the project leader."""

    return controller.delete_task(RequestContext.build(user, id=project_id, task_id=task_id))

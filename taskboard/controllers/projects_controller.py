"""Project, membership and task operations behind the ``/projects`` routes.

Each method takes a :class:`RequestContext`, performs at most one ownership
check and returns a response envelope. The controller knows nothing about
FastAPI; the routers build the context and render the result.
"""

from __future__ import annotations

from typing import List

from loguru import logger
from pydantic.alias_generators import to_camel

from taskboard.controllers.context import RequestContext
from taskboard.domain import models as m
from taskboard.domain.errors import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from taskboard.domain.schemas import (
    LeaderProjectsResp,
    MemberBody,
    MemberEnvelope,
    MemberListResp,
    MemberProjectsResp,
    ProjectBody,
    ProjectEnvelope,
    ProjectListResp,
    ProjectMemberResp,
    ProjectResp,
    SuccessResp,
    TaskCreateReq,
    TaskEnvelope,
    TaskListResp,
    TaskResp,
    TaskUpdateReq,
    UpdatedTaskEnvelope,
)
from taskboard.instrumentation.trace import tracepoint
from taskboard.services.project_member_service import ProjectMemberService
from taskboard.services.projects_service import ProjectsService
from taskboard.services.tasks_service import TasksService
from taskboard.services.users_service import UsersService

_REQUIRED_TASK_FIELDS = ("title", "user_id", "status")


def _to_project_resp(project: m.Project) -> ProjectResp:
    return ProjectResp(id=project.id, name=project.name, leader_id=project.leader_id)


def _to_task_resp(task: m.Task) -> TaskResp:
    return TaskResp(
        id=task.id,
        project_id=task.project_id,
        user_id=task.user_id,
        title=task.title,
        description=task.description or "",
        time_estimation=task.time_estimation or "",
        status=task.status,
    )


def _to_member_resp(member: m.ProjectMember) -> ProjectMemberResp:
    return ProjectMemberResp(id=member.id, project_id=member.project_id, user_id=member.user_id)


class ProjectsController:
    def __init__(
        self,
        *,
        projects: ProjectsService,
        tasks: TasksService,
        users: UsersService,
        members: ProjectMemberService,
    ) -> None:
        self.projects = projects
        self.tasks = tasks
        self.users = users
        self.members = members

    # --- lookups -------------------------------------------------------------------------------
    def _require_project(self, project_id: int) -> m.Project:
        project = self.projects.find_project_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return project

    def _require_task(self, project_id: int, task_id: int) -> m.Task:
        task = self.tasks.find_task_by_id(task_id)
        if task is None or task.project_id != project_id:
            raise NotFoundError("Task not found")
        return task

    def _require_user(self, user_id: int) -> m.User:
        user = self.users.find_user_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    # --- projects ------------------------------------------------------------------------------
    def index(self, ctx: RequestContext) -> LeaderProjectsResp:
        projects = self.projects.find_all_for_user(ctx.user_id)
        return LeaderProjectsResp(leader_projects=[_to_project_resp(p) for p in projects])

    def index_member_of(self, ctx: RequestContext) -> MemberProjectsResp:
        projects = self.projects.find_all_with_member(ctx.user_id)
        return MemberProjectsResp(member_projects=[_to_project_resp(p) for p in projects])

    def member_of(self, ctx: RequestContext) -> ProjectListResp:
        """Resolve the caller's membership records one project at a time."""

        projects: List[ProjectResp] = []
        for membership in self.members.find_all_for_user_id(ctx.user_id):
            project = self.projects.find_project_by_id(membership.project_id)
            if project is None:
                logger.warning("membership {} points at missing project {}", membership.id, membership.project_id)
                continue
            projects.append(_to_project_resp(project))
        return ProjectListResp(projects=projects)

    def create(self, ctx: RequestContext) -> ProjectEnvelope:
        body = ctx.body_as(ProjectBody)
        leader = self._require_user(ctx.user_id)
        project = self.projects.create_project(m.Project(name=body.name, leader_id=leader.id))
        logger.bind(user=ctx.user_id).info("project created id={} name={!r}", project.id, project.name)
        tracepoint("project.created", project_id=project.id, leader_id=project.leader_id)
        return ProjectEnvelope(project=_to_project_resp(project))

    def destroy(self, ctx: RequestContext) -> SuccessResp:
        project = self._require_project(ctx.int_param("id"))
        if project.leader_id != ctx.user_id:
            logger.bind(user=ctx.user_id).warning("denied delete of project {}", project.id)
            tracepoint("authz.denied", action="project.delete", **ctx.describe())
            raise UnauthorizedError()

        project_id = project.id
        self.projects.remove_project(project)
        logger.bind(user=ctx.user_id).info("project deleted id={}", project_id)
        return SuccessResp(success=True)

    # --- members -------------------------------------------------------------------------------
    def get_project_members(self, ctx: RequestContext) -> MemberListResp:
        members = self.members.find_all_for_project(ctx.int_param("id"))
        return MemberListResp(members=[_to_member_resp(member) for member in members])

    def add_project_member(self, ctx: RequestContext) -> MemberEnvelope:
        project = self._require_project(ctx.int_param("id"))
        if project.leader_id != ctx.user_id:
            logger.bind(user=ctx.user_id).warning("denied member add on project {}", project.id)
            tracepoint("authz.denied", action="member.add", **ctx.describe())
            raise UnauthorizedError()

        body = ctx.body_as(MemberBody)
        self._require_user(body.user_id)
        if body.user_id == project.leader_id:
            raise ConflictError("The leader cannot be added as a member")
        if self.members.find_membership(project.id, body.user_id) is not None:
            raise ConflictError("User is already a member of this project")

        member = self.members.create_member(m.ProjectMember(project_id=project.id, user_id=body.user_id))
        logger.bind(user=ctx.user_id).info("member {} added to project {}", member.user_id, project.id)
        return MemberEnvelope(member=_to_member_resp(member))

    # --- tasks ---------------------------------------------------------------------------------
    def get_tasks(self, ctx: RequestContext) -> TaskListResp:
        tasks = self.tasks.find_all_for_project(ctx.int_param("id"))
        return TaskListResp(tasks=[_to_task_resp(task) for task in tasks])

    def create_task(self, ctx: RequestContext) -> TaskEnvelope:
        project = self._require_project(ctx.int_param("id"))
        body = ctx.body_as(TaskCreateReq)
        if body.project_id is not None and body.project_id != project.id:
            raise ValidationError("Body projectId does not match the path")

        assignee_id = body.user_id if body.user_id is not None else ctx.user_id
        self._require_user(assignee_id)

        task = self.tasks.create_task(
            m.Task(
                project_id=project.id,
                user_id=assignee_id,
                title=body.title,
                description=body.description,
                time_estimation=body.time_estimation,
                status=body.status,
            )
        )
        task = self._require_task(project.id, task.id)
        logger.bind(user=ctx.user_id).info("task created id={} project={}", task.id, project.id)
        return TaskEnvelope(task=_to_task_resp(task))

    def update_task(self, ctx: RequestContext) -> UpdatedTaskEnvelope:
        """Update the addressed task in place with the fields present in the body."""

        project_id = ctx.int_param("id")
        task = self._require_task(project_id, ctx.int_param("task_id"))
        body = ctx.body_as(TaskUpdateReq)

        changes = body.model_dump(exclude_unset=True)
        for key in _REQUIRED_TASK_FIELDS:
            if key in changes and changes[key] is None:
                raise ValidationError(f"{to_camel(key)} must not be null")
        if "user_id" in changes:
            self._require_user(changes["user_id"])
        # description and timeEstimation may be cleared with null
        changes = {key: ("" if value is None else value) for key, value in changes.items()}

        self.tasks.update_task(task, changes)
        task = self._require_task(project_id, task.id)
        logger.bind(user=ctx.user_id).info("task updated id={} fields={}", task.id, sorted(changes))
        return UpdatedTaskEnvelope(updated_task=_to_task_resp(task))

    def delete_task(self, ctx: RequestContext) -> SuccessResp:
        task = self._require_task(ctx.int_param("id"), ctx.int_param("task_id"))
        if ctx.user_id not in (task.user_id, task.project.leader_id):
            logger.bind(user=ctx.user_id).warning("denied delete of task {}", task.id)
            tracepoint("authz.denied", action="task.delete", **ctx.describe())
            raise UnauthorizedError()

        task_id = task.id
        self.tasks.delete_task(task)
        logger.bind(user=ctx.user_id).info("task deleted id={}", task_id)
        return SuccessResp(success=True)

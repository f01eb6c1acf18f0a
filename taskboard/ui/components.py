"""Server-rendered project board.

``render_project`` draws one project with a delete trigger, ``render_projects``
lays out the "Leader Of" and "Member Of" columns. Neither performs network
calls: the trigger's action comes from the ``delete_project`` callback supplied
by the caller.
"""

from __future__ import annotations

from html import escape
from typing import Callable, Sequence

from taskboard.domain.schemas import ProjectResp

DeleteProject = Callable[[ProjectResp], str]


def delete_project_action(project: ProjectResp) -> str:
    """Default trigger action: call the page-level ``deleteProject`` script."""

    return f"deleteProject({int(project.id)})"


def render_project(project: ProjectResp, delete_project: DeleteProject) -> str:
    action = escape(delete_project(project), quote=True)
    return (
        f'<div class="project flex m-2 p-2" data-project-id="{int(project.id)}">'
        f'<span class="project-name">{escape(project.name)}</span>'
        f'<button type="button" class="delete-project" onclick="{action}">Delete</button>'
        "</div>"
    )


def _render_column(key: str, title: str, projects: Sequence[ProjectResp], delete_project: DeleteProject) -> str:
    items = "".join(render_project(project, delete_project) for project in projects)
    return (
        f'<section class="w-1/2 border-2" data-column="{key}">'
        f'<div class="text-xl m-2 p-2"><strong>{escape(title)}</strong></div>'
        f"{items}"
        "</section>"
    )


def render_projects(
    projects: Sequence[ProjectResp],
    member_projects: Sequence[ProjectResp],
    delete_project: DeleteProject,
) -> str:
    """Render led projects and member projects side by side."""

    return (
        '<div class="flex m-2 p-2">'
        f'{_render_column("leader", "Leader Of", projects, delete_project)}'
        f'{_render_column("member", "Member Of", member_projects, delete_project)}'
        "</div>"
    )


_DELETE_SCRIPT = """
async function deleteProject(id) {
  const token = window.localStorage.getItem("taskboard.token");
  const resp = await fetch(`/projects/${id}`, {
    method: "DELETE",
    headers: { Authorization: `Bearer ${token}` },
  });
  if (resp.ok) {
    document.querySelectorAll(`[data-project-id="${id}"]`).forEach((el) => el.remove());
  }
}
"""


def render_home_page(projects: Sequence[ProjectResp], member_projects: Sequence[ProjectResp]) -> str:
    board = render_projects(projects, member_projects, delete_project_action)
    return (
        "<!DOCTYPE html>"
        '<html lang="en"><head><meta charset="utf-8"><title>Projects</title></head>'
        f"<body>{board}<script>{_DELETE_SCRIPT}</script></body></html>"
    )

"""HTML page showing the caller's project board."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from taskboard.controllers.context import RequestContext
from taskboard.controllers.projects_controller import ProjectsController
from taskboard.deps import get_current_user, get_projects_controller
from taskboard.ui.components import render_home_page

router = APIRouter(tags=["ui"])


@router.get("/home", response_class=HTMLResponse)
def home(
    user: Dict[str, Any] = Depends(get_current_user),
    controller: ProjectsController = Depends(get_projects_controller),
) -> HTMLResponse:
    ctx = RequestContext.build(user)
    leader = controller.index(ctx).leader_projects
    member = controller.index_member_of(ctx).member_projects
    return HTMLResponse(render_home_page(leader, member))

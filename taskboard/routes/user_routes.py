from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from taskboard.controllers.context import RequestContext
from taskboard.deps import get_current_user, get_users_service
from taskboard.domain.errors import NotFoundError
from taskboard.domain.schemas import UserEnvelope, UserResp
from taskboard.services.users_service import UsersService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserEnvelope)
def read_current_user(
    user: Dict[str, Any] = Depends(get_current_user),
    users: UsersService = Depends(get_users_service),
) -> UserEnvelope:
    """Return the account behind the caller's token."""

    ctx = RequestContext.build(user)
    record = users.find_user_by_id(ctx.user_id)
    if record is None:
        raise NotFoundError("User not found")
    return UserEnvelope(user=UserResp(id=record.id, username=record.username))

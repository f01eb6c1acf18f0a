"""Authentication helper routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from taskboard.config import settings
from taskboard.deps import get_users_service
from taskboard.domain import models as m
from taskboard.domain.errors import ConflictError
from taskboard.domain.schemas import CredentialsReq, TokenResp, UserEnvelope, UserResp
from taskboard.services.users_service import UsersService
from taskboard.utils.passwords import hash_password, verify_password
from taskboard.utils.tokens import issue_token

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserEnvelope, status_code=201)
def register(body: CredentialsReq, users: UsersService = Depends(get_users_service)) -> UserEnvelope:
    """Create a user account."""

    if users.find_user_by_username(body.username) is not None:
        raise ConflictError("Username already taken")
    user = users.create_user(m.User(username=body.username, password_hash=hash_password(body.password)))
    logger.bind(user=user.id).info("user registered username={!r}", user.username)
    return UserEnvelope(user=UserResp(id=user.id, username=user.username))


@router.post("/token", response_model=TokenResp)
def token(body: CredentialsReq, users: UsersService = Depends(get_users_service)) -> TokenResp:
    """Return a bearer token for valid credentials."""

    user = users.find_user_by_username(body.username)
    if user is None or not verify_password(body.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    access_token = issue_token(user_id=user.id, username=user.username)
    return TokenResp(access_token=access_token, expires_in=settings.jwt_ttl_seconds)

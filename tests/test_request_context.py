from __future__ import annotations

import pytest

from taskboard.controllers.context import Identity, RequestContext
from taskboard.domain.errors import UnauthorizedError, ValidationError
from taskboard.domain.schemas import ProjectBody


def test_build_carries_identity_params_and_body() -> None:
    body = ProjectBody(name="Roadmap")
    ctx = RequestContext.build({"user_id": 7, "sub": "ada"}, body=body, id=10, task_id="3")

    assert ctx.identity == Identity(user_id=7, username="ada")
    assert ctx.user_id == 7
    assert ctx.params == {"id": "10", "task_id": "3"}
    assert ctx.int_param("id") == 10
    assert ctx.body_as(ProjectBody) is body


def test_string_user_id_claim_is_parsed() -> None:
    assert RequestContext.build({"user_id": "12"}).user_id == 12


@pytest.mark.parametrize(
    "claims",
    [{"sub": "ghost"}, {"user_id": None}, {"user_id": "abc"}, {"user_id": True}, {"user_id": 0}, {"user_id": 2**63}],
)
def test_unusable_claims_are_unauthorized(claims: dict) -> None:
    with pytest.raises(UnauthorizedError):
        RequestContext.build(claims)


def test_anonymous_context_has_no_user() -> None:
    ctx = RequestContext.build(None, id="1")
    with pytest.raises(UnauthorizedError):
        _ = ctx.user_id


@pytest.mark.parametrize("raw", ["abc", "1_0", "-1", "", "1.5", "²"])
def test_malformed_ids_are_rejected(raw: str) -> None:
    ctx = RequestContext.build({"user_id": 1}, id=raw)
    with pytest.raises(ValidationError) as exc:
        ctx.int_param("id")
    assert exc.value.status_code == 422


def test_oversized_id_is_rejected() -> None:
    ctx = RequestContext.build({"user_id": 1}, id="99999999999999999999", task_id=str(2**63 - 1))

    assert ctx.int_param("task_id") == 2**63 - 1
    with pytest.raises(ValidationError) as exc:
        ctx.int_param("id")
    assert exc.value.status_code == 422


def test_missing_param_is_rejected() -> None:
    with pytest.raises(ValidationError):
        RequestContext.build({"user_id": 1}).int_param("task_id")

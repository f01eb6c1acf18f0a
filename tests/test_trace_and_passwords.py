from __future__ import annotations

import json
from typing import List

import pytest
from loguru import logger

from taskboard.config import settings
from taskboard.domain.errors import UnauthorizedError
from taskboard.instrumentation import trace
from taskboard.utils.passwords import hash_password, verify_password


@pytest.fixture
def captured_logs(monkeypatch: pytest.MonkeyPatch):
    messages: List[str] = []
    sink_id = logger.add(messages.append, format="{message}", level="INFO")
    monkeypatch.setattr(settings, "trace_mode", True)
    monkeypatch.setattr(settings, "trace_sampling", 1.0)
    yield messages
    logger.remove(sink_id)


def _payloads(messages: List[str]) -> List[dict]:
    return [json.loads(message) for message in messages if message.startswith("{")]


def test_tracepoint_emits_json(captured_logs: List[str]) -> None:
    trace.tracepoint("project.created", project_id=3, tags=("a", "b"))

    payload = _payloads(captured_logs)[-1]
    assert payload["name"] == "project.created"
    assert payload["project_id"] == 3
    assert payload["tags"] == ["a", "b"]
    assert payload["evt"] == "trace"


def test_trace_exception_ignores_sampling(captured_logs: List[str], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "trace_sampling", 0.0)

    trace.tracepoint("dropped")
    trace.trace_exception("app_error", UnauthorizedError(), code="unauthorized")

    payloads = _payloads(captured_logs)
    assert [p["name"] for p in payloads] == ["app_error"]
    assert payloads[0]["exception"]["status_code"] == 401
    assert payloads[0]["exception"]["type"] == "UnauthorizedError"


def test_tracing_disabled_emits_nothing(captured_logs: List[str], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "trace_mode", False)

    trace.tracepoint("quiet")
    trace.trace_exception("quiet", RuntimeError("boom"))

    assert _payloads(captured_logs) == []


def test_password_hash_round_trip() -> None:
    hashed = hash_password("hunter2")

    assert hashed != "hunter2"
    assert verify_password("hunter2", hashed)
    assert not verify_password("hunter3", hashed)
    assert not verify_password("", hashed)
    assert not verify_password("hunter2", "not-a-hash")


def test_empty_password_rejected() -> None:
    with pytest.raises(ValueError):
        hash_password("")

"""JSON trace events emitted through loguru when ``TRACE_MODE`` is on."""

from __future__ import annotations

import json
import random
import traceback
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any, Dict

from loguru import logger

from taskboard.config import settings

_request_id_ctx: ContextVar[str | None] = ContextVar("trace_request_id", default=None)


def push_request_id(request_id: str) -> Token[str | None]:
    return _request_id_ctx.set(request_id)


def reset_request_id(token: Token[str | None]) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


def _coerce(value: Any) -> Any:
    """Reduce *value* to JSON primitives; unknown objects become ``str``."""

    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, dict):
        return {str(key): _coerce(val) for key, val in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_coerce(item) for item in value]
    return str(value)


def _sampled() -> bool:
    rate = max(0.0, min(float(settings.trace_sampling or 0.0), 1.0))
    return rate >= 1.0 or (rate > 0.0 and random.random() <= rate)


def _emit(event: Dict[str, Any], *, force: bool = False) -> None:
    if not settings.trace_mode:
        return
    if not force and not _sampled():
        return
    record = {
        "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
        "evt": "trace",
        "request_id": get_request_id() or "",
        **event,
    }
    logger.info(json.dumps(record, ensure_ascii=False, separators=(",", ":")))


def tracepoint(name: str, **fields: Any) -> None:
    """Emit a sampled trace event called *name*."""

    _emit({"name": name, **{key: _coerce(value) for key, value in fields.items()}})


def trace_exception(name: str, exc: Exception, **fields: Any) -> None:
    """Emit an event describing *exc*; bypasses sampling."""

    detail: Dict[str, Any] = {"type": type(exc).__name__, "message": str(exc)}
    status_code = getattr(exc, "status_code", None)
    if status_code is not None:
        detail["status_code"] = status_code
    lines = traceback.format_exception_only(type(exc), exc)
    detail["stack"] = [line.strip() for line in lines if line.strip()][:4]
    _emit({"name": name, "exception": detail, **{key: _coerce(value) for key, value in fields.items()}}, force=True)

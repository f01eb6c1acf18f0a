from __future__ import annotations

from time import perf_counter
from typing import Awaitable, Callable
from uuid import uuid4

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from taskboard.instrumentation.trace import push_request_id, reset_request_id


class TraceRequestMiddleware(BaseHTTPMiddleware):
    """Attach request identifiers and an access log line to each request."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get("X-Request-Id") or str(uuid4())
        token = push_request_id(request_id)
        request.state.request_id = request_id

        start = perf_counter()
        response: Response | None = None
        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = (perf_counter() - start) * 1000
            claims = getattr(request.state, "user", {}) or {}
            user_id = claims.get("user_id", "anonymous") if isinstance(claims, dict) else "anonymous"
            status = response.status_code if response is not None else 500

            logger.bind(
                req=request_id,
                route=request.url.path,
                user=str(user_id),
                method=request.method,
                status=status,
                duration_ms=round(duration_ms, 2),
            ).info("access status={} ms={:.1f}", status, duration_ms)

            if response is not None:
                response.headers.setdefault("X-Request-Id", request_id)

            reset_request_id(token)

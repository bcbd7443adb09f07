"""
cep_weather.observability.middleware

HTTP middleware shared by both services.

Responsibilities:
- Generate/propagate request IDs and bind them, with the inbound trace id, into
  structlog contextvars.
- Enforce the overall per-request timeout.
"""

from __future__ import annotations

import asyncio
import uuid

import structlog
from opentelemetry import trace
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.status import HTTP_504_GATEWAY_TIMEOUT
from starlette.types import ASGIApp

from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import extract_context

log = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    - Ensures every request has a request id
    - Binds request-scoped contextvars for structured logs, including the caller's
      trace id when the request carries a `traceparent`
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
        )
        trace_id = _inbound_trace_id(request)
        if trace_id is not None:
            structlog.contextvars.bind_contextvars(trace_id=trace_id)
        try:
            response: Response = await call_next(request)
        finally:
            # Avoid leaking context across requests under async concurrency.
            structlog.contextvars.clear_contextvars()

        response.headers["x-request-id"] = request_id
        return response


def _inbound_trace_id(request: Request) -> str | None:
    ctx = trace.get_current_span(extract_context(request.headers)).get_span_context()
    if not ctx.is_valid:
        return None
    return format(ctx.trace_id, "032x")


class RequestTimeoutMiddleware(BaseHTTPMiddleware):
    """
    Aborts a request that has not produced a response within `timeout_seconds`.
    """

    def __init__(self, app: ASGIApp, *, timeout_seconds: float) -> None:
        super().__init__(app)
        self._timeout = timeout_seconds

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await asyncio.wait_for(call_next(request), timeout=self._timeout)
        except asyncio.TimeoutError:
            log.warning("request.timeout", timeout_seconds=self._timeout)
            return JSONResponse(
                {"message": "request timeout"},
                status_code=HTTP_504_GATEWAY_TIMEOUT,
            )


# --- Module Notes -----------------------------------------------------------
# The timeout wraps the handler only; spans opened by the handler are closed when the
# cancelled task unwinds through `traced_step`.

"""
cep_weather.clients.back_service

HTTP client boundary used by the front service to call the back service.

Responsibilities:
- Inject the active trace context into the outgoing request headers.
- Classify the back service's status code structurally (never by message text).
- Decode a successful body into a `TemperatureResult`.
"""

from __future__ import annotations

import asyncio

import httpx
from opentelemetry.trace import SpanKind, Tracer
from pydantic import ValidationError

from cep_weather.domain.errors import FRONT_MESSAGES, ErrorKind, ErrorOutcome, kind_for_status
from cep_weather.domain.temperature import TemperatureResult
from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import inject_context, traced_step

log = get_logger(__name__)


class BackServiceClient:
    def __init__(
        self,
        *,
        url: str,
        http: httpx.AsyncClient,
        tracer: Tracer,
        timeout_seconds: float = 5.0,
    ) -> None:
        self._url = url
        self._http = http
        self._tracer = tracer
        self._timeout = timeout_seconds

    async def get_weather(self, *, cep: str) -> TemperatureResult:
        with traced_step(
            self._tracer,
            "call-downstream",
            kind=SpanKind.CLIENT,
            attributes={"cep": cep, "server.url": self._url},
        ) as span:
            # Injected inside the span so the back service's root span becomes its child.
            headers = inject_context({})
            try:
                # httpx timeouts are per phase; the outer bound caps connect plus body.
                async with asyncio.timeout(self._timeout):
                    r = await self._http.get(
                        self._url,
                        params={"cep": cep},
                        headers=headers,
                        timeout=self._timeout,
                    )
            except TimeoutError as e:
                log.warning("back_service.timeout", timeout_seconds=self._timeout)
                raise _failure(
                    ErrorKind.upstream_failure, f"service-b call exceeded {self._timeout}s"
                ) from e
            except httpx.HTTPError as e:
                log.warning("back_service.transport_error", error=repr(e))
                raise _failure(ErrorKind.upstream_failure, f"failed to call service-b: {e!r}") from e

            span.set_attribute("http.response.status_code", r.status_code)

            kind = kind_for_status(r.status_code)
            if kind is not None:
                raise _failure(kind, f"service-b returned status {r.status_code}")

            try:
                return TemperatureResult.model_validate_json(r.content)
            except ValidationError as e:
                raise _failure(ErrorKind.upstream_failure, "failed to decode response") from e


def _failure(kind: ErrorKind, detail: str) -> ErrorOutcome:
    return ErrorOutcome(kind, FRONT_MESSAGES[kind], detail=detail)


# --- Module Notes -----------------------------------------------------------
# The back service encodes the error kind as its status code; this client is the only
# place that turns it back into a kind.

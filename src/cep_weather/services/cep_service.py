"""
cep_weather.services.cep_service

Front service pipeline (`POST /service-a`).

Responsibilities:
- Root the distributed trace for an inbound CEP submission.
- Parse and validate the body, distinguishing 400 (shape) from 422 (syntax).
- Forward to the back service and surface its outcome as a client-facing result.
"""

from __future__ import annotations

from collections.abc import Mapping

from opentelemetry.trace import SpanKind, Tracer
from pydantic import BaseModel, StrictStr, ValidationError
from starlette.status import HTTP_400_BAD_REQUEST

from cep_weather.clients.back_service import BackServiceClient
from cep_weather.domain.cep import validate_cep
from cep_weather.domain.errors import ErrorKind, ErrorOutcome
from cep_weather.domain.temperature import TemperatureResult
from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import extract_context, traced_step

log = get_logger(__name__)


class CepRequest(BaseModel):
    cep: StrictStr | None = None


class CepService:
    def __init__(self, *, client: BackServiceClient, tracer: Tracer) -> None:
        self._client = client
        self._tracer = tracer

    async def handle_cep(
        self, *, raw_body: bytes, carrier: Mapping[str, str]
    ) -> TemperatureResult:
        with traced_step(
            self._tracer,
            "handle-cep",
            context=extract_context(carrier),
            kind=SpanKind.SERVER,
        ) as span:
            try:
                cep = self._validate(raw_body)
            except ErrorOutcome as e:
                log.info("cep.rejected", kind=e.kind.value, reason=e.detail)
                raise

            span.set_attribute("cep", cep)
            log.info("cep.accepted", cep=cep)

            try:
                result = await self._client.get_weather(cep=cep)
            except ErrorOutcome as e:
                log.warning("cep.downstream_failed", cep=cep, kind=e.kind.value, reason=e.detail)
                raise

            span.set_attribute("city", result.city)
            span.set_attribute("http.response.status_code", 200)
            return result

    def _validate(self, raw_body: bytes) -> str:
        with traced_step(self._tracer, "validate-cep") as span:
            try:
                req = CepRequest.model_validate_json(raw_body)
            except ValidationError as e:
                raise ErrorOutcome(
                    ErrorKind.malformed_input,
                    "invalid request",
                    status_code=HTTP_400_BAD_REQUEST,
                    detail="invalid request body",
                ) from e

            if not req.cep:
                raise ErrorOutcome(
                    ErrorKind.malformed_input,
                    "cep is required",
                    status_code=HTTP_400_BAD_REQUEST,
                )

            span.set_attribute("cep", req.cep)
            return validate_cep(req.cep)


# --- Module Notes -----------------------------------------------------------
# Missing/empty `cep` and undecodable bodies are 400; a present but malformed `cep` is 422.

"""
cep_weather.clients.viacep

City Resolver boundary (ViaCEP): postal code to city name.

Responsibilities:
- GET `<base>/ws/<cep>/json/` and decode `{"localidade": ..., "erro"?: ...}`.
- Map a truthy `erro` or an empty city to NOT_FOUND; everything else that fails to
  UPSTREAM_FAILURE.
"""

from __future__ import annotations

import asyncio

import httpx
from opentelemetry.trace import SpanKind, Tracer
from pydantic import BaseModel, ValidationError
from starlette.status import HTTP_200_OK

from cep_weather.domain.errors import BACK_MESSAGES, ErrorKind, ErrorOutcome
from cep_weather.observability.tracing import traced_step


class ViaCepResponse(BaseModel):
    # A null city is treated like an empty one.
    localidade: str | None = None
    # ViaCEP has sent both `"erro": "true"` and `"erro": true` over time.
    erro: bool | str | None = None

    @property
    def flagged_error(self) -> bool:
        if isinstance(self.erro, str):
            return self.erro.strip().lower() not in ("", "false")
        return bool(self.erro)


class CityResolverClient:
    def __init__(
        self,
        *,
        base_url: str,
        http: httpx.AsyncClient,
        tracer: Tracer,
        timeout_seconds: float = 5.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http
        self._tracer = tracer
        self._timeout = timeout_seconds

    async def city_by_cep(self, *, cep: str) -> str:
        with traced_step(
            self._tracer,
            "get-city-by-cep",
            kind=SpanKind.CLIENT,
            attributes={"cep": cep},
        ) as span:
            try:
                async with asyncio.timeout(self._timeout):
                    r = await self._http.get(
                        f"{self._base_url}/ws/{cep}/json/", timeout=self._timeout
                    )
            except TimeoutError as e:
                raise _failure(f"viacep call exceeded {self._timeout}s") from e
            except httpx.HTTPError as e:
                raise _failure(f"viacep request failed: {e!r}") from e

            span.set_attribute("http.response.status_code", r.status_code)
            if r.status_code != HTTP_200_OK:
                raise _failure(f"viacep returned status {r.status_code}")

            city = self._decode(r.content)
            span.set_attribute("city", city)
            return city

    def _decode(self, body: bytes) -> str:
        with traced_step(self._tracer, "decode-viacep-response") as span:
            try:
                payload = ViaCepResponse.model_validate_json(body)
            except ValidationError as e:
                raise _failure("viacep response could not be decoded") from e

            if payload.flagged_error or not payload.localidade:
                raise ErrorOutcome(
                    ErrorKind.not_found,
                    BACK_MESSAGES[ErrorKind.not_found],
                    detail="zipcode not found",
                )

            span.set_attribute("city", payload.localidade)
            return payload.localidade


def _failure(detail: str) -> ErrorOutcome:
    return ErrorOutcome(
        ErrorKind.upstream_failure, BACK_MESSAGES[ErrorKind.upstream_failure], detail=detail
    )


# --- Module Notes -----------------------------------------------------------
# ViaCEP answers an unknown but well-formed CEP with HTTP 200 and an `erro` flag,
# so NOT_FOUND is decided from the body, never from the status code.

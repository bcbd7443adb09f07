"""
cep_weather.clients.weatherapi

Temperature Resolver boundary (WeatherAPI): city name to current Celsius reading.

Responsibilities:
- GET `<base>/v1/current.json?key=<key>&q=<city>` with the city URL-encoded.
- Decode `{"current": {"temp_c": number}}`.
- Map any non-200, transport or decode failure to UPSTREAM_FAILURE.
"""

from __future__ import annotations

import asyncio

import httpx
from opentelemetry.trace import SpanKind, Tracer
from pydantic import BaseModel, ValidationError
from starlette.status import HTTP_200_OK

from cep_weather.domain.errors import BACK_MESSAGES, ErrorKind, ErrorOutcome
from cep_weather.observability.tracing import traced_step


class CurrentWeather(BaseModel):
    temp_c: float


class WeatherApiResponse(BaseModel):
    current: CurrentWeather


class TemperatureResolverClient:
    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        http: httpx.AsyncClient,
        tracer: Tracer,
        timeout_seconds: float = 5.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._http = http
        self._tracer = tracer
        self._timeout = timeout_seconds

    async def temp_c_by_city(self, *, city: str) -> float:
        with traced_step(
            self._tracer,
            "get-temp-by-city",
            kind=SpanKind.CLIENT,
            attributes={"city": city},
        ) as span:
            try:
                # httpx percent-encodes query params, so "São Paulo" travels safely.
                async with asyncio.timeout(self._timeout):
                    r = await self._http.get(
                        f"{self._base_url}/v1/current.json",
                        params={"key": self._api_key, "q": city},
                        timeout=self._timeout,
                    )
            except TimeoutError as e:
                raise _failure(f"weatherapi call exceeded {self._timeout}s") from e
            except httpx.HTTPError as e:
                # Exception text can carry the request URL, and with it the key.
                raise _failure(f"weatherapi request failed: {type(e).__name__}") from e

            span.set_attribute("http.response.status_code", r.status_code)
            if r.status_code != HTTP_200_OK:
                raise _failure(f"weatherapi returned status {r.status_code}: {r.text[:200]}")

            temp_c = self._decode(r.content)
            span.set_attribute("temp_C", temp_c)
            return temp_c

    def _decode(self, body: bytes) -> float:
        with traced_step(self._tracer, "decode-weather-response") as span:
            try:
                payload = WeatherApiResponse.model_validate_json(body)
            except ValidationError as e:
                raise _failure("weatherapi response could not be decoded") from e

            span.set_attribute("temp_c", payload.current.temp_c)
            return payload.current.temp_c


def _failure(detail: str) -> ErrorOutcome:
    return ErrorOutcome(
        ErrorKind.upstream_failure, BACK_MESSAGES[ErrorKind.upstream_failure], detail=detail
    )


# --- Module Notes -----------------------------------------------------------
# A body without `current.temp_c` is treated as undecodable rather than as 0 °C.

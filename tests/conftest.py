"""
tests.conftest

Shared fixtures: settings, in-memory span collection, and fake upstream resolvers.

Responsibilities:
- Build both apps wired to `httpx.MockTransport` resolvers (no network).
- Collect finished spans with `InMemorySpanExporter` for trace assertions.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Iterator
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from cep_weather.api.app import create_back_app, create_front_app
from cep_weather.settings import BackSettings, FrontSettings

VIACEP_HOST = "viacep.test"
WEATHERAPI_HOST = "weatherapi.test"
SERVICE_B_URL = "http://service-b.test/weather"


@dataclass
class FakeResolvers:
    """
    Stands in for ViaCEP and WeatherAPI. Tests tweak the fields before calling.
    """

    cities: dict[str, str] = field(default_factory=lambda: {"87043480": "Maringá"})
    temp_c: float = 28.5
    viacep_status: int = 200
    weather_status: int = 200
    weather_body: bytes | None = None
    viacep_error: Exception | None = None
    weather_error: Exception | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == VIACEP_HOST:
            return self._viacep(request)
        if request.url.host == WEATHERAPI_HOST:
            return self._weatherapi(request)
        raise AssertionError(f"unexpected upstream call: {request.url}")

    def _viacep(self, request: httpx.Request) -> httpx.Response:
        if self.viacep_error is not None:
            raise self.viacep_error
        cep = request.url.path.split("/")[2]
        city = self.cities.get(cep)
        payload: dict[str, Any] = {"cep": cep, "localidade": city} if city else {"erro": "true"}
        return httpx.Response(self.viacep_status, json=payload)

    def _weatherapi(self, request: httpx.Request) -> httpx.Response:
        if self.weather_error is not None:
            raise self.weather_error
        if self.weather_body is not None:
            return httpx.Response(self.weather_status, content=self.weather_body)
        body = {"location": {"name": request.url.params["q"]}, "current": {"temp_c": self.temp_c}}
        return httpx.Response(self.weather_status, content=json.dumps(body).encode())

    @property
    def weather_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == WEATHERAPI_HOST]


@pytest.fixture
def span_exporter() -> Iterator[InMemorySpanExporter]:
    exporter = InMemorySpanExporter()
    yield exporter
    exporter.clear()


@pytest.fixture
def tracer_provider(span_exporter: InMemorySpanExporter) -> TracerProvider:
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return provider


@pytest.fixture
def back_settings() -> BackSettings:
    return BackSettings(
        env="test",
        weatherapi_key="test-key",
        trace_exporter="none",
        viacep_base_url=f"http://{VIACEP_HOST}",
        weatherapi_base_url=f"http://{WEATHERAPI_HOST}",
    )


@pytest.fixture
def front_settings() -> FrontSettings:
    return FrontSettings(env="test", service_b_url=SERVICE_B_URL, trace_exporter="none")


@pytest.fixture
def resolvers() -> FakeResolvers:
    return FakeResolvers()


@pytest.fixture
def back_app(
    back_settings: BackSettings, tracer_provider: TracerProvider, resolvers: FakeResolvers
) -> FastAPI:
    http = httpx.AsyncClient(transport=httpx.MockTransport(resolvers.handler))
    return create_back_app(settings=back_settings, tracer_provider=tracer_provider, http=http)


@pytest.fixture
def front_app(
    front_settings: FrontSettings, tracer_provider: TracerProvider, back_app: FastAPI
) -> FastAPI:
    # The front service reaches the back service in-process; headers cross a real ASGI boundary.
    http = httpx.AsyncClient(transport=httpx.ASGITransport(app=back_app))
    return create_front_app(settings=front_settings, tracer_provider=tracer_provider, http=http)


@pytest_asyncio.fixture
async def back_client(back_app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=back_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://service-b.test") as client:
        yield client


@pytest_asyncio.fixture
async def front_client(front_app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=front_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://service-a.test") as client:
        yield client



# --- Module Notes -----------------------------------------------------------
# Apps are exercised without lifespan: clients passed in are owned by the fixtures.

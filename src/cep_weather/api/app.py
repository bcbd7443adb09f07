"""
cep_weather.api.app

FastAPI app factories for the front ("service-a") and back ("service-b") services.

Responsibilities:
- Build each FastAPI application and register routers/middleware.
- Construct tracing, the shared httpx client, clients and services from settings.
- Render `ErrorOutcome` as `{"message": ...}` with the outcome's status code.
- Close the httpx client and flush spans on shutdown.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from opentelemetry.sdk.trace import TracerProvider

from cep_weather import __version__
from cep_weather.api.routers.cep import router as cep_router
from cep_weather.api.routers.health import router as health_router
from cep_weather.api.routers.weather import router as weather_router
from cep_weather.clients.back_service import BackServiceClient
from cep_weather.clients.viacep import CityResolverClient
from cep_weather.clients.weatherapi import TemperatureResolverClient
from cep_weather.domain.errors import ErrorOutcome
from cep_weather.observability.logging import configure_logging, get_logger
from cep_weather.observability.middleware import (
    RequestContextMiddleware,
    RequestTimeoutMiddleware,
)
from cep_weather.observability.tracing import configure_tracing, get_tracer
from cep_weather.services.cep_service import CepService
from cep_weather.services.weather_service import WeatherService
from cep_weather.settings import BackSettings, FrontSettings, ServiceSettings

log = get_logger(__name__)


def create_front_app(
    *,
    settings: FrontSettings,
    tracer_provider: TracerProvider | None = None,
    http: httpx.AsyncClient | None = None,
) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)
    provider = tracer_provider or configure_tracing(settings)
    tracer = get_tracer(provider, "service-a")
    client = http or httpx.AsyncClient()

    back = BackServiceClient(
        url=settings.service_b_url,
        http=client,
        tracer=tracer,
        timeout_seconds=settings.upstream_timeout_seconds,
    )

    app = _build_app(
        title="CEP Weather - Service A",
        settings=settings,
        provider=provider,
        http=client,
        owns_http=http is None,
    )
    app.state.cep_service = CepService(client=back, tracer=tracer)
    app.include_router(cep_router, tags=["cep"])
    return app


def create_back_app(
    *,
    settings: BackSettings,
    tracer_provider: TracerProvider | None = None,
    http: httpx.AsyncClient | None = None,
) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)
    provider = tracer_provider or configure_tracing(settings)
    tracer = get_tracer(provider, "service-b")
    client = http or httpx.AsyncClient()

    cities = CityResolverClient(
        base_url=settings.viacep_base_url,
        http=client,
        tracer=tracer,
        timeout_seconds=settings.upstream_timeout_seconds,
    )
    temperatures = TemperatureResolverClient(
        base_url=settings.weatherapi_base_url,
        api_key=settings.weatherapi_key,
        http=client,
        tracer=tracer,
        timeout_seconds=settings.upstream_timeout_seconds,
    )

    app = _build_app(
        title="CEP Weather - Service B",
        settings=settings,
        provider=provider,
        http=client,
        owns_http=http is None,
    )
    app.state.weather_service = WeatherService(
        cities=cities, temperatures=temperatures, tracer=tracer
    )
    app.include_router(weather_router, tags=["weather"])
    return app


def _build_app(
    *,
    title: str,
    settings: ServiceSettings,
    provider: TracerProvider,
    http: httpx.AsyncClient,
    owns_http: bool,
) -> FastAPI:
    app = FastAPI(
        title=title,
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=_lifespan(settings=settings, provider=provider, http=http, owns_http=owns_http),
    )

    # Starlette runs the last-added middleware first: request id, then timeout.
    app.add_middleware(
        RequestTimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds
    )
    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(ErrorOutcome, _error_outcome_handler)  # type: ignore[arg-type]
    app.include_router(health_router, tags=["health"])
    return app


def _lifespan(
    *,
    settings: ServiceSettings,
    provider: TracerProvider,
    http: httpx.AsyncClient,
    owns_http: bool,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, port=settings.port)
        try:
            yield
        finally:
            if owns_http:
                await http.aclose()
            # Drain pending spans so no trace is truncated on shutdown.
            provider.shutdown()
            log.info("shutdown")

    return lifespan


async def _error_outcome_handler(_: Request, exc: ErrorOutcome) -> JSONResponse:
    return JSONResponse({"message": exc.message}, status_code=exc.status_code)


# --- Module Notes -----------------------------------------------------------
# Business logic stays in services/clients; this module only composes them from settings.

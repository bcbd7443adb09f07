"""
cep_weather.api.__main__

Entrypoint for running either service via `python -m cep_weather.api front|back`.

Responsibilities:
- Load settings (missing required variables abort startup).
- Create the app.
- Start uvicorn with structlog-compatible logging config and a bounded graceful shutdown.
"""

from __future__ import annotations

import sys

import uvicorn
from fastapi import FastAPI
from opentelemetry import trace

from cep_weather.api.app import create_back_app, create_front_app
from cep_weather.observability.tracing import configure_tracing
from cep_weather.settings import ServiceSettings, get_back_settings, get_front_settings


def run_front() -> None:
    settings = get_front_settings()
    provider = configure_tracing(settings)
    trace.set_tracer_provider(provider)
    _serve(create_front_app(settings=settings, tracer_provider=provider), settings)


def run_back() -> None:
    settings = get_back_settings()
    provider = configure_tracing(settings)
    trace.set_tracer_provider(provider)
    _serve(create_back_app(settings=settings, tracer_provider=provider), settings)


def _serve(app: FastAPI, settings: ServiceSettings) -> None:
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.port,
        log_config=None,  # structlog
        timeout_graceful_shutdown=settings.shutdown_grace_seconds,
    )


def main() -> None:
    services = {"front": run_front, "back": run_back}
    if len(sys.argv) != 2 or sys.argv[1] not in services:
        sys.exit("usage: python -m cep_weather.api front|back")
    services[sys.argv[1]]()


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# uvicorn exits non-zero when the port cannot be bound; SIGINT/SIGTERM drain in-flight
# requests for `shutdown_grace_seconds` before the listener is closed.

"""
cep_weather.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Hand routers the services built by the app factory (stored on app.state).
"""

from __future__ import annotations

from fastapi import Request

from cep_weather.services.cep_service import CepService
from cep_weather.services.weather_service import WeatherService


def cep_service_dep(request: Request) -> CepService:
    # Created in `cep_weather.api.app.create_front_app`.
    return request.app.state.cep_service  # type: ignore[attr-defined]


def weather_service_dep(request: Request) -> WeatherService:
    # Created in `cep_weather.api.app.create_back_app`.
    return request.app.state.weather_service  # type: ignore[attr-defined]


# --- Module Notes -----------------------------------------------------------
# Services are built once per app from immutable settings; nothing here reads the environment.

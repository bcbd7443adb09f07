"""
cep_weather.settings

Configuration models for both services (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the front and back services.
- Fail fast on missing required variables (`SERVICE_B_URL`, `WEATHERAPI_KEY`).
- Hide secrets from repr/logging (the WeatherAPI key).
- Offer cached settings instances read once at process startup.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    """
    Settings shared by both services. Variable names carry no prefix so the
    documented names (`PORT`, `SERVICE_B_URL`, `WEATHERAPI_KEY`) apply as-is.
    """

    model_config = SettingsConfigDict(case_sensitive=False, frozen=True)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "cep-weather"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    port: int = 8080

    # Every outbound call gets this bound; the whole request gets the second one.
    upstream_timeout_seconds: float = 5.0
    request_timeout_seconds: float = 30.0
    shutdown_grace_seconds: int = 10

    # Tracing
    trace_exporter: Literal["otlp", "console", "none"] = "otlp"
    otel_exporter_otlp_endpoint: str = "http://localhost:4317"


class FrontSettings(ServiceSettings):
    service_name: str = "service-a"
    port: int = 8080

    # Full weather endpoint of the back service, e.g. http://service-b:8081/weather
    service_b_url: str


class BackSettings(ServiceSettings):
    service_name: str = "service-b"
    port: int = 8081

    weatherapi_key: str = Field(repr=False)
    viacep_base_url: str = "https://viacep.com.br"
    weatherapi_base_url: str = "https://api.weatherapi.com"


@lru_cache(maxsize=1)
def get_front_settings() -> FrontSettings:
    return FrontSettings()  # type: ignore[call-arg]


@lru_cache(maxsize=1)
def get_back_settings() -> BackSettings:
    return BackSettings()  # type: ignore[call-arg]


# --- Module Notes -----------------------------------------------------------
# Handlers never read the environment themselves: settings are resolved here once and
# passed into the app factories, which hand them to clients and services.

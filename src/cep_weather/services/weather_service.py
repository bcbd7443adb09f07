"""
cep_weather.services.weather_service

Back service pipeline (`GET /weather`).

Responsibilities:
- Continue the trace started by the front service.
- Re-validate the CEP, resolve its city, resolve the city's temperature.
- Convert the Celsius reading and compose the result.
"""

from __future__ import annotations

from collections.abc import Mapping

from opentelemetry.trace import SpanKind, Tracer

from cep_weather.clients.viacep import CityResolverClient
from cep_weather.clients.weatherapi import TemperatureResolverClient
from cep_weather.domain.cep import validate_cep
from cep_weather.domain.errors import ErrorOutcome
from cep_weather.domain.temperature import TemperatureResult
from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import extract_context, traced_step

log = get_logger(__name__)


class WeatherService:
    def __init__(
        self,
        *,
        cities: CityResolverClient,
        temperatures: TemperatureResolverClient,
        tracer: Tracer,
    ) -> None:
        self._cities = cities
        self._temperatures = temperatures
        self._tracer = tracer

    async def handle_weather(
        self, *, cep: str, carrier: Mapping[str, str]
    ) -> TemperatureResult:
        with traced_step(
            self._tracer,
            "handle-weather",
            context=extract_context(carrier),
            kind=SpanKind.SERVER,
        ) as span:
            log.info("weather.received", cep=cep)
            try:
                with traced_step(self._tracer, "validate-cep", attributes={"cep": cep}):
                    validate_cep(cep)
                span.set_attribute("cep", cep)

                city = await self._cities.city_by_cep(cep=cep)
                span.set_attribute("city", city)

                temp_c = await self._temperatures.temp_c_by_city(city=city)
            except ErrorOutcome as e:
                log.warning("weather.failed", cep=cep, kind=e.kind.value, reason=e.detail)
                raise

            result = self._convert(city=city, temp_c=temp_c)
            span.set_attribute("http.response.status_code", 200)
            log.info("weather.resolved", cep=cep, city=city, temp_c=temp_c)
            return result

    def _convert(self, *, city: str, temp_c: float) -> TemperatureResult:
        with traced_step(self._tracer, "convert-temperatures") as span:
            result = TemperatureResult.from_celsius(city=city, temp_c=temp_c)
            span.set_attributes(
                {"temp_C": result.temp_c, "temp_F": result.temp_f, "temp_K": result.temp_k}
            )
            return result


# --- Module Notes -----------------------------------------------------------
# Outcome kinds leave this service as status codes (422/404/500); the front service
# reads them back with `domain.errors.kind_for_status`.

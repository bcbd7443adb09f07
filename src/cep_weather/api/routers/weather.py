from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from cep_weather.api.deps import weather_service_dep
from cep_weather.domain.errors import ErrorMessage
from cep_weather.services.weather_service import WeatherService

router = APIRouter()


@router.get(
    "/weather",
    responses={
        404: {"model": ErrorMessage},
        422: {"model": ErrorMessage},
        500: {"model": ErrorMessage},
    },
)
async def get_weather(
    request: Request,
    cep: str = "",
    svc: WeatherService = Depends(weather_service_dep),
) -> dict[str, Any]:
    result = await svc.handle_weather(cep=cep, carrier=request.headers)
    return result.to_wire()

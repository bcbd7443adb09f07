from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from cep_weather.api.deps import cep_service_dep
from cep_weather.domain.errors import ErrorMessage
from cep_weather.services.cep_service import CepService

router = APIRouter()


@router.post(
    "/service-a",
    responses={
        400: {"model": ErrorMessage},
        404: {"model": ErrorMessage},
        422: {"model": ErrorMessage},
        500: {"model": ErrorMessage},
    },
)
async def handle_cep(
    request: Request,
    svc: CepService = Depends(cep_service_dep),
) -> dict[str, Any]:
    # The body is parsed by the service so shape errors map to 400, not FastAPI's 422.
    raw = await request.body()
    result = await svc.handle_cep(raw_body=raw, carrier=request.headers)
    return result.to_wire()

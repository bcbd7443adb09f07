"""
cep_weather.api.routers.health

Health endpoint shared by both services.

Responsibilities:
- Provide liveness probe (`/healthz`).
"""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    # Liveness: process is up and serving HTTP.
    return {"status": "ok"}


# --- Module Notes -----------------------------------------------------------
# There is no readiness probe: neither service holds a dependency worth gating on.

"""
Health check endpoint.

GET /health — reports whether the signing key and the code runner are configured.
Rules:
- No JWT signing secret → "unhealthy" (503); no token could be issued or checked.
- Everything else is informational and always 200.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from config import AppSettings
from dependencies import get_settings
from schemas.dto.responses.common import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(settings: AppSettings = Depends(get_settings)) -> JSONResponse:
    checks: dict[str, str] = {}
    overall = "healthy"

    if settings.jwt.jwt_secret:
        checks["signing_key"] = "ok"
    else:
        checks["signing_key"] = "missing"
        overall = "unhealthy"

    checks["email_backend"] = settings.email.email_backend
    checks["piston_api_key"] = "configured" if settings.piston.piston_api_key else "not_configured"

    status_code = 503 if overall == "unhealthy" else 200
    return JSONResponse(
        status_code=status_code,
        content=HealthResponse(status=overall, checks=checks).model_dump(),
    )

"""Health check endpoint."""

import time
from fastapi import APIRouter, Request

from formguard.models.responses import HealthResponse

router = APIRouter()

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """System health check with registry status."""
    registry = getattr(request.app.state, "form_registry", None)

    return HealthResponse(
        status="healthy" if registry is not None else "degraded",
        uptime_seconds=round(time.time() - _start_time, 2),
        registered_forms=len(registry) if registry is not None else 0,
    )

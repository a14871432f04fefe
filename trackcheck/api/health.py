"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from trackcheck import __version__
from trackcheck.engine.registry import get_registry
from trackcheck.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        checks_registered=get_registry().count,
    )

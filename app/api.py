"""HTTP route definitions for the service."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.schemas import HealthResponse, HealthStatus, SensorsResponse
from services.poll_cache import PollCache, build_default_cache

router = APIRouter()


def get_cache() -> PollCache:
    return build_default_cache()


@router.get(
    "/sensors",
    response_model=SensorsResponse,
    summary="Latest reading of every sensor.",
)
async def list_sensors(cache: PollCache = Depends(get_cache)) -> SensorsResponse:
    return SensorsResponse.from_snapshot(cache.snapshot())


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck(cache: PollCache = Depends(get_cache)) -> HealthResponse:
    count = len(cache.snapshot())
    return HealthResponse(
        status=HealthStatus.ok if count else HealthStatus.no_data,
        sensors=count,
    )


@router.get(
    "/",
    summary="Root endpoint points at the useful routes.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /sensors for readings and /health for status."}

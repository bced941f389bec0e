"""Health and diagnostics routes."""

from __future__ import annotations

from typing import Any, Literal

from fastapi import APIRouter, Depends, Query

from weather_blog.api.deps import get_locations, get_settings
from weather_blog.core.config import Settings
from weather_blog.core.locations import LocationSpec
from weather_blog.core.logging_config import get_log_buffer

system_router = APIRouter(tags=["system"])


@system_router.get("/health", summary="Service health probe")
def healthcheck(
    settings: Settings = Depends(get_settings),
    locations: list[LocationSpec] = Depends(get_locations),
) -> dict[str, Any]:
    """Report liveness and whether a run could start right now."""

    missing = settings.missing_credentials()
    return {
        "status": "ok",
        "ready": not missing,
        "missing_credentials": missing,
        "locations": len(locations),
    }


@system_router.get("/logs", summary="Recent log records, newest first")
def list_logs(
    limit: int = Query(100, ge=1, le=500),
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = None,
) -> dict[str, list[dict[str, str]]]:
    return {"logs": get_log_buffer(limit=limit, min_level=level)}


__all__ = ["system_router"]

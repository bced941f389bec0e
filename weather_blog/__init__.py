"""Weather blog automation FastAPI application package."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from fastapi import FastAPI

from .api import api_router
from .core.config import Settings, settings as default_settings
from .core.locations import LocationSpec, load_locations
from .core.logging_config import setup_logging
from .dashboard import router as dashboard_router


def create_app(
    settings: Settings | None = None,
    locations: Sequence[LocationSpec] | None = None,
) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.service_name, settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title=settings.app_name, version=settings.app_version)
    app.state.settings = settings
    app.state.locations = (
        list(locations) if locations is not None else load_locations(settings.locations_config_path)
    )
    app.include_router(api_router, prefix=settings.api_prefix)
    app.include_router(dashboard_router)

    missing = settings.missing_credentials()
    if missing:
        logger.warning("Required credentials not configured: %s", ", ".join(missing))
    logger.info(
        "Initialized %s with %d locations", settings.app_name, len(app.state.locations)
    )
    return app


app = create_app()

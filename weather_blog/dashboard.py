"""Status page with the one-button trigger."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from weather_blog.api.deps import get_settings
from weather_blog.core.config import Settings
from weather_blog.services.table import TEMPLATES_DIR

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
router = APIRouter()


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def status_page(request: Request, settings: Settings = Depends(get_settings)) -> Any:
    """Render the page that starts a run and shows its outcome."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "app_name": settings.app_name,
            "trigger_url": f"{settings.api_prefix}/create-post",
        },
    )

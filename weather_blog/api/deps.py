"""API dependencies."""

from __future__ import annotations

from fastapi import Request

from weather_blog.core.config import Settings
from weather_blog.core.locations import LocationSpec
from weather_blog.services.pipeline import PostPipeline


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_locations(request: Request) -> list[LocationSpec]:
    return request.app.state.locations


def get_pipeline(request: Request) -> PostPipeline:
    return PostPipeline(get_settings(request), get_locations(request))

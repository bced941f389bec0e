"""Post creation trigger."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from weather_blog.api.deps import get_pipeline
from weather_blog.services.errors import PipelineError
from weather_blog.services.pipeline import PostPipeline

logger = logging.getLogger(__name__)

router = APIRouter(tags=["posts"])


@router.post("/create-post", summary="Publish a new weather blog post")
def create_post(pipeline: PostPipeline = Depends(get_pipeline)) -> JSONResponse:
    """Run the pipeline once; every call creates a new post."""

    try:
        result = pipeline.run()
    except PipelineError as exc:
        logger.error("Automation failed at %s stage: %s", exc.stage, exc)
        return JSONResponse(status_code=500, content={"message": f"Automation failed: {exc}"})
    except Exception as exc:
        logger.exception("Automation failed unexpectedly")
        return JSONResponse(status_code=500, content={"message": f"Automation failed: {exc}"})

    return JSONResponse(
        status_code=200,
        content={"message": "Post created successfully!", "url": result.url},
    )


__all__ = ["router"]

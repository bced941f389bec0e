"""Weather-to-Webflow publishing pipeline."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import httpx

from weather_blog.core.config import Settings
from weather_blog.core.locations import LocationSpec
from weather_blog.services.content import ContentGenerator
from weather_blog.services.errors import ConfigurationError
from weather_blog.services.notifications import EmailNotifier
from weather_blog.services.table import render_weather_table
from weather_blog.services.weather import WeatherService
from weather_blog.services.webflow import WebflowPublisher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    slug: str
    url: str
    notified: bool = False


class PostPipeline:
    """Run collect, render, generate, publish and notify for one post.

    Stages run strictly in order; the first stage failure propagates and later
    stages are skipped. Notification never fails the run.
    """

    def __init__(
        self,
        config: Settings,
        locations: Sequence[LocationSpec],
        client: httpx.Client | None = None,
    ) -> None:
        self.config = config
        self.locations = list(locations)
        self._client = client

    def run(self) -> PipelineResult:
        missing = self.config.missing_credentials()
        if missing:
            logger.error("Missing required configuration: %s", ", ".join(missing))
            raise ConfigurationError(
                f"One or more required API keys are missing: {', '.join(missing)}"
            )

        if self._client is not None:
            return self._run(self._client)
        with httpx.Client() as client:
            return self._run(client)

    def _run(self, client: httpx.Client) -> PipelineResult:
        observations = WeatherService(client, self.config).collect(self.locations)
        table_html = render_weather_table(observations)
        document = ContentGenerator(client, self.config).generate(table_html)
        item = WebflowPublisher(client, self.config).publish(document)

        url = self.config.post_url(item.slug)
        notified = EmailNotifier(client, self.config).notify(item.slug)
        logger.info("Pipeline finished: %s", url)
        return PipelineResult(slug=item.slug, url=url, notified=notified)


__all__ = ["PipelineResult", "PostPipeline"]

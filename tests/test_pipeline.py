"""Tests for weather_blog.services.pipeline."""

from __future__ import annotations

import json
import logging
from unittest.mock import patch

import pytest

from conftest import BLOG_SLUG, SITE_BASE_URL, completion_document, make_settings
from weather_blog.services.errors import (
    CollectionError,
    ConfigurationError,
    GenerationError,
    PublishError,
)
from weather_blog.services.pipeline import PostPipeline


class TestPostPipeline:
    def test_end_to_end_success(self, settings, locations, providers, http_client) -> None:
        result = PostPipeline(settings, locations, client=http_client).run()

        assert result.slug == BLOG_SLUG
        assert result.url == f"{SITE_BASE_URL}/post/{BLOG_SLUG}"
        assert len(providers.calls_to("api.open-meteo.com")) == 5
        assert len(providers.calls_to("openrouter.ai")) == 1
        assert len(providers.calls_to("api.webflow.com")) == 1

    def test_published_body_contains_all_cities(self, settings, locations, providers, http_client) -> None:
        PostPipeline(settings, locations, client=http_client).run()

        payload = json.loads(providers.calls_to("api.webflow.com")[0].content)
        body = payload["fieldData"]["post-body"]
        assert "<WEATHER_TABLE>" not in body
        assert body.count("<tr>") == 5
        for location in locations:
            assert location.name in body

    def test_stage_order(self, settings, locations, providers, http_client) -> None:
        PostPipeline(settings, locations, client=http_client).run()
        hosts = [request.url.host for request in providers.requests]
        assert hosts == ["api.open-meteo.com"] * 5 + ["openrouter.ai", "api.webflow.com"]

    def test_missing_credentials_fail_before_network(self, locations, providers, http_client) -> None:
        settings = make_settings(openrouter_api_key="", webflow_collection_id="")
        with pytest.raises(ConfigurationError, match="OPENROUTER_API_KEY"):
            PostPipeline(settings, locations, client=http_client).run()
        assert providers.requests == []

    def test_collection_failure_stops_pipeline(self, settings, locations, providers, http_client) -> None:
        providers.weather_status = 500
        with pytest.raises(CollectionError):
            PostPipeline(settings, locations, client=http_client).run()
        assert providers.calls_to("openrouter.ai") == []
        assert providers.calls_to("api.webflow.com") == []

    def test_unparseable_completion_never_publishes(self, settings, locations, providers, http_client) -> None:
        providers.completion_content = "Here is your post!"
        with pytest.raises(GenerationError):
            PostPipeline(settings, locations, client=http_client).run()
        assert providers.calls_to("api.webflow.com") == []

    def test_publish_failure_skips_notification(self, locations, providers, http_client) -> None:
        settings = make_settings(resend_api_key="re-key")
        providers.webflow_status = 422
        providers.webflow_body = {"message": "slug already exists"}
        with pytest.raises(PublishError, match="slug already exists"):
            PostPipeline(settings, locations, client=http_client).run()
        assert providers.calls_to("api.resend.com") == []

    def test_notification_sent_after_publish(self, locations, providers, http_client) -> None:
        settings = make_settings(resend_api_key="re-key")
        result = PostPipeline(settings, locations, client=http_client).run()

        assert result.notified is True
        assert providers.requests[-1].url.host == "api.resend.com"

    def test_notification_failure_still_succeeds(self, locations, providers, http_client) -> None:
        settings = make_settings(resend_api_key="re-key")
        providers.resend_status = 500
        result = PostPipeline(settings, locations, client=http_client).run()

        assert result.url == f"{SITE_BASE_URL}/post/{BLOG_SLUG}"
        assert result.notified is False

    def test_heading_rule_violation_still_publishes(self, settings, locations, providers, http_client, caplog) -> None:
        providers.completion_content = json.dumps(
            completion_document(postBody="<h1>Weather</h1><WEATHER_TABLE><h2>Outlook</h2>")
        )
        with caplog.at_level(logging.WARNING):
            result = PostPipeline(settings, locations, client=http_client).run()

        assert result.slug == BLOG_SLUG
        body = json.loads(providers.calls_to("api.webflow.com")[0].content)["fieldData"]["post-body"]
        assert body.startswith("<h1>Weather</h1>")
        assert "does not start with an H2" in caplog.text
        assert "last heading is H2, expected H3" in caplog.text

    def test_unconfigured_email_still_succeeds(self, settings, locations, providers, http_client) -> None:
        result = PostPipeline(settings, locations, client=http_client).run()
        assert result.notified is False
        assert providers.calls_to("api.resend.com") == []

    @patch("weather_blog.services.pipeline.httpx.Client")
    def test_owns_client_when_none_given(self, mock_client_cls, settings, locations, http_client) -> None:
        mock_client_cls.return_value.__enter__.return_value = http_client
        result = PostPipeline(settings, locations).run()
        assert result.slug == BLOG_SLUG
        mock_client_cls.return_value.__exit__.assert_called_once()

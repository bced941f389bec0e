"""Shared fixtures: settings, locations and fake provider endpoints."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from weather_blog.core.config import Settings
from weather_blog.core.locations import LocationSpec

SITE_BASE_URL = "https://weather.example.com"


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "webflow_api_key": "wf-test-key",
        "webflow_collection_id": "coll-123",
        "openrouter_api_key": "or-test-key",
        "resend_api_key": None,
        "site_base_url": SITE_BASE_URL,
        "locations_config_path": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


FIVE_CITIES = [
    LocationSpec(name="Delhi", latitude=28.61, longitude=77.23),
    LocationSpec(name="Mumbai", latitude=19.07, longitude=72.88),
    LocationSpec(name="Kolkata", latitude=22.57, longitude=88.36),
    LocationSpec(name="Chennai", latitude=13.08, longitude=80.27),
    LocationSpec(name="Bengaluru", latitude=12.97, longitude=77.59),
]

# Keyed by latitude string as it appears in the query
CANNED_WEATHER: dict[str, dict[str, Any]] = {
    "28.61": {"temperature_2m": 24.5, "relative_humidity_2m": 60, "weather_code": 45, "wind_speed_10m": 7.2},
    "19.07": {"temperature_2m": 31.0, "relative_humidity_2m": 74, "weather_code": 2, "wind_speed_10m": 14.8},
    "22.57": {"temperature_2m": 27.3, "relative_humidity_2m": 81, "weather_code": 61, "wind_speed_10m": 9.0},
    "13.08": {"temperature_2m": 29.9, "relative_humidity_2m": 78, "weather_code": 95, "wind_speed_10m": 18.4},
    "12.97": {"temperature_2m": 22.1, "relative_humidity_2m": 66, "weather_code": 7, "wind_speed_10m": 11.0},
}

BLOG_SLUG = "ind-weather-nov-2025"


def completion_document(**overrides: Any) -> dict[str, Any]:
    doc: dict[str, Any] = {
        "blogName": "India Weather Update",
        "slug": BLOG_SLUG,
        "metaTitle": "India weather today: city by city guide",
        "metaDescription": "Live temperatures, humidity and wind for major Indian cities, with what the weather means for farms and daily life today.",
        "imageAlt": "Live satellite weather map of India showing current cloud cover",
        "postBody": "<h2>Weather Alert</h2><p>Fog in the north.</p><WEATHER_TABLE><h3>Stay safe</h3>",
        "newsSchema": '{"@context": "https://schema.org", "@type": "NewsArticle", "url": "https.your-site.com/post"}',
    }
    doc.update(overrides)
    return doc


def completion_response(content: str) -> dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class FakeProviders:
    """Route requests by host to canned provider responses and record them."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.weather = dict(CANNED_WEATHER)
        self.weather_status = 200
        self.completion_status = 200
        self.completion_content = json.dumps(completion_document())
        self.webflow_status = 200
        self.webflow_body: Any = {"id": "item-1", "fieldData": {"slug": BLOG_SLUG}}
        self.resend_status = 200

    def calls_to(self, host: str) -> list[httpx.Request]:
        return [req for req in self.requests if req.url.host == host]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        if host == "api.open-meteo.com":
            if self.weather_status != 200:
                return httpx.Response(self.weather_status, text="upstream unavailable")
            current = self.weather.get(request.url.params["latitude"])
            if current is None:
                return httpx.Response(200, json={"error": True})
            return httpx.Response(200, json={"current": current})
        if host == "openrouter.ai":
            if self.completion_status != 200:
                return httpx.Response(self.completion_status, json={"error": {"message": "rate limited"}})
            return httpx.Response(200, json=completion_response(self.completion_content))
        if host == "api.webflow.com":
            return httpx.Response(self.webflow_status, json=self.webflow_body)
        if host == "api.resend.com":
            return httpx.Response(self.resend_status, json={"id": "email-1"})
        return httpx.Response(404)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def locations() -> list[LocationSpec]:
    return list(FIVE_CITIES)


@pytest.fixture
def providers() -> FakeProviders:
    return FakeProviders()


@pytest.fixture
def http_client(providers: FakeProviders):
    client = providers.client()
    yield client
    client.close()


@pytest.fixture
def mock_client_factory() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.Client]:
    clients: list[httpx.Client] = []

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()

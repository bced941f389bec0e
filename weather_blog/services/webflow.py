"""Webflow CMS publishing."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from weather_blog.core.config import Settings
from weather_blog.models import BlogDocument, PublishedItem
from weather_blog.services.errors import PublishError

logger = logging.getLogger(__name__)

# Placeholder host the prompt asks the model to use inside the JSON-LD
SCHEMA_URL_PLACEHOLDER = "https.your-site.com"


class WebflowPublisher:
    """Create live collection items for generated posts."""

    def __init__(self, client: httpx.Client, config: Settings) -> None:
        self.client = client
        self.api_key = config.webflow_api_key
        self.items_url = f"{config.webflow_api_url.rstrip('/')}/collections/{config.webflow_collection_id}/items"
        self.image_url = config.live_weather_image_url
        self.site_base_url = config.site_base_url.rstrip("/")
        self.timeout = config.webflow_timeout

    def build_payload(self, document: BlogDocument) -> dict[str, Any]:
        """Map a document onto the collection's field slugs."""

        return {
            "isArchived": False,
            "isDraft": False,
            "fieldData": {
                "name": document.title,
                "slug": document.slug,
                "main-image": {
                    "url": self.image_url,
                    "alt": document.image_alt,
                },
                "meta-title": document.meta_title,
                "meta-description": document.meta_description,
                "post-body": document.post_body,
                "schema": document.news_schema.replace(SCHEMA_URL_PLACEHOLDER, self.site_base_url),
            },
        }

    def publish(self, document: BlogDocument) -> PublishedItem:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "accept": "application/json",
            "content-type": "application/json",
        }
        logger.info("Publishing %s to Webflow", document.slug)
        try:
            response = self.client.post(
                self.items_url,
                json=self.build_payload(document),
                headers=headers,
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            logger.error("Webflow connection error: %s", exc)
            raise PublishError(f"Webflow request failed: {exc}") from exc

        if not response.is_success:
            message = self._error_message(response)
            logger.error("Webflow API Error: %s %s", response.status_code, response.text[:1000])
            raise PublishError(f"Webflow API error: {message}")

        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Webflow returned invalid JSON: %s", response.text[:1000])
            raise PublishError("Webflow returned invalid JSON.") from exc

        item = self._to_item(data)
        logger.info("Published Webflow item %s (slug=%s)", item.item_id, item.slug)
        return item

    def _error_message(self, response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text.strip() or f"{response.status_code} {response.reason_phrase}"
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return json.dumps(body)

    def _to_item(self, data: Any) -> PublishedItem:
        if not isinstance(data, dict):
            raise PublishError("Webflow response was not an item object.")
        field_data = data.get("fieldData") if isinstance(data.get("fieldData"), dict) else {}
        slug = field_data.get("slug") or data.get("slug")
        if not slug:
            logger.error("Webflow item has no slug: %s", json.dumps(data)[:1000])
            raise PublishError("Webflow response did not include the item slug.")
        item_id = data.get("id")
        return PublishedItem(slug=str(slug), item_id=str(item_id) if item_id is not None else None)


__all__ = ["WebflowPublisher", "SCHEMA_URL_PLACEHOLDER"]

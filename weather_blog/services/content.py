"""Blog content generation through the OpenRouter chat completions API."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

import httpx
from pydantic import ValidationError

from weather_blog.core.config import Settings
from weather_blog.models import BlogDocument
from weather_blog.services.errors import GenerationError

logger = logging.getLogger(__name__)

TABLE_PLACEHOLDER = "<WEATHER_TABLE>"
EM_DASH = "—"

_FENCE_OPEN = re.compile(r"^\s*```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```\s*$")
_HEADING = re.compile(r"<h([1-6])\b", re.IGNORECASE)


def build_prompt(table_html: str) -> str:
    """Instruction sent to the model with the rendered table embedded."""

    return f"""
You are an expert SEO content writer for an Indian audience, specializing in weather and agriculture.
Your task is to generate a blog post about the current weather report in India.

CRITICAL RULES:
- DO NOT use any em dashes ({EM_DASH}). Use a regular hyphen (-) or rephrase the sentence.
- The highest heading level MUST be H2.
- The last heading in the content MUST be H3.

The blog post must include:
1. A weather alert section.
2. Some "chatpata" (interesting and engaging) content about how this weather affects local farming or daily life.
3. The HTML weather table provided below.

Here is the data-driven HTML table to insert:
{TABLE_PLACEHOLDER}
{table_html}
</WEATHER_TABLE>

Please provide the output in a single JSON object format. Do not write any text outside the JSON object.
The JSON object must have these exact keys:
{{
  "blogName": "A catchy, short blog post title.",
  "slug": "A keyword-researched, SEO-friendly slug (lowercase, hyphen-separated, e.g., 'indian-monsoon-update-nov-2025').",
  "metaTitle": "An SEO meta title, min 30 chars, max 45 chars.",
  "metaDescription": "An SEO meta description, min 120 chars, max 145 chars.",
  "imageAlt": "An SEO-optimized alt text for an image of India's satellite weather map. (e.g., 'Live satellite weather map of India showing current cloud cover').",
  "postBody": "The full blog post in HTML format. It MUST start with an H2 heading. It MUST include the {TABLE_PLACEHOLDER} placeholder exactly, which I will replace. It MUST end with an H3 heading. It MUST NOT contain any em dashes.",
  "newsSchema": "A valid NewsArticle JSON-LD schema for this post. Use placeholder URLs 'https.your-site.com' which I will replace."
}}
""".strip()


def strip_code_fence(text: str) -> str:
    """Remove a Markdown code fence wrapped around a JSON answer."""

    cleaned = _FENCE_OPEN.sub("", text, count=1)
    cleaned = _FENCE_CLOSE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_document(content: str) -> BlogDocument:
    """Parse and validate the model's answer into a :class:`BlogDocument`."""

    try:
        data = json.loads(strip_code_fence(content))
    except ValueError as exc:
        logger.error("Failed to parse JSON from OpenRouter: %s", content)
        raise GenerationError("OpenRouter returned invalid JSON.") from exc

    if not isinstance(data, dict):
        logger.error("OpenRouter returned JSON that is not an object: %s", content[:500])
        raise GenerationError("OpenRouter returned JSON that is not an object.")

    try:
        return BlogDocument.model_validate(data)
    except ValidationError as exc:
        fields = sorted({".".join(str(part) for part in err["loc"]) for err in exc.errors()})
        logger.error("OpenRouter document failed validation (%s): %s", ", ".join(fields), content[:1000])
        raise GenerationError(
            f"OpenRouter document is missing or has invalid fields: {', '.join(fields)}"
        ) from exc


def insert_table(body: str, table_html: str) -> str:
    """Replace the single placeholder token in ``body`` with the table markup."""

    if TABLE_PLACEHOLDER not in body:
        raise GenerationError(f"Generated post body does not contain the {TABLE_PLACEHOLDER} placeholder.")
    return body.replace(TABLE_PLACEHOLDER, table_html, 1)


def heading_problems(body: str) -> list[str]:
    """Describe where the body breaks the H2-first, H3-last heading rules."""

    levels = [int(level) for level in _HEADING.findall(body)]
    problems: list[str] = []
    if not levels:
        return ["no headings"]
    if 1 in levels:
        problems.append("contains an H1")
    if not body.lstrip().lower().startswith("<h2"):
        problems.append("does not start with an H2")
    if levels[-1] != 3:
        problems.append(f"last heading is H{levels[-1]}, expected H3")
    return problems


class ContentGenerator:
    """Turn the rendered weather table into a complete blog document."""

    def __init__(self, client: httpx.Client, config: Settings) -> None:
        self.client = client
        self.api_url = config.openrouter_api_url
        self.api_key = config.openrouter_api_key
        self.model = config.openrouter_model
        self.timeout = config.openrouter_timeout

    def generate(self, table_html: str) -> BlogDocument:
        logger.info("Requesting blog content from OpenRouter model %s", self.model)
        content = self._complete(build_prompt(table_html))
        document = parse_document(content)

        body = insert_table(document.post_body, table_html)
        if EM_DASH in body:
            logger.warning("Replacing em dashes left in generated body")
            body = body.replace(EM_DASH, "-")
        problems = heading_problems(body)
        if problems:
            logger.warning("Generated body heading structure: %s", "; ".join(problems))

        document = document.model_copy(update={"post_body": body})
        logger.info("Generated blog post %r (slug=%s)", document.title, document.slug)
        return document

    def _complete(self, prompt: str) -> str:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
        }
        try:
            response = self.client.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
        except httpx.HTTPError as exc:
            logger.error("OpenRouter connection error: %s", exc)
            raise GenerationError(f"OpenRouter request failed: {exc}") from exc

        if not response.is_success:
            logger.error("OpenRouter API error: %s %s", response.status_code, response.text[:1000])
            raise GenerationError(f"OpenRouter API error: {response.status_code} {response.reason_phrase}")

        try:
            data: Any = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            logger.error("Unexpected OpenRouter response: %s", response.text[:1000])
            raise GenerationError("OpenRouter response did not contain a message.") from exc

        if not isinstance(content, str):
            logger.error("OpenRouter message content is not text: %s", response.text[:1000])
            raise GenerationError("OpenRouter response did not contain a message.")
        return content


__all__ = [
    "ContentGenerator",
    "TABLE_PLACEHOLDER",
    "build_prompt",
    "heading_problems",
    "insert_table",
    "parse_document",
    "strip_code_fence",
]

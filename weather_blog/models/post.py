"""Blog post models exchanged between the completion and CMS stages."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BlogDocument(BaseModel):
    """Seven-field document returned by the completion provider.

    Aliases are the JSON keys the prompt asks the model to emit.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = Field(alias="blogName", min_length=1)
    slug: str = Field(min_length=1)
    meta_title: str = Field(alias="metaTitle")
    meta_description: str = Field(alias="metaDescription")
    image_alt: str = Field(alias="imageAlt")
    post_body: str = Field(alias="postBody", min_length=1)
    news_schema: str = Field(alias="newsSchema")

    @field_validator("slug", mode="before")
    @classmethod
    def _strip_slug(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("news_schema", mode="before")
    @classmethod
    def _serialize_schema(cls, value: Any) -> Any:
        # Some models emit the JSON-LD as an object instead of a string
        if isinstance(value, dict):
            return json.dumps(value, ensure_ascii=False)
        return value


@dataclass(frozen=True)
class PublishedItem:
    """CMS item created for a post."""

    slug: str
    item_id: str | None = None


__all__ = ["BlogDocument", "PublishedItem"]

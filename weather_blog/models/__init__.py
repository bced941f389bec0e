"""Pipeline data models."""

from .post import BlogDocument, PublishedItem
from .weather import ObservationRecord

__all__ = [
    "BlogDocument",
    "ObservationRecord",
    "PublishedItem",
]

"""Failure taxonomy for a publishing run."""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for failures raised while producing a post."""

    stage = "pipeline"


class ConfigurationError(PipelineError):
    """A required credential or configuration file is missing or invalid."""

    stage = "configuration"


class CollectionError(PipelineError):
    """A weather query failed or returned an unexpected shape."""

    stage = "collection"


class GenerationError(PipelineError):
    """The completion call failed or its content was not a usable document."""

    stage = "generation"


class PublishError(PipelineError):
    """The CMS rejected or failed the create-item call."""

    stage = "publish"


class NotificationError(PipelineError):
    """Sending the notification email failed. Never propagated past the notifier."""

    stage = "notification"


__all__ = [
    "PipelineError",
    "ConfigurationError",
    "CollectionError",
    "GenerationError",
    "PublishError",
    "NotificationError",
]

"""HTML table rendering for weather observations."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def _get_template_env() -> Environment:
    """Create Jinja2 environment with the package templates directory."""
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


_ENV = _get_template_env()


def render_weather_table(observations: Sequence[Any]) -> str:
    """Render observations as an inline-styled HTML table, one row per record.

    Missing attributes render as empty cells rather than raising.
    """
    template = _ENV.get_template("weather_table.html")
    return template.render(observations=list(observations))


__all__ = ["render_weather_table"]

"""Configuration for HTML output.

Defaults can be overridden per call or, for scripts, through environment
variables read by `HtmlSettings.from_env`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

DEFAULT_SCRIPT_URL: Final = "https://cdnjs.cloudflare.com/ajax/libs/Chart.js/2.9.4/Chart.min.js"


def _env_str(name: str, *, default: str) -> str:
    """Read a string environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is unset or blank.

    Returns:
        The trimmed value, or `default`.
    """

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _env_int(name: str, *, default: int) -> int:
    """Parse an integer environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed integer value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return int(raw.strip())


@dataclass(frozen=True, slots=True)
class HtmlSettings:
    """Settings for standalone chart pages.

    Args:
        script_url: URL Chart.js is loaded from.
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        title: Page title; defaults to the first chart's label.
    """

    script_url: str = DEFAULT_SCRIPT_URL
    width: int = 800
    height: int = 400
    title: str | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Canvas size must be positive, got {self.width}x{self.height}.")

    @classmethod
    def from_env(cls) -> HtmlSettings:
        """Build settings from `CHARTJS_*` environment variables."""

        title = os.getenv("CHARTJS_PAGE_TITLE")
        return cls(
            script_url=_env_str("CHARTJS_SCRIPT_URL", default=DEFAULT_SCRIPT_URL),
            width=_env_int("CHARTJS_CANVAS_WIDTH", default=800),
            height=_env_int("CHARTJS_CANVAS_HEIGHT", default=400),
            title=title.strip() if title and title.strip() else None,
        )

"""Tests for HTML settings and environment overrides."""

from __future__ import annotations

import pytest

from chartjs import HtmlSettings
from chartjs.settings import DEFAULT_SCRIPT_URL

pytestmark = pytest.mark.unit


def test_defaults() -> None:
    """Defaults load Chart.js 2.x from the CDN on an 800x400 canvas."""

    settings = HtmlSettings()
    assert settings.script_url == DEFAULT_SCRIPT_URL
    assert "Chart.js/2." in settings.script_url
    assert (settings.width, settings.height, settings.title) == (800, 400, None)


def test_from_env_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """CHARTJS_* variables override the defaults."""

    monkeypatch.setenv("CHARTJS_SCRIPT_URL", " /static/chart.js ")
    monkeypatch.setenv("CHARTJS_CANVAS_WIDTH", "1024")
    monkeypatch.setenv("CHARTJS_CANVAS_HEIGHT", " 512 ")
    monkeypatch.setenv("CHARTJS_PAGE_TITLE", "Nightly")

    assert HtmlSettings.from_env() == HtmlSettings(script_url="/static/chart.js", width=1024, height=512, title="Nightly")


def test_from_env_ignores_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    """Blank string variables fall back to defaults."""

    for name in ("CHARTJS_CANVAS_WIDTH", "CHARTJS_CANVAS_HEIGHT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CHARTJS_SCRIPT_URL", "  ")
    monkeypatch.setenv("CHARTJS_PAGE_TITLE", "")

    assert HtmlSettings.from_env() == HtmlSettings()


def test_invalid_sizes_are_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    """Non-positive or non-numeric sizes raise ValueError."""

    with pytest.raises(ValueError, match="positive"):
        HtmlSettings(width=0)
    monkeypatch.setenv("CHARTJS_CANVAS_WIDTH", "wide")
    with pytest.raises(ValueError):
        HtmlSettings.from_env()

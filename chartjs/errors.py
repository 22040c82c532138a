"""Exception types raised by the chart builder."""

from __future__ import annotations


class ChartError(Exception):
    """Base class for chart configuration errors."""


class EncodingError(ChartError, ValueError):
    """Raised when a chart value cannot be represented in the Chart.js JSON schema."""


class ConfigurationError(ChartError, ValueError):
    """Raised when a chart definition is invalid or cannot be decoded."""

"""Chart.js configuration builder.

Charts are assembled as plain Python objects (`Chart`, `Dataset`, `Axis`),
encoded into the Chart.js JSON schema and optionally embedded into a
standalone HTML page that loads Chart.js in the browser.
"""

from .colors import PALETTE, RGBA
from .encoder import chart_to_json, decode_chart, encode_chart, loads_chart
from .errors import ChartError, ConfigurationError, EncodingError
from .loader import load_chart
from .render import render_html, save_html
from .schema import (
    Axis,
    AxisPosition,
    AxisType,
    Chart,
    ChartType,
    Data,
    Dataset,
    GridLines,
    Legend,
    Options,
    PointStyle,
    ScaleLabel,
    Scales,
    Ticks,
    Title,
)
from .series import Points, Series
from .settings import HtmlSettings
from .validator import ValidationResult, require_valid, validate_chart

__all__ = [
    "Axis",
    "AxisPosition",
    "AxisType",
    "Chart",
    "ChartError",
    "ChartType",
    "ConfigurationError",
    "Data",
    "Dataset",
    "EncodingError",
    "GridLines",
    "HtmlSettings",
    "Legend",
    "Options",
    "PALETTE",
    "PointStyle",
    "Points",
    "RGBA",
    "ScaleLabel",
    "Scales",
    "Series",
    "Ticks",
    "Title",
    "ValidationResult",
    "chart_to_json",
    "decode_chart",
    "encode_chart",
    "load_chart",
    "loads_chart",
    "render_html",
    "require_valid",
    "save_html",
    "validate_chart",
]

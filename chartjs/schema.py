"""Object model for Chart.js chart configuration.

A `Chart` is built incrementally: axes and datasets are appended through the
chart's registration methods and the result is encoded by `chartjs.encoder`.
Every optional attribute defaults to None, meaning "not set". Unset attributes
are omitted from the encoded payload so Chart.js applies its own defaults;
`False` and `0` are real values and are always emitted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import StrEnum
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any

from .colors import RGBA
from .series import Series

if TYPE_CHECKING:
    from .settings import HtmlSettings

logger = logging.getLogger(__name__)


class ChartType(StrEnum):
    """Chart.js chart types."""

    line = "line"
    bar = "bar"
    horizontal_bar = "horizontalBar"
    radar = "radar"
    pie = "pie"
    doughnut = "doughnut"
    polar_area = "polarArea"
    bubble = "bubble"
    scatter = "scatter"


POINT_CHART_TYPES = frozenset({ChartType.bubble, ChartType.scatter})


class AxisType(StrEnum):
    """Scale types supported by Chart.js cartesian and radial axes."""

    category = "category"
    linear = "linear"
    logarithmic = "logarithmic"
    time = "time"
    radial_linear = "radialLinear"


class AxisPosition(StrEnum):
    """Edge of the chart area an axis is drawn on."""

    top = "top"
    bottom = "bottom"
    left = "left"
    right = "right"


class PointStyle(StrEnum):
    """Marker shapes for line, radar, scatter and bubble points."""

    circle = "circle"
    cross = "cross"
    cross_rot = "crossRot"
    dash = "dash"
    line = "line"
    rect = "rect"
    rect_rounded = "rectRounded"
    rect_rot = "rectRot"
    star = "star"
    triangle = "triangle"


@dataclass(frozen=True, slots=True)
class ScaleLabel:
    """Axis title configuration.

    Args:
        display: Whether the label is drawn.
        label_string: Label text.
        font_size: Font size in pixels.
        font_color: Font color.
        font_family: CSS font family.
        font_style: CSS font style (e.g. "bold").
    """

    display: bool | None = None
    label_string: str | None = None
    font_size: int | None = None
    font_color: RGBA | None = None
    font_family: str | None = None
    font_style: str | None = None


@dataclass(frozen=True, slots=True)
class Ticks:
    """Tick configuration for an axis."""

    display: bool | None = None
    min: float | None = None
    max: float | None = None
    begin_at_zero: bool | None = None
    step_size: float | None = None
    reverse: bool | None = None


@dataclass(frozen=True, slots=True)
class GridLines:
    """Grid line configuration for an axis."""

    display: bool | None = None
    draw_border: bool | None = None
    color: RGBA | None = None


@dataclass(frozen=True, slots=True)
class Axis:
    """A single scale.

    `id` is normally left unset: `Chart.add_x_axis` / `Chart.add_y_axis` store
    a copy of the axis with its generated identifier.

    Args:
        type: Scale type.
        position: Edge the axis is drawn on.
        id: Axis identifier referenced by `Dataset.x_axis_id`/`y_axis_id`.
        display: Whether the axis is drawn.
        stacked: Whether datasets are stacked along this axis.
        scale_label: Optional axis title.
        ticks: Optional tick configuration.
        grid_lines: Optional grid line configuration.
        extra: Free-form Chart.js axis keys merged into the payload as-is.
    """

    type: AxisType | None = None
    position: AxisPosition | None = None
    id: str | None = None
    display: bool | None = None
    stacked: bool | None = None
    scale_label: ScaleLabel | None = None
    ticks: Ticks | None = None
    grid_lines: GridLines | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.type is not None:
            object.__setattr__(self, "type", AxisType(self.type))
        if self.position is not None:
            object.__setattr__(self, "position", AxisPosition(self.position))


@dataclass(slots=True)
class Scales:
    """Ordered, append-only X and Y axis lists."""

    x_axes: list[Axis] = field(default_factory=list)
    y_axes: list[Axis] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.x_axes) + len(self.y_axes)

    def axis_ids(self) -> set[str]:
        """Return every registered axis id."""

        return {axis.id for axis in (*self.x_axes, *self.y_axes) if axis.id is not None}


@dataclass(frozen=True, slots=True)
class Title:
    """Chart title shown above the canvas."""

    display: bool | None = None
    text: str | None = None
    position: AxisPosition | None = None
    font_size: int | None = None


@dataclass(frozen=True, slots=True)
class Legend:
    """Legend visibility and placement."""

    display: bool | None = None
    position: AxisPosition | None = None


@dataclass(slots=True)
class Options:
    """Rendering and behavior toggles.

    Args:
        responsive: Resize the chart canvas when its container resizes.
        maintain_aspect_ratio: Keep the canvas aspect ratio when resizing.
        title: Optional chart title.
        legend: Optional legend configuration.
        scales: Registered axes (filled by the Chart registration methods).
        extra: Free-form Chart.js options merged into the payload as-is.
    """

    responsive: bool | None = None
    maintain_aspect_ratio: bool | None = None
    title: Title | None = None
    legend: Legend | None = None
    scales: Scales = field(default_factory=Scales)
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class Dataset:
    """One data series and its styling.

    `data` is held by reference and is only read when the chart is encoded. For
    category charts a None value marks a gap (see `span_gaps`).

    Args:
        data: Series providing the values.
        label: Legend label.
        type: Per-dataset chart type for mixed charts.
        background_color: Fill color.
        border_color: Line/border color.
        border_width: Line/border width in pixels.
        fill: Whether the area under a line is filled.
        line_tension: Bezier curve tension (0 draws straight lines).
        point_radius: Point radius in pixels.
        point_border_width: Point border width in pixels.
        point_background_color: Point fill color.
        point_border_color: Point border color.
        point_hover_radius: Point radius when hovered.
        point_hit_radius: Radius of the non-displayed point that reacts to mouse events.
        point_style: Point marker shape.
        show_line: Whether the line is drawn.
        span_gaps: Whether lines are drawn across missing values.
        hidden: Whether the dataset starts hidden.
        x_axis_id: Id of the X axis this dataset is plotted against.
        y_axis_id: Id of the Y axis this dataset is plotted against.
        extra: Free-form Chart.js dataset keys merged into the payload as-is.
    """

    data: Series
    label: str | None = None
    type: ChartType | None = None
    background_color: RGBA | None = None
    border_color: RGBA | None = None
    border_width: float | None = None
    fill: bool | None = None
    line_tension: float | None = None
    point_radius: float | None = None
    point_border_width: float | None = None
    point_background_color: RGBA | None = None
    point_border_color: RGBA | None = None
    point_hover_radius: float | None = None
    point_hit_radius: float | None = None
    point_style: PointStyle | None = None
    show_line: bool | None = None
    span_gaps: bool | None = None
    hidden: bool | None = None
    x_axis_id: str | None = None
    y_axis_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.type is not None:
            self.type = ChartType(self.type)
        if self.point_style is not None:
            self.point_style = PointStyle(self.point_style)


@dataclass(slots=True)
class Data:
    """Category labels and the ordered datasets of a chart."""

    labels: list[str] = field(default_factory=list)
    datasets: list[Dataset] = field(default_factory=list)


@dataclass(slots=True)
class Chart:
    """Top-level chart definition.

    Args:
        type: Chart type; also decides how dataset points are encoded.
        label: Chart name used as the canvas id and page heading in HTML output.
        data: Labels and datasets.
        options: Rendering options, including registered axes.
    """

    type: ChartType
    label: str = ""
    data: Data = field(default_factory=Data)
    options: Options = field(default_factory=Options)

    def __post_init__(self) -> None:
        self.type = ChartType(self.type)

    def add_dataset(self, dataset: Dataset) -> Dataset:
        """Append a dataset; insertion order is the drawing order.

        No validation happens here: datasets may reference axis ids that are
        registered later (or never). See `chartjs.validator` for eager checks.
        """

        self.data.datasets.append(dataset)
        logger.debug("Chart %r: added dataset #%d (%r)", self.label, len(self.data.datasets) - 1, dataset.label)
        return dataset

    def add_x_axis(self, axis: Axis) -> str:
        """Register an X axis and return its id (`x-axis-0`, `x-axis-1`, ...)."""

        return self._add_axis("x", self.options.scales.x_axes, axis)

    def add_y_axis(self, axis: Axis) -> str:
        """Register a Y axis and return its id (`y-axis-0`, `y-axis-1`, ...)."""

        return self._add_axis("y", self.options.scales.y_axes, axis)

    def _add_axis(self, kind: str, axes: list[Axis], axis: Axis) -> str:
        axis_id = f"{kind}-axis-{len(axes)}"
        axes.append(replace(axis, id=axis_id, extra=dict(axis.extra)))
        logger.debug("Chart %r: registered %s", self.label, axis_id)
        return axis_id

    def to_dict(self) -> dict[str, Any]:
        """Return the Chart.js configuration payload (see `encode_chart`)."""

        from .encoder import encode_chart

        return encode_chart(self)

    def to_json(self, *, indent: int | None = None) -> str:
        """Return the Chart.js configuration as JSON text (see `chart_to_json`)."""

        from .encoder import chart_to_json

        return chart_to_json(self, indent=indent)

    def save_html(
        self,
        destination: str | Path | IO[str],
        template: str | None = None,
        *,
        context: dict[str, Any] | None = None,
        settings: HtmlSettings | None = None,
    ) -> None:
        """Write a standalone HTML page rendering this chart (see `save_html`)."""

        from .render import save_html

        save_html(destination, self, template=template, context=context, settings=settings)

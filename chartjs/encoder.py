"""Chart.js payload encoding/decoding helpers.

`encode_chart` maps the object model onto the Chart.js 2.x configuration
schema (`{"type", "data": {"labels", "datasets"}, "options"}`). Attributes
left as None are omitted rather than emitted as null, so Chart.js keeps its
own defaults for them. `decode_chart` is the inverse and is used to load
stored chart definitions.
"""

from __future__ import annotations

import json
import logging
import math
import numbers
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final

from .colors import RGBA
from .errors import ConfigurationError, EncodingError
from .schema import (
    POINT_CHART_TYPES,
    Axis,
    AxisPosition,
    Chart,
    ChartType,
    Dataset,
    GridLines,
    Legend,
    Options,
    ScaleLabel,
    Ticks,
    Title,
)
from .series import Points, Series

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _WireField:
    """Mapping between a model attribute and its Chart.js key."""

    attr: str
    key: str
    decode: Callable[[Any], Any] | None = None


def _color(value: Any) -> RGBA:
    return RGBA.parse(str(value))


def _position(value: Any) -> AxisPosition:
    return AxisPosition(value)


def _nested(cls: type) -> Callable[[Any], Any]:
    def decode(value: Any) -> Any:
        return _decode_fields(cls, value)

    return decode


_SCALE_LABEL_FIELDS: Final = (
    _WireField("display", "display"),
    _WireField("label_string", "labelString"),
    _WireField("font_size", "fontSize"),
    _WireField("font_color", "fontColor", _color),
    _WireField("font_family", "fontFamily"),
    _WireField("font_style", "fontStyle"),
)

_TICKS_FIELDS: Final = (
    _WireField("display", "display"),
    _WireField("min", "min"),
    _WireField("max", "max"),
    _WireField("begin_at_zero", "beginAtZero"),
    _WireField("step_size", "stepSize"),
    _WireField("reverse", "reverse"),
)

_GRID_LINES_FIELDS: Final = (
    _WireField("display", "display"),
    _WireField("draw_border", "drawBorder"),
    _WireField("color", "color", _color),
)

_AXIS_FIELDS: Final = (
    _WireField("type", "type"),
    _WireField("position", "position"),
    _WireField("id", "id"),
    _WireField("display", "display"),
    _WireField("stacked", "stacked"),
    _WireField("scale_label", "scaleLabel", _nested(ScaleLabel)),
    _WireField("ticks", "ticks", _nested(Ticks)),
    _WireField("grid_lines", "gridLines", _nested(GridLines)),
)

_TITLE_FIELDS: Final = (
    _WireField("display", "display"),
    _WireField("text", "text"),
    _WireField("position", "position", _position),
    _WireField("font_size", "fontSize"),
)

_LEGEND_FIELDS: Final = (
    _WireField("display", "display"),
    _WireField("position", "position", _position),
)

# `data` is handled separately because its shape depends on the chart type.
_DATASET_FIELDS: Final = (
    _WireField("label", "label"),
    _WireField("type", "type"),
    _WireField("background_color", "backgroundColor", _color),
    _WireField("border_color", "borderColor", _color),
    _WireField("border_width", "borderWidth"),
    _WireField("fill", "fill"),
    _WireField("line_tension", "lineTension"),
    _WireField("point_radius", "pointRadius"),
    _WireField("point_border_width", "pointBorderWidth"),
    _WireField("point_background_color", "pointBackgroundColor", _color),
    _WireField("point_border_color", "pointBorderColor", _color),
    _WireField("point_hover_radius", "pointHoverRadius"),
    _WireField("point_hit_radius", "pointHitRadius"),
    _WireField("point_style", "pointStyle"),
    _WireField("show_line", "showLine"),
    _WireField("span_gaps", "spanGaps"),
    _WireField("hidden", "hidden"),
    _WireField("x_axis_id", "xAxisID"),
    _WireField("y_axis_id", "yAxisID"),
)

_OPTIONS_FIELDS: Final = (
    _WireField("responsive", "responsive"),
    _WireField("maintain_aspect_ratio", "maintainAspectRatio"),
    _WireField("title", "title", _nested(Title)),
    _WireField("legend", "legend", _nested(Legend)),
)

# Classes whose unknown wire keys are kept in an `extra` mapping.
_EXTRA_KEY_CLASSES: Final = frozenset({Axis, Dataset})

_WIRE_FIELDS: Final[dict[type, tuple[_WireField, ...]]] = {
    ScaleLabel: _SCALE_LABEL_FIELDS,
    Ticks: _TICKS_FIELDS,
    GridLines: _GRID_LINES_FIELDS,
    Axis: _AXIS_FIELDS,
    Title: _TITLE_FIELDS,
    Legend: _LEGEND_FIELDS,
    Dataset: _DATASET_FIELDS,
    Options: _OPTIONS_FIELDS,
}


def encode_chart(chart: Chart) -> dict[str, Any]:
    """Encode a Chart into a JSON-serializable Chart.js configuration.

    Args:
        chart: Chart to encode.

    Returns:
        Dict payload with `type`, `data` and `options` keys.

    Raises:
        EncodingError: When a value cannot be represented (non-finite numbers,
            mismatched point sequences, non-numeric values).
    """

    data: dict[str, Any] = {}
    if chart.data.labels:
        data["labels"] = [str(label) for label in chart.data.labels]
    data["datasets"] = [
        _encode_dataset(dataset, chart_type=chart.type, where=f"datasets[{index}]")
        for index, dataset in enumerate(chart.data.datasets)
    ]
    return {
        "type": chart.type.value,
        "data": data,
        "options": _encode_options(chart.options),
    }


def chart_to_json(chart: Chart, *, indent: int | None = None) -> str:
    """Encode a Chart and dump it as JSON text.

    Raises:
        EncodingError: When the payload cannot be represented as strict JSON.
    """

    payload = encode_chart(chart)
    try:
        return json.dumps(payload, indent=indent, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"Chart {chart.label!r} is not JSON serializable: {exc}") from exc


def _encode_dataset(dataset: Dataset, *, chart_type: ChartType, where: str) -> dict[str, Any]:
    payload = _encode_fields(dataset, where=where)
    effective_type = dataset.type or chart_type
    payload["data"] = _encode_values(dataset.data, chart_type=effective_type, where=f"{where}.data")
    return payload


def _encode_values(series: Series, *, chart_type: ChartType, where: str) -> list[Any]:
    if not isinstance(series, Series):
        raise EncodingError(f"{where} must provide xs()/ys()/rs(), got {type(series).__name__}.")

    raw_xs = series.xs()
    xs = [] if raw_xs is None else list(raw_xs)
    ys = series.ys()
    if chart_type not in POINT_CHART_TYPES:
        values = xs if ys is None else list(ys)
        # None is a gap marker (Chart.js `spanGaps`), emitted as null.
        return [None if value is None else _number(value, where=f"{where}[{i}]") for i, value in enumerate(values)]

    if ys is None:
        raise EncodingError(f"{where}: {chart_type.value} datasets require Y values.")
    ys = list(ys)
    rs = series.rs()
    rs = None if rs is None else list(rs)
    if len(ys) != len(xs) or (rs is not None and len(rs) != len(xs)):
        lengths = f"x={len(xs)}, y={len(ys)}" + ("" if rs is None else f", r={len(rs)}")
        raise EncodingError(f"{where}: point sequences have different lengths ({lengths}).")

    points: list[dict[str, Any]] = []
    for i, (x, y) in enumerate(zip(xs, ys)):
        point = {"x": _number(x, where=f"{where}[{i}].x"), "y": _number(y, where=f"{where}[{i}].y")}
        if rs is not None:
            point["r"] = _number(rs[i], where=f"{where}[{i}].r")
        points.append(point)
    return points


def _encode_options(options: Options) -> dict[str, Any]:
    payload = _encode_fields(options, where="options")
    scales = options.scales
    if scales.x_axes or scales.y_axes:
        encoded_scales: dict[str, Any] = {}
        if scales.x_axes:
            encoded_scales["xAxes"] = [
                _encode_fields(axis, where=f"options.scales.xAxes[{i}]") for i, axis in enumerate(scales.x_axes)
            ]
        if scales.y_axes:
            encoded_scales["yAxes"] = [
                _encode_fields(axis, where=f"options.scales.yAxes[{i}]") for i, axis in enumerate(scales.y_axes)
            ]
        payload["scales"] = encoded_scales
    return _merge(payload, options.extra)


def _encode_fields(obj: object, *, where: str) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for wire in _WIRE_FIELDS[type(obj)]:
        value = getattr(obj, wire.attr)
        if value is None:
            continue
        payload[wire.key] = _wire_value(value, where=f"{where}.{wire.key}")
    if type(obj) in _EXTRA_KEY_CLASSES:
        _merge(payload, getattr(obj, "extra"))
    return payload


def _wire_value(value: Any, *, where: str) -> Any:
    if isinstance(value, RGBA):
        return value.to_css()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (bool, str)):
        return value
    if isinstance(value, numbers.Real):
        return _number(value, where=where)
    if type(value) in _WIRE_FIELDS:
        return _encode_fields(value, where=where)
    raise EncodingError(f"{where}: unsupported value {value!r}.")


def _number(value: Any, *, where: str) -> int | float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise EncodingError(f"{where} must be a number, got {value!r}.")
    if isinstance(value, numbers.Integral):
        return int(value)
    number = float(value)
    if not math.isfinite(number):
        raise EncodingError(f"{where} must be finite, got {number!r}.")
    return number


def _merge(base: dict[str, Any], extra: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge free-form option overrides into an encoded payload."""

    for key, value in extra.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            base[key] = _merge(dict(current), value)
        else:
            base[key] = value
    return base


def loads_chart(text: str | bytes, *, label: str = "") -> Chart:
    """Parse JSON text produced by `chart_to_json` into a Chart.

    Raises:
        ConfigurationError: When the text is not valid JSON or not a chart payload.
    """

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Chart payload is not valid JSON: {exc}") from exc
    return decode_chart(payload, label=label)


def decode_chart(payload: Mapping[str, Any], *, label: str = "") -> Chart:
    """Decode a Chart from a Chart.js configuration payload.

    Args:
        payload: Payload previously produced by `encode_chart` (or written by hand
            in the same shape).
        label: Chart label; the Chart.js payload does not carry one.

    Returns:
        Chart instance. Axis ids are kept as found in the payload.

    Raises:
        ConfigurationError: When required fields are missing or invalid.
    """

    if not isinstance(payload, Mapping):
        raise ConfigurationError(f"Chart payload must be a mapping, got {type(payload).__name__}.")
    try:
        return _decode_chart(payload, label=label)
    except ConfigurationError:
        raise
    except (TypeError, ValueError, KeyError) as exc:
        raise ConfigurationError(f"Invalid chart payload: {exc}") from exc


def _decode_chart(payload: Mapping[str, Any], *, label: str) -> Chart:
    raw_type = payload.get("type")
    if raw_type is None:
        raise ConfigurationError("Chart payload is missing 'type'.")
    chart = Chart(type=ChartType(raw_type), label=label)

    data_raw = _mapping(payload.get("data"), where="data")
    chart.data.labels = [str(item) for item in (data_raw.get("labels") or ())]

    options_raw = dict(_mapping(payload.get("options"), where="options"))
    scales_raw = dict(_mapping(options_raw.pop("scales", None), where="options.scales"))
    for axis_raw in scales_raw.pop("xAxes", None) or ():
        chart.options.scales.x_axes.append(_decode_fields(Axis, axis_raw))
    for axis_raw in scales_raw.pop("yAxes", None) or ():
        chart.options.scales.y_axes.append(_decode_fields(Axis, axis_raw))

    known_option_keys = {wire.key for wire in _OPTIONS_FIELDS}
    decoded_options = _decode_fields(Options, {k: v for k, v in options_raw.items() if k in known_option_keys})
    chart.options.responsive = decoded_options.responsive
    chart.options.maintain_aspect_ratio = decoded_options.maintain_aspect_ratio
    chart.options.title = decoded_options.title
    chart.options.legend = decoded_options.legend
    chart.options.extra = {k: v for k, v in options_raw.items() if k not in known_option_keys}
    if scales_raw:
        chart.options.extra["scales"] = scales_raw

    for dataset_raw in data_raw.get("datasets") or ():
        chart.data.datasets.append(_decode_dataset(_mapping(dataset_raw, where="data.datasets[]")))
    return chart


def _decode_dataset(raw: Mapping[str, Any]) -> Dataset:
    values = raw.get("data") or ()
    if not isinstance(values, Sequence) or isinstance(values, str):
        raise ConfigurationError(f"Dataset data must be a list, got {type(values).__name__}.")
    return _decode_fields(Dataset, raw, data=_decode_points(values))


def _decode_points(values: Sequence[Any]) -> Points:
    if values and all(isinstance(value, Mapping) for value in values):
        has_radius = all("r" in value for value in values)
        return Points.from_xy(
            (value["x"] for value in values),
            (value["y"] for value in values),
            (value["r"] for value in values) if has_radius else None,
        )
    return Points.from_xy(values)


def _decode_fields(cls: type, raw: Any, **initial: Any) -> Any:
    mapping = _mapping(raw, where=cls.__name__)
    kwargs = dict(initial)
    for wire in _WIRE_FIELDS[cls]:
        if wire.key not in mapping or mapping[wire.key] is None:
            continue
        value = mapping[wire.key]
        kwargs[wire.attr] = value if wire.decode is None else wire.decode(value)
    unknown = set(mapping) - {wire.key for wire in _WIRE_FIELDS[cls]} - {"data"}
    if unknown and cls in _EXTRA_KEY_CLASSES:
        kwargs["extra"] = {key: mapping[key] for key in sorted(unknown)}
    elif unknown:
        logger.warning("Ignoring unsupported %s keys: %s", cls.__name__, ", ".join(sorted(unknown)))
    return cls(**kwargs)


def _mapping(value: Any, *, where: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"{where} must be a mapping, got {type(value).__name__}.")
    return value

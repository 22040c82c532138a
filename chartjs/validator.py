"""Eager validation for Chart definitions.

Registration and encoding stay permissive: a chart may reference an axis id
that is never registered, and Chart.js will silently fall back to its default
scale. Callers that prefer to fail fast run `validate_chart` (or
`require_valid`) before encoding.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from .errors import ConfigurationError
from .schema import POINT_CHART_TYPES, Chart, Dataset
from .series import Series


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of validating a chart."""

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


def validate_chart(chart: Chart) -> ValidationResult:
    """Validate axis references and series shapes of a Chart.

    Args:
        chart: Chart to validate.

    Returns:
        ValidationResult containing errors and warnings.
    """

    errors: list[str] = []
    warnings: list[str] = []

    x_ids = [axis.id for axis in chart.options.scales.x_axes]
    y_ids = [axis.id for axis in chart.options.scales.y_axes]
    counts = Counter(axis_id for axis_id in (*x_ids, *y_ids) if axis_id is not None)
    for axis_id in sorted(axis_id for axis_id, count in counts.items() if count > 1):
        errors.append(f"Chart[{chart.label}] axis id {axis_id!r} is registered more than once.")

    for index, dataset in enumerate(chart.data.datasets):
        name = f"Chart[{chart.label}].datasets[{index}]"
        if dataset.x_axis_id is not None and dataset.x_axis_id not in x_ids:
            errors.append(f"{name}.x_axis_id references unknown axis {dataset.x_axis_id!r}.")
        if dataset.y_axis_id is not None and dataset.y_axis_id not in y_ids:
            errors.append(f"{name}.y_axis_id references unknown axis {dataset.y_axis_id!r}.")
        _validate_series(chart, dataset, name=name, errors=errors, warnings=warnings)

    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))


def _validate_series(
    chart: Chart,
    dataset: Dataset,
    *,
    name: str,
    errors: list[str],
    warnings: list[str],
) -> None:
    series = dataset.data
    if not isinstance(series, Series):
        errors.append(f"{name}.data does not provide xs()/ys()/rs().")
        return

    xs = series.xs()
    ys = series.ys()
    rs = series.rs()
    x_len = 0 if xs is None else len(xs)
    if ys is not None and len(ys) != x_len:
        errors.append(f"{name}.data has {x_len} X values but {len(ys)} Y values.")
    if rs is not None and len(rs) != x_len:
        errors.append(f"{name}.data has {x_len} X values but {len(rs)} R values.")

    chart_type = dataset.type or chart.type
    if chart_type in POINT_CHART_TYPES:
        if ys is None:
            errors.append(f"{name} is a {chart_type.value} dataset without Y values.")
        return

    if chart.data.labels:
        values = xs if ys is None else ys
        count = 0 if values is None else len(values)
        if count != len(chart.data.labels):
            warnings.append(f"{name} has {count} values for {len(chart.data.labels)} labels.")


def require_valid(chart: Chart) -> ValidationResult:
    """Validate a Chart and raise when it has errors.

    Returns:
        ValidationResult (which may still carry warnings).

    Raises:
        ConfigurationError: When validation reports at least one error.
    """

    result = validate_chart(chart)
    if not result.is_valid:
        joined = "\n".join(f"- {error}" for error in result.errors)
        raise ConfigurationError(f"Chart {chart.label!r} is invalid:\n{joined}")
    return result

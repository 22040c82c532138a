"""Pytest fixtures shared across chart tests."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import pytest

from chartjs import Axis, AxisPosition, AxisType, Chart, ChartType, Dataset, Points, RGBA


@dataclass
class XY:
    """Minimal Series implementation that is not a chartjs type."""

    x: list[float]
    y: list[float] | None = None
    r: list[float] | None = None

    def xs(self) -> Sequence[float]:
        return self.x

    def ys(self) -> Sequence[float] | None:
        return self.y

    def rs(self) -> Sequence[float] | None:
        return self.r


@pytest.fixture
def xyr_series() -> XY:
    """Return ten points with x == y == r == i."""

    values = [float(i) for i in range(10)]
    return XY(x=list(values), y=list(values), r=list(values))


@pytest.fixture
def bubble_chart(xyr_series: XY) -> Chart:
    """Return a bubble chart with one dataset and one X and Y axis."""

    chart = Chart(type=ChartType.bubble, label="test-chart")
    chart.add_dataset(Dataset(data=xyr_series, background_color=RGBA(0, 255, 0, 200), label="HHIHIHI"))
    chart.add_x_axis(Axis(type=AxisType.linear, position=AxisPosition.bottom))
    chart.add_y_axis(Axis(type=AxisType.linear, position=AxisPosition.right))
    return chart


@pytest.fixture
def bar_chart() -> Chart:
    """Return a bar chart with ten category labels and X-only values."""

    chart = Chart(type=ChartType.bar, label="test-chart")
    chart.add_dataset(Dataset(data=Points.from_xy(float(i) for i in range(10)), background_color=RGBA(0, 255, 0, 200)))
    chart.data.labels = [str(i) for i in range(10)]
    return chart


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no filesystem access.
    - `integration`: tests touching the filesystem, output streams or scripts.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )


@pytest.fixture
def series_cls() -> type[XY]:
    """Return a duck-typed Series class for building ad-hoc datasets."""

    return XY

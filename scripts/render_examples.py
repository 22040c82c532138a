#!/usr/bin/env python3
"""Render the example chart pages.

This is a developer-facing script: it builds the bubble, bar and sin/cos
example charts and writes one HTML page per chart into an output directory,
for checking the pages in a browser.
"""

from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path

from chartjs import (
    PALETTE,
    RGBA,
    Axis,
    AxisPosition,
    AxisType,
    Chart,
    ChartType,
    Dataset,
    HtmlSettings,
    Points,
    ScaleLabel,
    save_html,
)


def _frange(start: float, stop: float, step: float) -> list[float]:
    count = math.ceil((stop - start) / step)
    return [start + i * step for i in range(count)]


def bubble_chart() -> Chart:
    """Bubble chart of sin(x) with the radius growing along x."""

    xs = _frange(0, 9, 0.05)
    chart = Chart(type=ChartType.bubble, label="sin-bubble")
    chart.add_dataset(
        Dataset(
            data=Points.from_xy(xs, [math.sin(x) for x in xs], xs),
            background_color=RGBA(0, 255, 0, 200),
            label="sin(x)",
        )
    )
    chart.add_x_axis(Axis(type=AxisType.linear, position=AxisPosition.bottom))
    chart.add_y_axis(Axis(type=AxisType.linear, position=AxisPosition.right))
    chart.options.responsive = False
    return chart


def bar_chart() -> Chart:
    """Bar chart with ten category labels."""

    chart = Chart(type=ChartType.bar, label="bars")
    chart.add_dataset(Dataset(data=Points.from_xy(range(10)), background_color=RGBA(0, 255, 0, 200)))
    chart.data.labels = [str(i) for i in range(10)]
    return chart


def multi_axis_chart() -> Chart:
    """Line chart with sin(x) and 2*cos(x) plotted against separate Y axes."""

    xs = _frange(0, 9, 0.1)
    sin = Dataset(
        data=Points.from_xy(xs, [math.sin(x) for x in xs]),
        border_color=PALETTE[0],
        background_color=PALETTE[1],
        label="sin(x)",
        fill=False,
        point_radius=10,
        point_border_width=4,
    )
    cos = Dataset(
        data=Points.from_xy(xs, [2 * math.cos(x) for x in xs]),
        border_width=8,
        border_color=PALETTE[2],
        label="2 * cos(x)",
        fill=False,
    )

    chart = Chart(type=ChartType.line, label="sin-cos")
    chart.data.labels = [f"{x:.1f}" for x in xs]
    chart.add_x_axis(
        Axis(
            type=AxisType.category,
            position=AxisPosition.bottom,
            scale_label=ScaleLabel(font_size=22, label_string="X", display=True),
        )
    )
    sin.y_axis_id = chart.add_y_axis(
        Axis(type=AxisType.linear, position=AxisPosition.left, scale_label=ScaleLabel(label_string="sin(x)", display=True))
    )
    cos.y_axis_id = chart.add_y_axis(
        Axis(
            type=AxisType.linear,
            position=AxisPosition.right,
            scale_label=ScaleLabel(label_string="2 * cos(x)", display=True),
        )
    )
    chart.add_dataset(cos)
    chart.add_dataset(sin)
    chart.options.responsive = False
    return chart


def main(argv: list[str] | None = None) -> int:
    """Write the example pages and print their paths."""

    parser = argparse.ArgumentParser(description="Render example Chart.js pages.")
    parser.add_argument("--output-dir", default=".", help="Directory the HTML pages are written to.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    settings = HtmlSettings.from_env()
    for chart in (bubble_chart(), bar_chart(), multi_axis_chart()):
        path = output_dir / f"{chart.label}.html"
        save_html(path, chart, settings=settings)
        print(path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""Tests for standalone HTML output."""

from __future__ import annotations

import io
import json
import math
import os
import stat
import re
from pathlib import Path

import pytest

from chartjs import Chart, ChartType, Dataset, EncodingError, HtmlSettings, Points, render_html, save_html
from chartjs.render import build_context
from chartjs.settings import DEFAULT_SCRIPT_URL

_JSON_PARSE = re.compile(r'JSON\.parse\("(?P<payload>.*?)"\)', re.DOTALL)


def _inline_payloads(page: str) -> list[dict]:
    """Extract the JSON configs inlined into a rendered page."""

    payloads = []
    for match in _JSON_PARSE.finditer(page):
        escaped = match.group("payload")
        text = re.sub(r"\\u([0-9A-Fa-f]{4})", lambda m: chr(int(m.group(1), 16)), escaped)
        payloads.append(json.loads(text))
    return payloads


def _nan_chart() -> Chart:
    chart = Chart(type=ChartType.scatter, label="broken")
    chart.add_dataset(Dataset(data=Points.from_xy([0.0], [math.nan])))
    return chart


@pytest.mark.unit
def test_default_page_loads_chartjs_and_inlines_config(bubble_chart: Chart) -> None:
    """The default page references Chart.js, declares a canvas and parses the config."""

    page = render_html(bubble_chart)

    assert page.lstrip().startswith("<!DOCTYPE html>")
    assert f'<script src="{DEFAULT_SCRIPT_URL}"></script>' in page
    assert '<canvas id="test-chart-0"' in page
    assert "<title>test-chart</title>" in page
    assert _inline_payloads(page) == [json.loads(bubble_chart.to_json())]


@pytest.mark.unit
def test_page_escapes_script_breaking_text() -> None:
    """Labels cannot close the inline script element."""

    chart = Chart(type=ChartType.bar, label="x")
    chart.add_dataset(Dataset(data=Points.from_xy([1.0]), label="</script><b>"))

    page = render_html(chart)
    assert "</script><b>" not in page
    assert _inline_payloads(page)[0]["data"]["datasets"][0]["label"] == "</script><b>"


@pytest.mark.unit
def test_multiple_charts_get_unique_canvases(bubble_chart: Chart, bar_chart: Chart) -> None:
    """Each chart on a page gets its own canvas id and config."""

    page = render_html(bubble_chart, bar_chart)
    assert 'id="test-chart-0"' in page
    assert 'id="test-chart-1"' in page
    assert [p["type"] for p in _inline_payloads(page)] == ["bubble", "bar"]


@pytest.mark.unit
def test_settings_control_script_url_and_canvas_size(bar_chart: Chart) -> None:
    """HtmlSettings are applied to the page."""

    settings = HtmlSettings(script_url="/static/Chart.js", width=640, height=320, title="Report")
    page = render_html(bar_chart, settings=settings)
    assert '<script src="/static/Chart.js"></script>' in page
    assert 'width="640" height="320"' in page
    assert "<title>Report</title>" in page


@pytest.mark.unit
def test_custom_template_and_context(bar_chart: Chart) -> None:
    """A custom template is used verbatim with the chart JSON substituted."""

    template = "<main data-url='{{ script_url }}'>{{ extra_note }}|{{ chart.json|safe }}</main>"
    page = render_html(bar_chart, template=template, context={"extra_note": "<note>"})

    prefix = f"<main data-url='{DEFAULT_SCRIPT_URL}'>&lt;note&gt;|"
    assert page.startswith(prefix)
    assert json.loads(page[len(prefix) : -len("</main>")]) == bar_chart.to_dict()


@pytest.mark.unit
def test_custom_html_is_inserted_into_default_page(bar_chart: Chart) -> None:
    """`custom` context is emitted unescaped in the body."""

    page = render_html(bar_chart, context={"custom": "<p id='note'>hello</p>"})
    assert "<p id='note'>hello</p>" in page


@pytest.mark.unit
def test_render_requires_a_chart() -> None:
    """At least one chart must be rendered."""

    with pytest.raises(ValueError, match="at least one chart"):
        render_html()


@pytest.mark.unit
def test_build_context_canvas_id_for_unlabeled_chart() -> None:
    """Charts without a label fall back to a generic canvas id and title."""

    chart = Chart(type=ChartType.bar)
    chart.add_dataset(Dataset(data=Points.from_xy([1.0])))
    context = build_context((chart,), settings=HtmlSettings())
    assert context["chart"]["canvas_id"] == "chart-0"
    assert context["title"] == "Chart"
    assert context["width"] == 800


@pytest.mark.integration
def test_save_html_writes_file(tmp_path: Path, bubble_chart: Chart) -> None:
    """Saving to a path writes the full document and leaves no temp files."""

    bubble_chart.options.responsive = False
    destination = tmp_path / "test-chartjs.html"
    bubble_chart.save_html(destination)

    page = destination.read_text(encoding="utf-8")
    assert page.rstrip().endswith("</html>")
    assert _inline_payloads(page)[0]["options"]["responsive"] is False
    assert [p.name for p in tmp_path.iterdir()] == ["test-chartjs.html"]


@pytest.mark.integration
def test_save_html_writes_to_stream(bar_chart: Chart) -> None:
    """Text streams receive the whole page."""

    stream = io.StringIO()
    save_html(stream, bar_chart)
    assert stream.getvalue() == render_html(bar_chart)


@pytest.mark.integration
def test_encoding_error_leaves_existing_file_untouched(tmp_path: Path) -> None:
    """Encoding fails before anything is written."""

    destination = tmp_path / "chart.html"
    destination.write_text("previous", encoding="utf-8")

    with pytest.raises(EncodingError):
        save_html(destination, _nan_chart())
    assert destination.read_text(encoding="utf-8") == "previous"
    assert [p.name for p in tmp_path.iterdir()] == ["chart.html"]


@pytest.mark.integration
def test_encoding_error_writes_nothing_to_stream() -> None:
    """No partial output reaches a stream when encoding fails."""

    stream = io.StringIO()
    with pytest.raises(EncodingError):
        save_html(stream, _nan_chart())
    assert stream.getvalue() == ""


@pytest.mark.integration
def test_closed_stream_raises_oserror(bar_chart: Chart) -> None:
    """Closed sinks surface OSError."""

    stream = io.StringIO()
    stream.close()
    with pytest.raises(OSError, match="closed"):
        save_html(stream, bar_chart)


@pytest.mark.integration
def test_missing_directory_raises_oserror(tmp_path: Path, bar_chart: Chart) -> None:
    """Unwritable destinations surface OSError."""

    with pytest.raises(OSError):
        save_html(tmp_path / "missing" / "chart.html", bar_chart)


@pytest.mark.unit
def test_custom_template_renders_numbers(bubble_chart: Chart, bar_chart: Chart) -> None:
    """Loop counters and numeric context values render in custom templates."""

    template = "{% for chart in charts %}{{ forloop.counter }}:{{ chart.canvas_id }};{% endfor %}n={{ n }} w={{ width }}"
    page = render_html(bubble_chart, bar_chart, template=template, context={"n": 3})
    assert page == "1:test-chart-0;2:test-chart-1;n=3 w=800"


@pytest.mark.integration
@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_save_html_keeps_existing_file_mode(tmp_path: Path, bar_chart: Chart) -> None:
    """Replacing a page keeps the permissions of the file it replaces."""

    destination = tmp_path / "chart.html"
    destination.write_text("previous", encoding="utf-8")
    destination.chmod(0o644)

    save_html(destination, bar_chart)
    assert stat.S_IMODE(destination.stat().st_mode) == 0o644


@pytest.mark.integration
@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_save_html_new_file_honors_umask(tmp_path: Path, bar_chart: Chart) -> None:
    """New pages get 0o666 minus the umask, not the private temp-file mode."""

    previous = os.umask(0o022)
    try:
        destination = tmp_path / "chart.html"
        save_html(destination, bar_chart)
    finally:
        os.umask(previous)
    assert stat.S_IMODE(destination.stat().st_mode) == 0o644

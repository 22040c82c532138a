"""Standalone HTML pages that render charts with Chart.js in the browser.

Pages are rendered with the Django template engine used standalone (no
settings module or app registry is required). The encoded chart JSON is
inlined into the page and parsed client-side.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import IO, Any, Final

from django.conf import settings as django_settings
from django.template import Context, Engine
from django.utils.text import slugify

from .encoder import chart_to_json
from .schema import Chart
from .settings import HtmlSettings

logger = logging.getLogger(__name__)

TEMPLATE_DIR: Final = Path(__file__).resolve().parent / "templates"
DEFAULT_TEMPLATE: Final = "chartjs/page.html"


def _engine() -> Engine:
    # Standalone use: rendering numbers reads formatting settings.
    if not django_settings.configured:
        django_settings.configure(USE_I18N=False)
    return Engine(dirs=[str(TEMPLATE_DIR)], autoescape=True)


def build_context(
    charts: tuple[Chart, ...],
    *,
    settings: HtmlSettings,
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Return the template context for a page of charts.

    Each chart is encoded here, so encoding errors surface before any output
    is produced.

    Args:
        charts: Charts rendered on the page, in order.
        settings: Page settings (script URL, canvas size, title).
        extra: Additional context entries (e.g. `custom` HTML for the body).

    Returns:
        Context with `charts`, `chart`, `script_url`, `width`, `height` and
        `title` entries plus any `extra` entries.
    """

    entries = [
        {
            "canvas_id": f"{slugify(chart.label) or 'chart'}-{index}",
            "label": chart.label,
            "json": chart_to_json(chart),
        }
        for index, chart in enumerate(charts)
    ]
    context: dict[str, Any] = {
        "charts": entries,
        "chart": entries[0],
        "script_url": settings.script_url,
        "width": settings.width,
        "height": settings.height,
        "title": settings.title or charts[0].label or "Chart",
    }
    context.update(extra or {})
    return context


def render_html(
    *charts: Chart,
    template: str | None = None,
    context: dict[str, Any] | None = None,
    settings: HtmlSettings | None = None,
) -> str:
    """Render a complete HTML document for one or more charts.

    Args:
        charts: Charts to render, in page order.
        template: Optional Django template source used instead of the default page.
        context: Optional extra template context.
        settings: Page settings; defaults to `HtmlSettings()`.

    Returns:
        The HTML document.

    Raises:
        ValueError: When no chart is given.
        EncodingError: When a chart cannot be encoded.
    """

    if not charts:
        raise ValueError("render_html requires at least one chart.")
    page_context = build_context(charts, settings=settings or HtmlSettings(), extra=context)

    engine = _engine()
    compiled = engine.from_string(template) if template is not None else engine.get_template(DEFAULT_TEMPLATE)
    return compiled.render(Context(page_context))


def save_html(
    destination: str | os.PathLike[str] | IO[str],
    *charts: Chart,
    template: str | None = None,
    context: dict[str, Any] | None = None,
    settings: HtmlSettings | None = None,
) -> None:
    """Render charts to HTML and write the page to a path or text stream.

    The page is rendered in memory first, so an encoding failure leaves the
    destination untouched. Paths are replaced atomically.

    Raises:
        EncodingError: When a chart cannot be encoded.
        OSError: When the destination cannot be written (including closed streams).
    """

    page = render_html(*charts, template=template, context=context, settings=settings)
    if isinstance(destination, (str, os.PathLike)):
        path = Path(destination)
        _write_atomic(path, page)
        logger.info("Wrote %d chart(s) to %s", len(charts), path)
        return

    _write_stream(destination, page)
    logger.info("Wrote %d chart(s) to %s", len(charts), getattr(destination, "name", "stream"))


def _write_atomic(path: Path, page: str) -> None:
    # Atomic write: temp file + rename
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(page)
        os.chmod(tmp_path, _target_mode(path))
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def _target_mode(path: Path) -> int:
    """Return the permission bits a written page should get.

    Existing files keep their mode; new files get 0o666 minus the umask, like
    a plain `open(path, "w")`.
    """

    try:
        return path.stat().st_mode & 0o777
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _write_stream(stream: IO[str], page: str) -> None:
    if getattr(stream, "closed", False):
        raise OSError("Cannot write chart page: output stream is closed.")
    try:
        stream.write(page)
        stream.flush()
    except ValueError as exc:
        raise OSError(f"Cannot write chart page: {exc}") from exc

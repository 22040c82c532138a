"""Load chart definitions from YAML or JSON files."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .encoder import decode_chart
from .errors import ConfigurationError
from .schema import Chart

logger = logging.getLogger(__name__)


def load_chart(path: str | Path, *, label: str | None = None) -> Chart:
    """Load a chart stored in the Chart.js configuration shape.

    JSON files are read by the same YAML parser (JSON is a subset of YAML).

    Args:
        path: File to read.
        label: Chart label; defaults to the file stem.

    Returns:
        Decoded Chart.

    Raises:
        OSError: When the file cannot be read.
        ConfigurationError: When the document is not a valid chart payload.
    """

    file_path = Path(path)
    text = file_path.read_text(encoding="utf-8")
    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"{file_path}: not valid YAML/JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigurationError(f"{file_path}: expected a mapping at the top level.")

    chart = decode_chart(payload, label=file_path.stem if label is None else label)
    logger.debug("Loaded %s chart %r with %d dataset(s) from %s", chart.type.value, chart.label, len(chart.data.datasets), file_path)
    return chart

"""Tests for developer tooling scripts."""

from __future__ import annotations

import importlib.util
import json
import re
from pathlib import Path
from types import ModuleType

import pytest

pytestmark = pytest.mark.integration

REPO_ROOT = Path(__file__).resolve().parents[1]


def _load_script(name: str) -> ModuleType:
    path = REPO_ROOT / "scripts" / f"{name}.py"
    spec = importlib.util.spec_from_file_location(name, path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_checks_script_runs_expected_commands() -> None:
    """Ensure `scripts/checks` runs ruff, mypy, then pytest."""

    content = (REPO_ROOT / "scripts" / "checks").read_text(encoding="utf-8")

    expected_snippets = [
        'ruff_cmd="ruff"',
        'mypy_cmd="mypy"',
        'pytest_cmd="pytest"',
        '"$ruff_cmd" check',
        '"$mypy_cmd" .',
        '"$pytest_cmd" -v',
    ]
    for snippet in expected_snippets:
        assert snippet in content


def test_render_examples_writes_pages(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """The example script writes one page per example chart."""

    module = _load_script("render_examples")
    assert module.main(["--output-dir", str(tmp_path)]) == 0

    names = sorted(p.name for p in tmp_path.iterdir())
    assert names == ["bars.html", "sin-bubble.html", "sin-cos.html"]
    assert capsys.readouterr().out.count(".html") == 3

    page = (tmp_path / "sin-cos.html").read_text(encoding="utf-8")
    escaped = re.search(r'JSON\.parse\("(.*?)"\)', page, re.DOTALL)
    assert escaped is not None
    payload = json.loads(re.sub(r"\\u([0-9A-Fa-f]{4})", lambda m: chr(int(m.group(1), 16)), escaped.group(1)))
    assert [d["label"] for d in payload["data"]["datasets"]] == ["2 * cos(x)", "sin(x)"]
    assert [d["yAxisID"] for d in payload["data"]["datasets"]] == ["y-axis-1", "y-axis-0"]
    assert len(payload["data"]["labels"]) == len(payload["data"]["datasets"][0]["data"])

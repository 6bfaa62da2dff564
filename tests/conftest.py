"""
Shared test fixtures.
"""

import textwrap
from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    """Return an empty templates directory inside tmp_path."""
    path = tmp_path / "templates"
    path.mkdir()
    return path


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    """Return the base directory generated files are written to."""
    path = tmp_path / "out"
    path.mkdir()
    return path


@pytest.fixture
def write_template(templates_dir: Path) -> Callable[[str, str], Path]:
    """Write a dedented template file under templates_dir and return its path."""

    def _write(name: str, content: str) -> Path:
        path = templates_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write

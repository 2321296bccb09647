from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from extindex.core.config import Settings
from tests._fixtures.fake_web import FakeWeb


@pytest.fixture
def web() -> FakeWeb:
    """Provide a fresh fake network for each test."""
    return FakeWeb()


@pytest.fixture
def write_repositories(tmp_path: Path):
    """Write a repositories.json under tmp_path and return its path."""

    def _write(repositories: dict[str, Any]) -> Path:
        path = tmp_path / "repositories.json"
        path.write_text(json.dumps({"repositories": repositories}), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        repositories_file=tmp_path / "repositories.json",
        output_file=tmp_path / "extindex.json",
    )

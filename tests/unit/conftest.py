"""Pytest fixtures shared by unit tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from aquarium_analyser.config import Settings
from tests.unit.fakes import SOURCE_ORIGIN


@pytest.fixture
def app_settings(tmp_path: Path) -> Settings:
    """Isolated settings writing images under a temporary public dir."""
    return Settings(
        _env_file=None,
        public_dir=tmp_path / "public",
        article_source_origin=SOURCE_ORIGIN,
        seo_rewrite_enabled=False,
        openai_api_key="sk-test",
    )

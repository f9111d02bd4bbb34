"""Tests for settings parsing and the JSON-extras log formatter."""

import json
import logging

import pytest

from aquarium_analyser.config import Settings
from aquarium_analyser.core.logging import (
    PACKAGE_LOGGER,
    JSONExtrasFormatter,
    resolve_log_level,
    setup_logging,
)


@pytest.mark.parametrize(
    "raw",
    [
        '["image/png", "image/webp"]',
        "image/png, image/webp",
        "['image/png', 'image/webp']",
    ],
)
def test_mime_type_list_accepts_json_and_comma_separated(
    monkeypatch: pytest.MonkeyPatch, raw: str
) -> None:
    monkeypatch.setenv("UPLOAD_ALLOWED_MIME_TYPES", raw)

    assert Settings(_env_file=None).upload_allowed_mime_types == ["image/png", "image/webp"]


def test_source_origin_trailing_slash_is_stripped() -> None:
    app_settings = Settings(_env_file=None, article_source_origin="https://example.com/ ")

    assert app_settings.article_source_origin == "https://example.com"


def test_images_dir_follows_url_prefix(tmp_path) -> None:
    app_settings = Settings(_env_file=None, public_dir=tmp_path, images_url_prefix="/media/")

    assert app_settings.images_dir == tmp_path / "media"


def test_formatter_appends_extras_as_json() -> None:
    record = logging.LogRecord(
        name="aquarium_analyser.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Article built",
        args=(),
        exc_info=None,
    )
    record.topic = "hair-algae"
    record.warnings = ["Image download failed"]

    line = JSONExtrasFormatter().format(record)

    head, extras = line.split(" {", 1)
    assert head.endswith("| INFO     | aquarium_analyser.test | Article built")
    assert json.loads("{" + extras) == {
        "topic": "hair-algae",
        "warnings": ["Image download failed"],
    }


@pytest.mark.parametrize(
    ("overrides", "expected"),
    [
        ({"log_level": "warning"}, logging.WARNING),
        ({"log_level": "WARNING", "debug": True}, logging.DEBUG),
        ({"log_level": "loud"}, logging.INFO),
    ],
)
def test_resolve_log_level(overrides: dict, expected: int) -> None:
    assert resolve_log_level(Settings(_env_file=None, **overrides)) == expected


def test_setup_logging_follows_latest_settings_without_duplicate_handlers() -> None:
    setup_logging(Settings(_env_file=None, log_level="ERROR"))
    setup_logging(Settings(_env_file=None, debug=True))

    logger = logging.getLogger(PACKAGE_LOGGER)
    formatters = [h for h in logger.handlers if isinstance(h.formatter, JSONExtrasFormatter)]
    assert len(formatters) == 1
    assert logger.level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING

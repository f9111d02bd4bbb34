"""Centralized logging configuration with JSON-formatted extras."""

import json
import logging
import sys

from aquarium_analyser.config import Settings, settings

PACKAGE_LOGGER = "aquarium_analyser"
# Per-request INFO lines from these clients drown out pipeline logs
QUIET_LIBRARY_LOGGERS = ("httpx", "httpcore")


class JSONExtrasFormatter(logging.Formatter):
    """Formatter that outputs a readable log line with extras as JSON.

    Output format:
        2024-01-15 10:30:45 | INFO | aquarium_analyser.module | Message {"key": "value"}
    """

    RESERVED_ATTRS = frozenset(
        {
            "args",
            "asctime",
            "created",
            "exc_info",
            "exc_text",
            "filename",
            "funcName",
            "levelname",
            "levelno",
            "lineno",
            "message",
            "module",
            "msecs",
            "msg",
            "name",
            "pathname",
            "process",
            "processName",
            "relativeCreated",
            "stack_info",
            "taskName",
            "thread",
            "threadName",
        }
    )

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        timestamp = self.formatTime(record, self.datefmt)
        base = f"{timestamp} | {record.levelname:<8} | {record.name} | {record.message}"

        extras = {
            k: v
            for k, v in record.__dict__.items()
            if k not in self.RESERVED_ATTRS and not k.startswith("_")
        }

        if extras:
            try:
                extras_str = json.dumps(extras, default=str, ensure_ascii=False)
            except (TypeError, ValueError):
                extras_str = json.dumps({"unserializable_extras": sorted(extras)})
            base = f"{base} {extras_str}"

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            base = f"{base}\n{record.exc_text}"

        return base


def resolve_log_level(app_settings: Settings | None = None) -> int:
    """Debug mode forces DEBUG; otherwise use the configured level name."""
    app_settings = app_settings or settings
    if app_settings.debug:
        return logging.DEBUG
    level = logging.getLevelName(app_settings.log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(app_settings: Settings | None = None) -> None:
    """Configure the package logger with console output and JSON extras.

    Safe to call repeatedly: the handler is installed once, while the level
    follows the latest settings.
    """
    level = resolve_log_level(app_settings)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for name in QUIET_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    if any(isinstance(h.formatter, JSONExtrasFormatter) for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONExtrasFormatter(datefmt="%Y-%m-%d %H:%M:%S"))

    logger.addHandler(handler)
    logger.propagate = False

"""Logging for the storefront.

structlog renders through the standard library root logger: JSON lines in
production and staging, a console layout everywhere else. Records also go
to a rotating ``storefront.log`` under ``LOG_DIR`` (``logs`` by default).
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

LEVELS = {"production": "INFO", "staging": "INFO", "development": "DEBUG", "test": "WARNING"}

# Chatty third-party loggers kept at WARNING whatever the level
QUIET_LOGGERS = ("urllib3", "stripe", "asyncio", "multipart")


def _environment() -> str:
    return (os.getenv("PROTEAN_ENV") or "development").lower()


def _handlers(level: str) -> list[logging.Handler]:
    log_dir = Path(os.getenv("LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    rotating = logging.handlers.RotatingFileHandler(
        filename=log_dir / "storefront.log",
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    for handler in (console, rotating):
        handler.setLevel(level)
    return [console, rotating]


def configure_logging() -> None:
    environment = _environment()
    level = os.getenv("LOG_LEVEL", LEVELS.get(environment, "INFO")).upper()

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = _handlers(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if environment in ("production", "staging"):
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind values to every log line of the current request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()

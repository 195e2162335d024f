"""Logging configuration for the storefront.

structlog renders on top of the standard library handlers, so third-party
loggers (uvicorn, SQLAlchemy) end up in the same streams as ours.

Request and checkout details travel through structlog's context variables:
the app binds ``request_id``/``method``/``path`` per request and the
checkout processor adds ``cart_items`` and ``order_id``. Every line logged
while handling that request carries them.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

from shared.config import get_env

LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}
STRUCTURED_ENVS = ("production", "staging")
NOISY_LOGGERS = ("sqlalchemy.engine", "asyncio", "multipart")

LOG_FILE = "storefront.log"
ERROR_LOG_FILE = "storefront_error.log"
MAX_LOG_BYTES = 10 * 1024 * 1024


def get_log_level() -> str:
    """``LOG_LEVEL`` if set, else the level for the current environment."""
    return os.getenv("LOG_LEVEL", LEVELS.get(get_env(), "INFO")).upper()


def _rotating(path: Path, level: int | str) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=5,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(log_dir: str | None = None) -> None:
    """Route the root logger to stdout, and to rotating files when a log
    directory is given (explicitly or through ``LOG_DIR``)."""
    level = get_log_level()
    log_dir = log_dir or os.getenv("LOG_DIR")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    handlers[0].setLevel(level)
    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        handlers.append(_rotating(path / LOG_FILE, level))
        handlers.append(_rotating(path / ERROR_LOG_FILE, logging.ERROR))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = handlers

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _renderer(env: str):
    if env in STRUCTURED_ENVS:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=True, max_frames=2),
    )


def setup_structlog() -> None:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
        _renderer(get_env()),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(log_dir: str | None = None) -> None:
    setup_stdlib_logging(log_dir)
    setup_structlog()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind values to every later log line in the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()

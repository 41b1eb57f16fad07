"""Logging configuration for the comandas domain.

Structured logs go through structlog on top of the stdlib root logger. The
environment (``ENV``, ``ENVIRONMENT`` or ``PROTEAN_ENV``) picks the default
level and the renderer; ``LOG_LEVEL`` and ``LOG_DIR`` override level and
file output.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

LEVELS_BY_ENVIRONMENT = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

JSON_ENVIRONMENTS = ("production", "staging")

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def current_environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """Get log level based on environment."""
    return os.getenv("LOG_LEVEL", LEVELS_BY_ENVIRONMENT.get(current_environment(), "INFO")).upper()


def _rotating_handler(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(log_dir: str | None = None, log_file_prefix: str = "comandas") -> None:
    """Configure standard library logging.

    Console output is always on. Rotating files (all levels plus an
    errors-only file) are written only when ``log_dir`` is given.
    """
    log_level = get_log_level()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if log_dir:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        root_logger.addHandler(_rotating_handler(directory / f"{log_file_prefix}.log", log_level))
        root_logger.addHandler(_rotating_handler(directory / f"{log_file_prefix}_error.log", logging.ERROR))

    for noisy in ("protean", "asyncio", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def _renderer(environment: str):
    if environment in JSON_ENVIRONMENTS:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stdout.isatty(),
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=True, max_frames=2),
    )


def setup_structlog() -> None:
    """Configure structlog processors and the renderer for this environment."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
        _renderer(current_environment()),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(log_dir: str | None = None, log_file_prefix: str = "comandas") -> None:
    """Configure all logging for the application.

    ``log_dir`` defaults to ``LOG_DIR``; without either, logs go to stdout only.
    """
    setup_stdlib_logging(log_dir=log_dir or os.getenv("LOG_DIR"), log_file_prefix=log_file_prefix)
    setup_structlog()


def log_context(**kwargs: Any):
    """Bind ``kwargs`` to every log line emitted inside the ``with`` block."""
    return structlog.contextvars.bound_contextvars(**kwargs)

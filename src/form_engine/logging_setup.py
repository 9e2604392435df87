"""
Logging configuration for the form engine.

All engine modules log to children of the ``form-engine`` logger.
This module attaches console and JSON-lines file handlers to it and
provides a context manager for timing the external submission call.
"""

import json
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from form_engine.config import get_config

LOGGER_NAME = "form-engine"

CONSOLE_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JsonLinesFormatter(logging.Formatter):
    """
    Formats each record as one JSON object per line.

    Useful for persistent logging and later analysis.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def _owned_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, "_form_engine_handler", False)]


def setup_logging(
    enabled: bool = True,
    console: bool = True,
    verbose: bool = False,
    file_path: str | None = None,
    level: str | None = None,
) -> logging.Logger:
    """
    Configure logging for the form engine.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        enabled: Whether engine logging is enabled.
        console: Whether to log to stderr.
        verbose: Log at DEBUG regardless of ``level``.
        file_path: Optional JSON-lines file to append records to.
        level: Log level name. If None, uses config.log_level.

    Example:
        >>> from form_engine.logging_setup import setup_logging
        >>> setup_logging(verbose=True, file_path="engine.jsonl")
    """
    logger = logging.getLogger(LOGGER_NAME)

    for handler in _owned_handlers(logger):
        logger.removeHandler(handler)
        handler.close()

    if not enabled:
        disable_logging()
        return logger

    logger.setLevel(logging.DEBUG if verbose else (level or get_config().log_level))

    handlers: list[logging.Handler] = []

    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        handlers.append(stream_handler)

    if file_path:
        file_handler = logging.FileHandler(file_path, encoding="utf-8")
        file_handler.setFormatter(JsonLinesFormatter())
        handlers.append(file_handler)

    for handler in handlers:
        handler._form_engine_handler = True
        logger.addHandler(handler)

    return logger


def disable_logging() -> None:
    """Silence the engine's loggers."""
    logging.getLogger(LOGGER_NAME).setLevel(logging.CRITICAL + 1)


def enable_logging() -> None:
    """Restore the configured log level."""
    logging.getLogger(LOGGER_NAME).setLevel(get_config().log_level)


@asynccontextmanager
async def logged_operation(
    name: str,
    logger: logging.Logger | None = None,
) -> AsyncGenerator[None, None]:
    """
    Log the start, end and duration of an awaited operation.

    Exceptions are logged and re-raised.

    Example:
        >>> async with logged_operation("submission"):
        ...     response = await submitter(record)
    """
    log = logger or logging.getLogger(LOGGER_NAME)
    started = time.perf_counter()
    log.info(f"{name} started")
    try:
        yield
    except Exception as e:
        log.warning(f"{name} failed after {time.perf_counter() - started:.3f}s: {e}")
        raise
    log.info(f"{name} finished in {time.perf_counter() - started:.3f}s")

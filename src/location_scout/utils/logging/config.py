# ABOUTME: Logging configuration using loguru
# ABOUTME: Interactive runs log to rotating files under logs/, production runs log JSON to stdout

import io
import logging
import os
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from loguru import logger

LOG_MODE_ENV = "LOCATION_SCOUT_LOG_MODE"
LOG_DIR = Path("logs")
LOG_FILES = {
    "main": "location-scout.log",
    "json": "location-scout.json",
    "errors": "errors.log",
}

TEXT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
JSON_FORMAT = "{time} | {level} | {name} | {message}"

# Loggers that are chatty at INFO and only matter when something breaks
QUIET_LOGGERS = ["httpx", "httpcore", "aiosqlite", "sqlalchemy.engine", "asyncio"]


class LoggingMode:
    """Logging mode constants."""

    INTERACTIVE = "interactive"
    PRODUCTION = "production"


def detect_logging_mode() -> str:
    """LOCATION_SCOUT_LOG_MODE when valid, otherwise interactive on a TTY and production elsewhere."""
    mode = (os.getenv(LOG_MODE_ENV) or "").lower()
    if mode in (LoggingMode.INTERACTIVE, LoggingMode.PRODUCTION):
        return mode
    return LoggingMode.INTERACTIVE if sys.stdout.isatty() else LoggingMode.PRODUCTION


def setup_third_party_logging() -> None:
    """Raise library loggers to WARNING so page fetches and SQL don't flood the output."""
    for logger_name in QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
    logging.getLogger("py.warnings").setLevel(logging.ERROR)


def _make_log_dir(log_dir: Path, attempts: int = 3) -> bool:
    """Create ``log_dir``, retrying briefly. False when it can't be created."""
    for attempt in range(1, attempts + 1):
        try:
            log_dir.mkdir(exist_ok=True)
            return True
        except OSError:
            if attempt == attempts:
                return False
            time.sleep(0.01 * attempt)
    return False


def _add_stdout_sink(log_level: str) -> None:
    logger.add(sys.stdout, level=log_level, format=JSON_FORMAT, serialize=True)


def _add_file_sinks(log_dir: Path, log_level: str, log_file: str | None) -> None:
    main_log = log_file or str(log_dir / LOG_FILES["main"])
    logger.add(main_log, level=log_level, format=TEXT_FORMAT, rotation="10 MB", retention="7 days")
    logger.add(
        log_dir / LOG_FILES["json"],
        level=log_level,
        format=JSON_FORMAT,
        serialize=True,
        rotation="10 MB",
        retention="7 days",
    )
    logger.add(log_dir / LOG_FILES["errors"], level="ERROR", format=TEXT_FORMAT, backtrace=True, diagnose=True)


def configure_logging(mode: str | None = None, log_level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging using loguru.

    Interactive mode writes a readable log, a JSON log and an errors-only log
    under ``logs/``. It drops back to production mode when that directory
    can't be created.

    Args:
        mode: Logging mode (interactive/production), auto-detected if None
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Custom path for the readable log, replaces logs/location-scout.log
    """
    mode = mode or detect_logging_mode()

    setup_third_party_logging()
    logging.getLogger().setLevel(getattr(logging, log_level.upper(), logging.INFO))

    logger.remove()

    if mode == LoggingMode.INTERACTIVE and _make_log_dir(LOG_DIR):
        _add_file_sinks(LOG_DIR, log_level, log_file)
    else:
        _add_stdout_sink(log_level)


def get_logging_status() -> dict[str, Any]:
    """Describe the current logging mode, directory and log files."""
    mode = detect_logging_mode()
    interactive = mode == LoggingMode.INTERACTIVE

    return {
        "mode": mode,
        "log_directory": str(LOG_DIR.absolute()) if LOG_DIR.exists() else None,
        "log_files": {key: str(LOG_DIR / name) if interactive else None for key, name in LOG_FILES.items()},
        "third_party_suppressed": [*QUIET_LOGGERS, "py.warnings"],
    }


@contextmanager
def suppress_library_output() -> Iterator[None]:
    """Swallow anything a library prints to stdout or stderr inside the block."""
    saved = sys.stdout, sys.stderr
    sys.stdout = sys.stderr = io.StringIO()
    try:
        yield
    finally:
        sys.stdout, sys.stderr = saved

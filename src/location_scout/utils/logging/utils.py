# ABOUTME: structlog helpers: logger lookup, call-timing decorators and context binding
# ABOUTME: Decorators log the start of a call, its completion with duration, and failures with the error type

import functools
import time
import uuid
from collections.abc import Callable
from typing import Any, TypeVar
from urllib.parse import urlparse

import structlog

F = TypeVar("F", bound=Callable[..., Any])

DEFAULT_LOGGER_NAME = "location_scout"


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Structlog logger for ``name``, normally the calling module's ``__name__``."""
    return structlog.get_logger(name or DEFAULT_LOGGER_NAME)


def generate_operation_id() -> str:
    """Short random ID tying together the log lines of one operation."""
    return uuid.uuid4().hex[:8]


def _find_url(args: tuple, kwargs: dict) -> str | None:
    """The ``url`` keyword argument, else the first positional http(s) string."""
    url = kwargs.get("url")
    if isinstance(url, str):
        return url
    return next((arg for arg in args if isinstance(arg, str) and arg.startswith(("http://", "https://"))), None)


def _result_counts(result: Any) -> dict[str, int]:
    if hasattr(result, "records"):
        return {"record_count": len(result.records)}
    if hasattr(result, "__len__"):
        return {"result_count": len(result)}
    return {}


class _Timer:
    """Wall-clock timing of one call and the fields logged when it ends."""

    def __init__(self) -> None:
        self.started = time.perf_counter()

    def elapsed(self) -> float:
        return round(time.perf_counter() - self.started, 3)

    def succeeded(self, **fields: Any) -> dict[str, Any]:
        return {"duration_seconds": self.elapsed(), "success": True, **fields}

    def failed(self, exc: BaseException) -> dict[str, Any]:
        return {
            "duration_seconds": self.elapsed(),
            "error": str(exc),
            "error_type": type(exc).__name__,
            "success": False,
        }


def with_operation_context(operation: str, **context) -> Callable[[F], F]:
    """Decorator timing a synchronous call.

    Start and completion are logged at debug, failures at error before the
    exception is re-raised.

    Args:
        operation: Operation name used in the log events
        **context: Extra fields bound to every event
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            log = get_logger(func.__module__).bind(
                operation=operation, operation_id=generate_operation_id(), function=func.__name__, **context
            )
            log.debug(f"Starting {operation}")
            timer = _Timer()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                log.error(f"Failed {operation}", **timer.failed(exc))
                raise
            log.debug(f"Completed {operation}", **timer.succeeded())
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


def log_api_call(api_name: str, **context) -> Callable[[F], F]:
    """Decorator for coroutines that call a remote service.

    The target URL is taken from the call's arguments and bound to each event.

    Args:
        api_name: Name of the remote call, e.g. ``page_fetch``
        **context: Extra fields bound to every event
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            log = get_logger(func.__module__).bind(
                api_name=api_name, call_id=generate_operation_id(), url=_find_url(args, kwargs), **context
            )
            log.debug(f"{api_name} request started")
            timer = _Timer()
            try:
                result = await func(*args, **kwargs)
            except Exception as exc:
                log.error(f"{api_name} request failed", **timer.failed(exc))
                raise
            log.info(f"{api_name} request succeeded", **timer.succeeded())
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


def log_extraction_step(step_name: str) -> Callable[[F], F]:
    """Decorator for coroutines that make up the page extraction pipeline.

    Completion events carry ``record_count`` for results with records,
    or ``result_count`` for sized results.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            log = get_logger(func.__module__).bind(
                step=step_name, url=_find_url(args, kwargs), pipeline="location_extraction"
            )
            log.info(f"Starting extraction step: {step_name}")
            timer = _Timer()
            try:
                result = await func(*args, **kwargs)
            except Exception as exc:
                log.error(f"Failed extraction step: {step_name}", **timer.failed(exc))
                raise
            log.info(f"Completed extraction step: {step_name}", **timer.succeeded(**_result_counts(result)))
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


class LogContext:
    """Logger bound to ``context`` for a with-block; an escaping exception is logged, not swallowed."""

    def __init__(self, logger: structlog.stdlib.BoundLogger, **context):
        self.logger = logger.bind(**context)

    def __enter__(self) -> structlog.stdlib.BoundLogger:
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is not None:
            self.logger.error("Context operation failed", error=str(exc_val), error_type=exc_type.__name__)
        return False


def with_page_context(url: str) -> LogContext:
    """Logging context for work on a single page, bound to its URL and host."""
    return LogContext(get_logger(), url=url, host=urlparse(url).hostname, entity_type="page")


def with_pipeline_context(pipeline_name: str, **context) -> LogContext:
    """Logging context for a pipeline run with a fresh operation ID."""
    return LogContext(get_logger(), pipeline=pipeline_name, operation_id=generate_operation_id(), **context)

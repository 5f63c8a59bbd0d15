# ABOUTME: Logging configuration, progress tracking, and structured logger helpers
# ABOUTME: Provides loguru sink setup and structlog loggers for the extraction pipeline

from .config import LoggingMode, configure_logging, detect_logging_mode, get_logging_status, suppress_library_output
from .progress import create_progress
from .utils import (
    get_logger,
    log_api_call,
    log_extraction_step,
    with_operation_context,
    with_page_context,
    with_pipeline_context,
)

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "detect_logging_mode",
    "get_logging_status",
    "suppress_library_output",
    # Progress
    "create_progress",
    # Utilities
    "get_logger",
    "log_api_call",
    "log_extraction_step",
    "with_operation_context",
    "with_page_context",
    "with_pipeline_context",
]

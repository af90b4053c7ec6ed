"""Logging setup and error display for CLI operations.

This module provides:
- configure_logging: Level and destination of the package's log records
- handle_error: Formatted error messages with context and optional stack traces
- print_batch_summary: Totals for a batch run
"""

import logging
import sys
import traceback
from pathlib import Path

from pipeprocess.core.pipeline import BatchReport

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def configure_logging(level: str = "warning", log_file: Path | None = None) -> logging.Logger:
    """Configure the `pipeprocess` logger.

    Records go to stderr, or to log_file when given. Handlers installed by a
    previous call are replaced, so repeated calls do not duplicate output.

    Args:
        level: One of debug, info, warning, error (case-insensitive)
        log_file: Optional file to append log records to

    Returns:
        The configured logger

    Raises:
        ValueError: If level is not a known level name
    """
    try:
        numeric_level = LOG_LEVELS[level.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown log level '{level}'. Available: {', '.join(LOG_LEVELS)}"
        ) from None

    logger = logging.getLogger("pipeprocess")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(numeric_level)
    return logger


def handle_error(error: Exception, verbose: bool = False) -> None:
    """Format and display error message with context.

    Displays error messages to stderr with the context fields carried by
    PipeProcessError exceptions. When verbose mode is enabled, also displays
    the full stack trace.

    Args:
        error: Exception to display
        verbose: Whether to show stack trace (default False)
    """
    print(f"Error: {error}", file=sys.stderr)

    if hasattr(error, "context") and error.context:
        print("Context:", file=sys.stderr)
        for key, value in error.context.items():
            print(f"  {key}: {value}", file=sys.stderr)

    if verbose:
        print("\nStack trace:", file=sys.stderr)
        traceback.print_exception(type(error), error, error.__traceback__, file=sys.stderr)


def print_batch_summary(report: BatchReport) -> None:
    """Print totals for a batch run to stdout."""
    print("\nBatch processing complete:")
    print(f"  Selected: {len(report.tasks)}")
    print(f"  Written: {len(report.written)}")
    print(f"  Skipped: {len(report.skipped)}")

    if report.error is not None:
        print(f"\nAborted: {report.error}")

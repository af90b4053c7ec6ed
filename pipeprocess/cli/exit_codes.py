"""Exit code constants for CLI commands.

This module defines standard exit codes for different error conditions,
following Unix conventions where 0 indicates success and non-zero values
indicate different types of failures.

Exit codes:
    0: SUCCESS - Operation completed successfully
    1: UNEXPECTED_ERROR - Unexpected/unhandled exception
    2: PROCESSING_ERROR - A directive raised while processing data
    3: READ_ERROR - Source directory or file could not be read
    4: WRITE_ERROR - Output directory or file could not be written
    5: STREAM_ERROR - Stream mode used after the input stream was closed
    6: CONFIG_ERROR - Configuration file or argument error
"""

from pipeprocess.core.exceptions import (
    DestinationWriteError,
    PipeProcessError,
    SelectionError,
    SourceReadError,
    StreamClosedError,
)


class ExitCode:
    """Standard exit codes for CLI commands.

    Example:
        >>> from pipeprocess.cli.exit_codes import ExitCode
        >>> import sys
        >>>
        >>> sys.exit(ExitCode.SUCCESS)
    """

    SUCCESS = 0
    """Operation completed successfully."""

    UNEXPECTED_ERROR = 1
    """Unexpected or unhandled exception occurred."""

    PROCESSING_ERROR = 2
    """A directive raised while processing data."""

    READ_ERROR = 3
    """Source directory listing or source file reading failed."""

    WRITE_ERROR = 4
    """Output directory creation or output file writing failed."""

    STREAM_ERROR = 5
    """Stream mode was used after the input stream was closed."""

    CONFIG_ERROR = 6
    """Configuration file or argument error."""


def exit_code_for(error: BaseException) -> int:
    """Map an exception that stopped a command to its exit code.

    Exceptions outside the pipeprocess hierarchy come from directives and
    map to PROCESSING_ERROR.
    """
    if isinstance(error, SourceReadError):
        return ExitCode.READ_ERROR
    if isinstance(error, DestinationWriteError):
        return ExitCode.WRITE_ERROR
    if isinstance(error, SelectionError):
        # Listing failures are reads; mkdir failures are writes
        if error.context.get("operation") == "create":
            return ExitCode.WRITE_ERROR
        return ExitCode.READ_ERROR
    if isinstance(error, StreamClosedError):
        return ExitCode.STREAM_ERROR
    if isinstance(error, PipeProcessError):
        return ExitCode.UNEXPECTED_ERROR
    return ExitCode.PROCESSING_ERROR

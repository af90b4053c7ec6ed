"""Custom exception classes for pipeprocess error handling.

This module defines the exception hierarchy for the text processing pipeline:
- StreamClosedError: Stream mode used after the input stream was closed
- SelectionError: Source directory listing or output directory creation failures
- SourceReadError: Source file loading or decoding failures
- DestinationWriteError: Destination file writing failures

All exceptions inherit from PipeProcessError for consistent error handling.
Exceptions raised by caller-supplied directives are never wrapped.
"""

from typing import Any


class PipeProcessError(Exception):
    """Base exception for all pipeprocess errors.

    Provides a common base class for all custom exceptions in the package,
    enabling catch-all error handling when needed.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error description
            context: Optional dictionary of contextual information (paths,
                    reasons, stream state, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return a formatted error message with context."""
        if not self.context:
            return self.message

        context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.message} [{context_str}]"


class StreamClosedError(PipeProcessError):
    """Exception raised when stream mode is used on a closed input stream.

    Closing the input stream is a one-way transition: once a batch run has
    closed it, `line` and `whole` cannot attach to it again.
    """

    def __init__(self, message: str, **extra_context: Any) -> None:
        super().__init__(message, dict(extra_context))


class SelectionError(PipeProcessError):
    """Exception raised when file selection cannot proceed.

    Raised when the source directory cannot be listed or the output
    directory cannot be created.

    Context typically includes:
        - directory: The directory that could not be accessed or created
        - reason: Specific reason for the failure
    """

    def __init__(
        self,
        message: str,
        directory: str | None = None,
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        """Initialize selection error with directory details.

        Args:
            message: Human-readable error description
            directory: Directory involved in the failure
            reason: Specific reason for the failure
            **extra_context: Additional context information
        """
        context: dict[str, Any] = {}
        if directory is not None:
            context["directory"] = directory
        if reason is not None:
            context["reason"] = reason
        context.update(extra_context)

        super().__init__(message, context)


class SourceReadError(PipeProcessError):
    """Exception raised when a source file cannot be loaded.

    Context typically includes:
        - file_path: Path to the source file
        - reason: Specific reason for the failure (missing file, permissions,
                 invalid UTF-8)
    """

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        """Initialize read error with source file details.

        Args:
            message: Human-readable error description
            file_path: Path to the source file that failed
            reason: Specific reason for the failure
            **extra_context: Additional context information
        """
        context: dict[str, Any] = {}
        if file_path is not None:
            context["file_path"] = file_path
        if reason is not None:
            context["reason"] = reason
        context.update(extra_context)

        super().__init__(message, context)


class DestinationWriteError(PipeProcessError):
    """Exception raised when a destination file cannot be written.

    Context typically includes:
        - output_path: Path where the output file should be written
        - reason: Specific reason for the failure
    """

    def __init__(
        self,
        message: str,
        output_path: str | None = None,
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        """Initialize write error with destination details.

        Args:
            message: Human-readable error description
            output_path: Path where the output file should be written
            reason: Specific reason for the failure
            **extra_context: Additional context information
        """
        context: dict[str, Any] = {}
        if output_path is not None:
            context["output_path"] = output_path
        if reason is not None:
            context["reason"] = reason
        context.update(extra_context)

        super().__init__(message, context)

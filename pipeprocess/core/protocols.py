"""Protocol definitions for pipeprocess callbacks.

This module defines the callable shapes that flow through the pipeline. The
library itself is callback driven: callers supply directives and processors,
the library supplies outputters and the line/whole registration functions.

Protocols:
    - Outputter: Receives one processed string per call
    - Directive: Transforms one piece of text and emits zero or more strings
    - ModeFunction: Registers a directive against one file's text (line or whole)
    - Processor: Receives the line and whole registration functions for one file
"""

from typing import Protocol


class Outputter(Protocol):
    """Protocol for output sinks handed to directives.

    Example:
        >>> def emit(data: str) -> None:
        ...     print(data)
    """

    def __call__(self, data: str) -> None: ...


class Directive(Protocol):
    """Protocol for caller-supplied processing functions.

    A directive is invoked with the data to process (one line, or a whole
    text blob) and an outputter. It may call the outputter any number of
    times, including zero, to emit results.

    Example:
        >>> def shout(data: str, output: Outputter) -> None:
        ...     output(data.upper())
    """

    def __call__(self, data: str, output: Outputter) -> None: ...


class ModeFunction(Protocol):
    """Protocol for the line/whole functions passed to a processor."""

    def __call__(self, directive: Directive) -> None: ...


class Processor(Protocol):
    """Protocol for per-file processors used by batch runs.

    The processor is called exactly once per selected file. It receives the
    `line` and `whole` functions for that file and may call either of them
    any number of times. All emitted output goes to the same file.

    Example:
        >>> def processor(line: ModeFunction, whole: ModeFunction) -> None:
        ...     line(lambda data, output: output(data.upper()))
    """

    def __call__(self, line: ModeFunction, whole: ModeFunction) -> None: ...

"""Line/whole splitting of text blobs.

A text blob is offered to a directive in one of two modes:

- LINE: the blob is split on LF or CRLF line endings and the directive is
  invoked once per resulting line, in order. A blob ending with a newline
  yields a trailing empty line.
- WHOLE: the directive is invoked once with the untouched blob.
"""

import re
from enum import Enum

from pipeprocess.core.protocols import Directive, Outputter

# Unix files use LF, Windows files use CRLF
NEWLINE_PATTERN = re.compile(r"\r?\n")


class ProcessingMode(Enum):
    """How a text blob is handed to a directive.

    Attributes:
        LINE: Invoke the directive once per line
        WHOLE: Invoke the directive once with the whole blob
    """

    LINE = "line"
    WHOLE = "whole"


def split_lines(text: str) -> list[str]:
    """Split text on LF or CRLF line endings.

    Empty entries are kept, including the trailing one produced by a final
    newline.

    Example:
        >>> split_lines("a\\r\\nb\\n")
        ['a', 'b', '']
    """
    return NEWLINE_PATTERN.split(text)


def apply_directive(
    mode: ProcessingMode,
    text: str,
    directive: Directive,
    output: Outputter,
) -> None:
    """Invoke a directive over a text blob in the given mode.

    Args:
        mode: LINE to invoke once per line, WHOLE to invoke once
        text: Text blob to process
        directive: Caller-supplied processing function
        output: Outputter passed to every directive invocation

    Raises:
        ValueError: If mode is not a ProcessingMode
    """
    if mode is ProcessingMode.LINE:
        for entry in split_lines(text):
            directive(entry, output)
    elif mode is ProcessingMode.WHOLE:
        directive(text, output)
    else:
        raise ValueError(f"Unknown processing mode: {mode!r}")

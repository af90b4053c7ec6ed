"""Built-in directives.

Line directives receive one line at a time; whole directives receive a full
text blob. Every directive has the signature directive(data, output).
"""

import textwrap

from pipeprocess.core.protocols import Outputter
from pipeprocess.core.splitting import split_lines


def identity(data: str, output: Outputter) -> None:
    """Emit the input unchanged."""
    output(data)


def upper(data: str, output: Outputter) -> None:
    """Convert text to upper case."""
    output(data.upper())


def lower(data: str, output: Outputter) -> None:
    """Convert text to lower case."""
    output(data.lower())


def strip(data: str, output: Outputter) -> None:
    """Remove leading and trailing whitespace."""
    output(data.strip())


def title(data: str, output: Outputter) -> None:
    """Capitalize the first letter of every word."""
    output(data.title())


def reverse(data: str, output: Outputter) -> None:
    """Reverse the characters of the text."""
    output(data[::-1])


def sort_lines(data: str, output: Outputter) -> None:
    """Sort lines alphabetically."""
    output("\n".join(sorted(split_lines(data))))


def dedent(data: str, output: Outputter) -> None:
    """Remove common leading whitespace from every line."""
    output(textwrap.dedent(data))


def squeeze_blank(data: str, output: Outputter) -> None:
    """Collapse runs of blank lines into a single blank line."""
    kept: list[str] = []
    for entry in split_lines(data):
        if not entry.strip() and kept and not kept[-1].strip():
            continue
        kept.append(entry)
    output("\n".join(kept))

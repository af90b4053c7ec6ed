"""Cyclopts application and command routing for the pipeprocess CLI.

The CLI provides the following commands:
- line: Apply directives to every line of standard input
- whole: Apply directives to every chunk of standard input
- files: Process every matching file of a directory
"""

from cyclopts import App

from pipeprocess import __version__
from pipeprocess.cli import commands

app = App(
    name="pipeprocess",
    help="Line and whole-text processing of piped-in data and directories",
    version=__version__,
)

app.command(commands.line)
app.command(commands.whole)
app.command(commands.files)


def main() -> None:
    """Console script entry point."""
    exit_code = app()
    raise SystemExit(exit_code if exit_code is not None else 0)

"""CLI entry point for pipeprocess.

Enables invocation via `python -m pipeprocess`.
"""

import sys

from pipeprocess.cli.app import app

if __name__ == "__main__":
    exit_code = app()
    sys.exit(exit_code if exit_code is not None else 0)

"""
Console factory for pmkit output.

Command echo and status lines go to stdout, error reports to stderr. Colour
is dropped whenever the target stream is not a terminal, when running under
CI, or when NO_COLOR is set.
"""
import os
import sys

from rich.console import Console

# Environment variables that switch output to plain text
PLAIN_OUTPUT_VARS = ("CI", "GITHUB_ACTIONS", "NO_COLOR")


def wants_plain_output(stderr: bool = False) -> bool:
    """True when the selected stream should get uncoloured output."""
    if any(os.getenv(name) is not None for name in PLAIN_OUTPUT_VARS):
        return True
    stream = sys.stderr if stderr else sys.stdout
    return not stream.isatty()


def get_console(stderr: bool = False) -> Console:
    """Create a console for stdout, or for stderr when `stderr` is set."""
    if wants_plain_output(stderr):
        return Console(stderr=stderr, force_terminal=False, no_color=True)
    return Console(stderr=stderr)

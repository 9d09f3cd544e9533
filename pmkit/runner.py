"""
Command execution for pmkit.

Runs resolved command lines with the terminal attached so package manager
output streams straight to the user, and hands back the child's exit code.
"""
import logging
import shlex
import shutil
import subprocess
from typing import Optional, Sequence

from rich.console import Console

from pmkit.rich_utils.ui_helpers import get_console
from pmkit.utils.exceptions import CommandNotFoundError

logger = logging.getLogger(__name__)


def format_command(command: Sequence[str]) -> str:
    return " ".join(shlex.quote(part) for part in command)


class CommandRunner:
    """Executes command lines produced by the dispatcher."""

    def __init__(self, dry_run: bool = False, console: Optional[Console] = None):
        self.dry_run = dry_run
        self.console = console or get_console()

    def is_available(self, binary: str) -> bool:
        """Check whether `binary` is on PATH."""
        return shutil.which(binary) is not None

    def run(self, command: Sequence[str], cwd: Optional[str] = None) -> int:
        """Run `command` and return its exit code unchanged.

        Raises:
            CommandNotFoundError: if the program is not installed
        """
        command = list(command)
        if self.dry_run:
            self.console.print(f"$ {format_command(command)}", style="dim", markup=False, highlight=False)
            return 0

        logger.debug(f"Executing {command} in {cwd or '.'}")
        try:
            result = subprocess.run(command, cwd=cwd)
        except FileNotFoundError as e:
            raise CommandNotFoundError(command[0]) from e

        logger.debug(f"{command[0]} exited with {result.returncode}")
        return result.returncode

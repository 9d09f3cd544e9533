"""
Shared helpers for CLI commands.

Commands stay thin: they build an Action, hand it to the service stored on
the Typer context, and exit with whatever code the package manager returned.
"""
import sys
from typing import Callable

import typer

from pmkit.core.service import PackageManagerService
from pmkit.models import Action
from pmkit.rich_utils.ui_helpers import get_console
from pmkit.utils.exceptions import PackageManagerError

# Lets commands forward unknown options such as `--coverage` to the script
PASSTHROUGH_SETTINGS = {"allow_extra_args": True, "ignore_unknown_options": True}


def get_service(ctx: typer.Context) -> PackageManagerService:
    return ctx.find_root().obj["service"]


def report_error(error: PackageManagerError) -> None:
    console = get_console(stderr=True)
    console.print(f"❌ {error.message}", style="bold red", markup=False, highlight=False)
    if error.suggested_action:
        console.print(f"💡 {error.suggested_action}", style="yellow", markup=False, highlight=False)


def exit_with(operation: Callable[[], int]) -> None:
    """Run `operation` and exit with its code, reporting pmkit errors."""
    try:
        exit_code = operation()
    except PackageManagerError as e:
        report_error(e)
        sys.exit(e.exit_code)
    except KeyboardInterrupt:
        typer.echo("\n⚠️ Interrupted by user")
        sys.exit(130)

    if exit_code != 0:
        sys.exit(exit_code)


def run_action(ctx: typer.Context, action: Action) -> None:
    service = get_service(ctx)
    exit_with(lambda: service.execute(action))

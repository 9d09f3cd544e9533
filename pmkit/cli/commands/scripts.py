"""
Script commands: `run` plus the named shortcuts (dev, build, test, ...).

Everything after the script name is forwarded to the package manager as is.
"""
import typer

from pmkit.cli.common import run_action
from pmkit.models import Action


def run_command(
    ctx: typer.Context,
    script: str = typer.Argument(..., help="Script name from package.json"),
):
    """Run a package.json script with the detected package manager."""
    run_action(ctx, Action.run(script, *ctx.args))


def make_script_command(script: str):
    """Build a command that runs `script`, forwarding any extra arguments."""

    def script_command(ctx: typer.Context):
        run_action(ctx, Action.run(script, *ctx.args))

    script_command.__name__ = f"{script}_command"
    script_command.__doc__ = f"Run the '{script}' script."
    return script_command

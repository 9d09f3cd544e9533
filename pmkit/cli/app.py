"""
Main CLI application for pmkit.

Defines the Typer application structure and command routing, with a thin
CLI layer over PackageManagerService.
"""
from typing import Optional

import typer
from typer.core import TyperGroup

from pmkit.cli.commands.packages import add_command, install_command, remove_command, update_command
from pmkit.cli.commands.project import (
    clean_command,
    deep_clean_command,
    info_command,
    use_command,
    which_command,
)
from pmkit.cli.commands.scripts import make_script_command, run_command
from pmkit.cli.common import PASSTHROUGH_SETTINGS, report_error
from pmkit.core.config_manager import ConfigManager, configure_logging
from pmkit.core.service import PackageManagerService
from pmkit.dispatcher import ACTION_ALIASES, SCRIPT_SHORTCUTS
from pmkit.rich_utils.ui_helpers import get_console
from pmkit.runner import CommandRunner
from pmkit.utils.exceptions import ConfigError


class ScriptFallbackGroup(TyperGroup):
    """Command group that runs unknown command names as package.json scripts."""

    def get_command(self, ctx, cmd_name):
        command = super().get_command(ctx, cmd_name)
        if command is None and cmd_name in ACTION_ALIASES:
            command = super().get_command(ctx, ACTION_ALIASES[cmd_name])
        return command

    def resolve_command(self, ctx, args):
        if args and not args[0].startswith("-") and self.get_command(ctx, args[0]) is None:
            # `pm migrate` behaves like `pm run migrate`
            return "run", self.get_command(ctx, "run"), args
        return super().resolve_command(ctx, args)


# Initialize Typer app
app = typer.Typer(
    cls=ScriptFallbackGroup,
    help="pm - run the right JavaScript package manager for the current project",
)

# Register commands
app.command("which", help="Print the detected package manager.")(which_command)
app.command("info", help="Show package manager and package details.")(info_command)
app.command("install", context_settings=PASSTHROUGH_SETTINGS, help="Install dependencies.")(install_command)
app.command("run", context_settings=PASSTHROUGH_SETTINGS, help="Run a package.json script.")(run_command)
app.command("add", help="Add packages.")(add_command)
app.command("remove", help="Remove packages.")(remove_command)
app.command("update", context_settings=PASSTHROUGH_SETTINGS, help="Update dependencies.")(update_command)
app.command("clean", help="Clean and reinstall with the detected package manager.")(clean_command)
app.command("deep-clean", help="Remove lockfiles, build output and caches for every manager.")(deep_clean_command)
app.command("use", help="Switch Node version with nvm or n.")(use_command)

for _script in SCRIPT_SHORTCUTS:
    app.command(_script, context_settings=PASSTHROUGH_SETTINGS, help=f"Run the '{_script}' script.")(
        make_script_command(_script)
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    directory: str = typer.Option(".", "-C", "--directory", help="Project directory"),
    config_path: Optional[str] = typer.Option(None, "-c", "--config", help="Path to config YAML"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print commands instead of running them"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
):
    """pm - run the right JavaScript package manager for the current project.

    Detects npm, yarn, pnpm or bun from the lockfiles in the project directory.
    Unknown commands run as package.json scripts, so 'pm migrate' is 'pm run migrate'.
    Single-letter aliases: i, r, d, b, l, t, s, p, f, w.
    """
    try:
        config = ConfigManager().discover_and_load_config(config_path, directory)
    except ConfigError as e:
        report_error(e)
        raise typer.Exit(e.exit_code)

    configure_logging(config, verbose)

    console = get_console()
    ctx.obj = {
        "config": config,
        "service": PackageManagerService(
            directory=directory,
            config=config,
            runner=CommandRunner(dry_run=dry_run, console=console),
            console=console,
        ),
    }

    if ctx.invoked_subcommand is None:
        # Default to info when no subcommand is specified
        ctx.invoke(info_command, ctx)

"""
Dependency commands: install, add, remove, update.
"""
from typing import List

import typer

from pmkit.cli.common import run_action
from pmkit.models import Action


def install_command(ctx: typer.Context):
    """Install dependencies with the detected package manager."""
    run_action(ctx, Action.install(*ctx.args))


def add_command(
    ctx: typer.Context,
    packages: List[str] = typer.Argument(..., help="Packages to add"),
    dev: bool = typer.Option(False, "--dev", "-D", help="Add as a development dependency"),
    is_global: bool = typer.Option(False, "--global", "-g", help="Install globally"),
):
    """Add packages to the project."""
    run_action(ctx, Action.add(*packages, dev=dev, is_global=is_global))


def remove_command(
    ctx: typer.Context,
    packages: List[str] = typer.Argument(..., help="Packages to remove"),
):
    """Remove packages from the project."""
    run_action(ctx, Action.remove(*packages))


def update_command(ctx: typer.Context):
    """Update dependencies."""
    run_action(ctx, Action.update(*ctx.args))

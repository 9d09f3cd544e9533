"""
Project commands: which, info, clean, deep-clean, use.
"""
import sys

import typer

from pmkit.cli.common import exit_with, get_service
from pmkit.models import PackageManagerKind


def which_command(ctx: typer.Context):
    """Print the detected package manager (npm, yarn, pnpm, bun or none)."""
    typer.echo(get_service(ctx).which().value)


def info_command(ctx: typer.Context):
    """Show the package manager and package details of the current project."""
    service = get_service(ctx)
    info = service.info()

    if info.kind is PackageManagerKind.NONE:
        service.console.print("❌ No Node.js project found in current directory", style="red")
        sys.exit(1)

    service.console.print(f"📦 Package Manager: {info.kind.value}")
    service.console.print(f"📁 Project: {info.directory}", markup=False)
    if info.label:
        service.console.print(f"📋 Package: {info.label}", markup=False)
    if info.lockfiles:
        service.console.print(f"🔒 Lockfiles: {', '.join(info.lockfiles)}", markup=False)
    if len(info.lockfiles) > 1:
        service.console.print(
            f"⚠️ Multiple lockfiles found; {info.lockfiles[0]} takes precedence",
            style="yellow",
            markup=False,
        )
    if info.scripts:
        service.console.print(f"📜 Scripts: {', '.join(sorted(info.scripts))}", markup=False)


def clean_command(ctx: typer.Context):
    """Remove node_modules and the lockfile, clear the cache, then reinstall."""
    service = get_service(ctx)
    exit_with(service.clean)


def deep_clean_command(ctx: typer.Context):
    """Remove all lockfiles, build output and caches for every package manager."""
    service = get_service(ctx)
    exit_with(service.deep_clean)


def use_command(
    ctx: typer.Context,
    version: str = typer.Argument(..., help="Node version, e.g. 18"),
):
    """Switch Node version using nvm or n."""
    service = get_service(ctx)
    exit_with(lambda: service.use_node(version))

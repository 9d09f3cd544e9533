"""
Package manager service implementation for pmkit.

Wires detection, resolution and execution together for the CLI and prints
status lines. Resolution stays pure; this is the layer that runs things.
"""
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console

from pmkit.cleaner import (
    DEFAULT_BUILD_DIRS,
    DEFAULT_CACHE_DIRS,
    execute_plan,
    plan_clean,
    plan_deep_clean,
)
from pmkit.detector import PackageManagerDetector
from pmkit.dispatcher import resolve, script_name
from pmkit.models import Action, ActionKind, PackageManagerKind, ProjectInfo
from pmkit.node_version import resolve_node_switch, uses_nvm
from pmkit.rich_utils.ui_helpers import get_console
from pmkit.runner import CommandRunner
from pmkit.utils.exceptions import UnknownScriptError

logger = logging.getLogger(__name__)


# Status line shown before running a script shortcut
SCRIPT_MESSAGES = {
    "dev": "🚀 Starting development server",
    "build": "🏗️  Building project",
    "lint": "🔍 Linting code",
    "test": "🧪 Running tests",
    "start": "▶️  Starting application",
    "preview": "👁️  Preview production build",
    "format": "✨ Formatting code",
    "watch": "👀 Starting watch mode",
}


class PackageManagerService:
    """Concrete implementation of the package manager service."""

    def __init__(
        self,
        directory: str = ".",
        config: Optional[dict] = None,
        runner: Optional[CommandRunner] = None,
        console: Optional[Console] = None,
    ):
        self.directory = Path(directory)
        self.config = config or {}
        self.console = console or get_console()
        self.runner = runner or CommandRunner(console=self.console)
        self.detector = PackageManagerDetector(self.directory)

    def which(self) -> PackageManagerKind:
        """Detected package manager, NONE included."""
        return self.detector.detect()

    def info(self) -> ProjectInfo:
        return self.detector.project_info()

    def execute(self, action: Action) -> int:
        """Detect the manager, resolve `action` and run it.

        Returns:
            Exit code of the package manager process

        Raises:
            NoProjectFoundError: if the directory is not a Node.js project
            UnknownScriptError: if a run failed for a script the manifest lacks
        """
        if action.kind is ActionKind.CLEAN:
            return self.clean()

        kind = self.detector.require_project()
        command = resolve(kind, action)
        logger.debug(f"Dispatching {action.kind.value} to {kind.value} in {self.directory}")
        self._announce(kind, action)

        exit_code = self.runner.run(command, cwd=str(self.directory))

        if exit_code != 0 and action.kind is ActionKind.RUN:
            self._check_script(script_name(action.script), exit_code)

        return exit_code

    def clean(self) -> int:
        """Remove node_modules and the manager's lockfile, clear its cache, reinstall."""
        kind = self.detector.require_project()
        plan = plan_clean(self.detector.scan(), kind)

        self.console.print(f"🧹 Cleaning and reinstalling with {kind.value}...", style="cyan")
        exit_code = execute_plan(plan, self.runner, cwd=str(self.directory))
        if exit_code == 0:
            self.console.print("✅ Project cleaned and dependencies reinstalled", style="green")
        return exit_code

    def deep_clean(self) -> int:
        """Remove every lockfile, build output and bundler cache, clear all manager caches."""
        deep_clean_config = self.config.get("deep_clean") or {}
        plan = plan_deep_clean(
            self.detector.scan(),
            build_dirs=deep_clean_config.get("build_dirs", DEFAULT_BUILD_DIRS),
            cache_dirs=deep_clean_config.get("cache_dirs", DEFAULT_CACHE_DIRS),
            available=self.runner.is_available,
        )

        self.console.print("🧹 Deep cleaning project...", style="cyan")
        exit_code = execute_plan(plan, self.runner, cwd=str(self.directory))
        self.console.print("✅ Deep clean complete", style="green")
        return exit_code

    def use_node(self, version: str) -> int:
        """Hand off to nvm or n to switch the active Node version.

        n switches the installed Node globally. nvm only affects the shell it
        runs in, so after an nvm run the user is told how to switch their own.
        """
        command = resolve_node_switch(version, available=self.runner.is_available)
        manager = "nvm" if uses_nvm(command) else command[0]
        self.console.print(f"🔀 Switching Node to {version} with {manager}...", style="cyan")

        exit_code = self.runner.run(command, cwd=str(self.directory))
        if exit_code == 0 and manager == "nvm":
            self.console.print(
                f"💡 nvm switches per shell; run `nvm use {version}` in your shell to keep it",
                style="yellow",
                markup=False,
            )
        return exit_code

    def _announce(self, kind: PackageManagerKind, action: Action) -> None:
        if action.kind is ActionKind.INSTALL:
            self.console.print(f"📦 Installing dependencies with {kind.value}...", style="cyan")
        elif action.kind is ActionKind.RUN and action.script in SCRIPT_MESSAGES:
            self.console.print(f"{SCRIPT_MESSAGES[action.script]} with {kind.value}...", style="cyan")

    def _check_script(self, script: str, exit_code: int) -> None:
        scripts = self.detector.project_info().scripts
        if scripts and script not in scripts:
            raise UnknownScriptError(script, exit_code)

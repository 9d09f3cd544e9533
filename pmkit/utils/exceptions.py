"""
Exception hierarchy for pmkit.

Every error raised by the detector, dispatcher, cleaner or runner derives
from PackageManagerError. Each exception includes:
- Clear error message
- Suggested user action
- Exit code the CLI should terminate with
"""

from typing import Optional


class PackageManagerError(Exception):
    """
    Base exception for all pmkit errors.

    Carries the exit code the CLI should use so that a child process
    status is never masked by the error path.
    """

    exit_code = 1

    def __init__(
        self,
        message: str,
        suggested_action: Optional[str] = None,
        exit_code: Optional[int] = None,
    ):
        """
        Initialize PackageManagerError.

        Args:
            message: Human-readable error message
            suggested_action: Suggested action for the user to resolve the issue
            exit_code: Process exit code override
        """
        self.message = message
        self.suggested_action = suggested_action
        if exit_code is not None:
            self.exit_code = exit_code

        error_parts = [message]
        if suggested_action:
            error_parts.append(f"Action: {suggested_action}")

        super().__init__(" | ".join(error_parts))


class NoProjectFoundError(PackageManagerError):
    """
    Raised when a directory has neither a package.json nor a lockfile.

    Not retried; the user has to initialize a project first.
    """

    def __init__(self, directory: str):
        self.directory = directory
        super().__init__(
            message=f"No package.json found in {directory}",
            suggested_action="Initialize a new project with: npm init -y",
        )


class UnsupportedManagerError(PackageManagerError):
    """Raised when an action is resolved against the `none` manager kind."""

    def __init__(self, kind, action=None):
        self.kind = kind
        self.action = action
        kind_name = getattr(kind, "value", kind)
        message = f"No package manager available for '{kind_name}'"
        if action is not None:
            action_name = getattr(action, "value", action)
            message += f" (action: {action_name})"
        super().__init__(
            message=message,
            suggested_action="Run inside a Node.js project or initialize one with: npm init -y",
        )


class UnknownScriptError(PackageManagerError):
    """
    Raised after a script run failed and the manifest does not declare it.

    The child's exit code is preserved.
    """

    def __init__(self, script: str, exit_code: int):
        self.script = script
        super().__init__(
            message=f"Script '{script}' is not defined in package.json",
            suggested_action="Check the \"scripts\" section of package.json",
            exit_code=exit_code,
        )


class CommandNotFoundError(PackageManagerError):
    """Raised when the package manager binary is not installed."""

    exit_code = 127

    def __init__(self, binary: str):
        self.binary = binary
        super().__init__(
            message=f"Command not found: {binary}",
            suggested_action=f"Install {binary} or make sure it is on your PATH",
        )


class VersionManagerNotFoundError(PackageManagerError):
    """Raised when neither nvm nor n is available."""

    def __init__(self):
        super().__init__(
            message="No Node version manager found (nvm or n)",
            suggested_action="Install nvm (https://github.com/nvm-sh/nvm) or n",
        )


class ConfigError(PackageManagerError):
    """Raised when a configuration file is missing or cannot be parsed."""
    pass


class InvalidActionError(PackageManagerError):
    """Raised when an action is missing its script or package names."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            suggested_action="Run 'pm --help' for usage",
        )

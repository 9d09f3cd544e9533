"""
Utility modules for pmkit.

This package contains shared helpers used throughout the pmkit codebase,
including the exception hierarchy surfaced by the CLI.
"""

from pmkit.utils.exceptions import (
    CommandNotFoundError,
    ConfigError,
    InvalidActionError,
    NoProjectFoundError,
    PackageManagerError,
    UnknownScriptError,
    UnsupportedManagerError,
    VersionManagerNotFoundError,
)

__all__ = [
    "PackageManagerError",
    "NoProjectFoundError",
    "UnsupportedManagerError",
    "UnknownScriptError",
    "CommandNotFoundError",
    "VersionManagerNotFoundError",
    "ConfigError",
    "InvalidActionError",
]

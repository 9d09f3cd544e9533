"""
Tests for the pmkit exception hierarchy.

Ensures every error carries a readable message, a suggested action where one
exists, and the exit code the CLI terminates with.
"""

import pytest

from pmkit.models import ActionKind, PackageManagerKind
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


class TestExceptionHierarchy:
    """Test shared behaviour of PackageManagerError subclasses."""

    @pytest.mark.parametrize("error", [
        NoProjectFoundError("/tmp/app"),
        UnsupportedManagerError(PackageManagerKind.NONE, ActionKind.INSTALL),
        UnknownScriptError("migrate", 1),
        CommandNotFoundError("pnpm"),
        VersionManagerNotFoundError(),
        InvalidActionError("run requires a script name"),
        ConfigError("bad config"),
    ])
    def test_all_errors_share_base(self, error):
        assert isinstance(error, PackageManagerError)
        assert error.message in str(error)

    def test_suggested_action_in_string(self):
        error = NoProjectFoundError("/tmp/app")
        assert str(error) == "No package.json found in /tmp/app | Action: Initialize a new project with: npm init -y"

    def test_default_exit_codes(self):
        assert PackageManagerError("boom").exit_code == 1
        assert CommandNotFoundError("bun").exit_code == 127

    def test_unknown_script_keeps_child_exit_code(self):
        error = UnknownScriptError("migrate", 254)
        assert error.exit_code == 254
        assert error.script == "migrate"

    def test_unsupported_manager_message(self):
        error = UnsupportedManagerError(PackageManagerKind.NONE, ActionKind.ADD)
        assert error.message == "No package manager available for 'none' (action: add)"

    def test_unsupported_manager_with_plain_strings(self):
        error = UnsupportedManagerError("none", "clean")
        assert "(action: clean)" in error.message

    def test_invalid_action_points_at_usage(self):
        error = InvalidActionError("add requires at least one package")
        assert error.exit_code == 1
        assert str(error) == "add requires at least one package | Action: Run 'pm --help' for usage"

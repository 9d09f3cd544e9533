"""Tests for the `pm` command-line interface."""

import json
from unittest.mock import Mock, patch

import pytest
from typer.testing import CliRunner

from pmkit.cli.app import app

runner = CliRunner()


def invoke(directory, *args):
    return runner.invoke(app, ["-C", str(directory), *args])


@pytest.fixture
def yarn_project(tmp_path):
    manifest = {"name": "demo", "version": "2.0.0", "scripts": {"dev": "vite", "test": "vitest"}}
    (tmp_path / "package.json").write_text(json.dumps(manifest))
    (tmp_path / "yarn.lock").write_text("")
    return tmp_path


class TestDetectionCommands:
    """Test which and info."""

    def test_which(self, yarn_project):
        result = invoke(yarn_project, "which")
        assert result.exit_code == 0
        assert result.output.strip() == "yarn"

    def test_which_empty_directory(self, tmp_path):
        result = invoke(tmp_path, "which")
        assert result.exit_code == 0
        assert result.output.strip() == "none"

    def test_info(self, yarn_project):
        result = invoke(yarn_project, "info")
        assert result.exit_code == 0
        assert "Package Manager: yarn" in result.output
        assert "demo@2.0.0" in result.output
        assert "Lockfiles: yarn.lock" in result.output
        assert "Multiple lockfiles" not in result.output

    def test_info_warns_about_conflicting_lockfiles(self, yarn_project):
        (yarn_project / "package-lock.json").write_text("{}")
        result = invoke(yarn_project, "info")

        assert result.exit_code == 0
        assert "Lockfiles: yarn.lock, package-lock.json" in result.output
        assert "yarn.lock takes precedence" in result.output

    def test_no_subcommand_shows_info(self, yarn_project):
        result = invoke(yarn_project)
        assert result.exit_code == 0
        assert "Package Manager: yarn" in result.output

    def test_info_without_project(self, tmp_path):
        result = invoke(tmp_path, "info")
        assert result.exit_code == 1
        assert "No Node.js project found" in result.output


class TestDispatchCommands:
    """Test commands in dry-run mode so nothing is executed."""

    def test_install(self, tmp_path):
        (tmp_path / "package-lock.json").write_text("{}")
        result = invoke(tmp_path, "--dry-run", "install")
        assert result.exit_code == 0
        assert "$ npm install" in result.output

    def test_install_alias(self, tmp_path):
        (tmp_path / "bun.lockb").write_text("")
        result = invoke(tmp_path, "--dry-run", "i")
        assert result.exit_code == 0
        assert "$ bun install" in result.output

    def test_add_dev(self, tmp_path):
        (tmp_path / "pnpm-lock.yaml").write_text("")
        result = invoke(tmp_path, "--dry-run", "add", "-D", "lodash")
        assert result.exit_code == 0
        assert "$ pnpm add -D lodash" in result.output

    def test_add_global(self, yarn_project):
        result = invoke(yarn_project, "--dry-run", "add", "--global", "serve")
        assert "$ yarn global add serve" in result.output

    def test_remove(self, yarn_project):
        result = invoke(yarn_project, "--dry-run", "remove", "lodash", "react")
        assert "$ yarn remove lodash react" in result.output

    def test_update(self, yarn_project):
        result = invoke(yarn_project, "--dry-run", "update")
        assert "$ yarn upgrade" in result.output

    def test_shortcut(self, yarn_project):
        result = invoke(yarn_project, "--dry-run", "dev")
        assert result.exit_code == 0
        assert "$ yarn run dev" in result.output

    def test_shortcut_alias_forwards_options(self, yarn_project):
        result = invoke(yarn_project, "--dry-run", "t", "--coverage")
        assert result.exit_code == 0
        assert "$ yarn run test --coverage" in result.output

    def test_run(self, yarn_project):
        result = invoke(yarn_project, "--dry-run", "run", "lint", "--fix")
        assert "$ yarn run lint --fix" in result.output

    def test_unknown_command_runs_script(self, yarn_project):
        result = invoke(yarn_project, "--dry-run", "migrate", "--seed")
        assert result.exit_code == 0
        assert "$ yarn run migrate --seed" in result.output

    def test_no_project(self, tmp_path):
        result = invoke(tmp_path, "--dry-run", "install")
        assert result.exit_code == 1
        assert "No package.json found" in result.output
        assert "npm init -y" in result.output

    def test_run_empty_script_is_reported(self, yarn_project):
        """Test that a blank script name exits cleanly instead of raising."""
        result = invoke(yarn_project, "--dry-run", "run", "")

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "run requires a script name" in result.output
        assert "pm --help" in result.output
        assert "$ yarn" not in result.output

    def test_clean_dry_run_keeps_files(self, yarn_project):
        (yarn_project / "node_modules").mkdir()
        result = invoke(yarn_project, "--dry-run", "clean")

        assert result.exit_code == 0
        assert "$ yarn cache clean" in result.output
        assert "$ yarn install" in result.output
        assert (yarn_project / "node_modules").exists()
        assert (yarn_project / "yarn.lock").exists()

    @patch("pmkit.runner.shutil.which", return_value=None)
    def test_deep_clean_skips_missing_managers(self, mock_which, yarn_project):
        (yarn_project / "dist").mkdir()
        result = invoke(yarn_project, "deep-clean")

        assert result.exit_code == 0
        assert "Deep clean complete" in result.output
        assert not (yarn_project / "dist").exists()
        assert not (yarn_project / "yarn.lock").exists()
        assert (yarn_project / "package.json").exists()


class TestExecution:
    """Test exit code handling with a patched subprocess."""

    @patch("pmkit.runner.subprocess.run")
    def test_child_exit_code_is_propagated(self, mock_run, yarn_project):
        mock_run.return_value = Mock(returncode=4)
        result = invoke(yarn_project, "test")

        assert result.exit_code == 4
        mock_run.assert_called_once_with(["yarn", "run", "test"], cwd=str(yarn_project))

    @patch("pmkit.runner.subprocess.run")
    def test_unknown_script_reports_and_keeps_exit_code(self, mock_run, yarn_project):
        mock_run.return_value = Mock(returncode=1)
        result = invoke(yarn_project, "migrate")

        assert result.exit_code == 1
        assert "Script 'migrate' is not defined" in result.output

    @patch("pmkit.runner.subprocess.run", side_effect=FileNotFoundError("yarn"))
    def test_missing_binary(self, mock_run, yarn_project):
        result = invoke(yarn_project, "install")

        assert result.exit_code == 127
        assert "Command not found: yarn" in result.output

    def test_missing_config_file(self, yarn_project):
        result = invoke(yarn_project, "-c", str(yarn_project / "nope.yaml"), "which")
        assert result.exit_code == 1
        assert "Config file not found" in result.output

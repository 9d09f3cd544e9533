"""
Configuration management for pmkit.

Handles loading, merging, and discovery of configuration files, and applies
the logging section of the resulting configuration.
"""
import importlib.resources as importlib_resources
import logging
import os
from typing import Optional

import yaml

from pmkit.utils.exceptions import ConfigError

PROJECT_CONFIG_FILE = "pmkit.config.yaml"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


class ConfigManager:
    """Manages pmkit configuration loading and merging operations."""

    def load_config(self, path: str) -> dict:
        """Load configuration from YAML file."""
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return data

    def deep_merge(self, default: dict, user: dict) -> dict:
        """Deep merge user config into default config."""
        result = default.copy()
        for key, value in user.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self.deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def load_package_default_config(self) -> dict:
        """Load default config from package."""
        default_config_path = importlib_resources.files("pmkit.config") / "default.yaml"
        with default_config_path.open("r") as f:
            return yaml.safe_load(f)

    def load_and_merge_config(self, user_config_path: str) -> dict:
        """Load user config and merge with package default."""
        default_config = self.load_package_default_config()
        user_config = self.load_config(user_config_path)
        return self.deep_merge(default_config, user_config)

    def discover_and_load_config(self, config_arg: Optional[str], directory: str = ".") -> dict:
        """Discover config file with priority order."""

        # Priority 1: --config argument
        if config_arg:
            if os.path.exists(config_arg):
                return self.load_and_merge_config(config_arg)
            raise ConfigError(
                f"Config file not found: {config_arg}",
                suggested_action="Check the path passed to --config",
            )

        # Priority 2: pmkit.config.yaml in the project directory
        project_config = os.path.join(directory, PROJECT_CONFIG_FILE)
        if os.path.exists(project_config):
            return self.load_and_merge_config(project_config)

        # Priority 3: Package default config
        return self.load_package_default_config()


def configure_logging(config: dict, verbose: bool = False) -> None:
    """Apply the logging section of `config` to the root logger."""
    logging_config = config.get("logging") or {}
    level_name = "DEBUG" if verbose else str(logging_config.get("level", "WARNING")).upper()
    level = getattr(logging, level_name, logging.WARNING)

    handlers = [logging.StreamHandler()]
    log_file = logging_config.get("file")
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)

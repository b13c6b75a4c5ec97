"""Configuration manager for fb.

This module provides the ConfigManager class for loading and validating
configuration with a simple cascading hierarchy:

    1. Environment Variables (highest priority)
    2. YAML config file (<config dir>/config.yaml)
    3. Built-in Defaults (lowest priority)

Loading fails closed: a missing file, malformed YAML, or a blank required
field raises ConfigError before any network work is attempted.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from fb.config.settings import (
    CONFIG_DIR,
    CONFIG_FILE_NAME,
    DEFAULT_TIMEOUT_SECONDS,
    ENV_OVERRIDES,
    Settings,
)
from fb.utils.errors import ConfigError
from fb.utils.logging import log_message

logger = logging.getLogger(__name__)

CONFIG_DIR_MODE = 0o700

EXAMPLE_CONFIG = """auth_key: your-api-key-here
org_id: your-org-id
user_email: you@example.com"""


def first_run_message(config_path: Path) -> str:
    """Build the guidance shown when no config file exists yet."""
    return f"""Welcome to fb! Let's get you set up.

To use this tool, create a configuration file at:
  {config_path}

The configuration file needs these three fields:
  • auth_key   - Your Flow Boards API authentication key
  • org_id     - Your organization identifier
  • user_email - Your email address

Here's an example configuration you can use as a template:

{EXAMPLE_CONFIG}

To obtain your API key and org ID, log into Flow Boards and check your
account settings or contact your administrator."""


def yaml_error_message(error: yaml.YAMLError) -> str:
    """Wrap a YAML parse error with common-mistake guidance."""
    return f"""YAML syntax error in configuration file: {error}

Common YAML mistakes to check:
  • Use spaces, not tabs, for indentation
  • Check that each field has a colon followed by a space
  • Make sure quotes are properly matched

Here's an example of correct YAML format:

{EXAMPLE_CONFIG}"""


class ConfigManager:
    """Loads fb configuration from a YAML file and the environment.

    Attributes:
        config_dir: Directory holding config.yaml (and the state files)
        settings: Settings from the last successful load()
    """

    def __init__(self, config_dir: Path | None = None) -> None:
        self.config_dir = config_dir or CONFIG_DIR
        self.settings = Settings()
        self._sources: dict[str, str] = {}

    @property
    def config_path(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    def load(self) -> Settings:
        """Load and validate configuration.

        Each call starts from clean defaults.

        Returns:
            Validated Settings

        Raises:
            ConfigError: If the file is missing or malformed, or a required
                field is blank after environment overrides.
        """
        self.settings = Settings()
        self._sources = {}

        self.ensure_config_dir()

        raw = self._read_file()
        for key, value in raw.items():
            if key in ("auth_key", "org_id", "user_email", "timeout_seconds"):
                self._apply(key, value, source="file")
            else:
                logger.debug("Ignoring unknown config key %r", key)

        for env_key, attr in ENV_OVERRIDES.items():
            env_value = os.environ.get(env_key)
            if env_value is not None:
                self._apply(attr, env_value, source="environment")

        self.validate()
        log_message(f"Configuration loaded from {self.config_path}")
        return self.settings

    def source_of(self, key: str) -> str | None:
        """Return where a setting came from ("file", "environment"), if set."""
        return self._sources.get(key)

    def validate(self) -> None:
        """Check that every required field is present.

        Raises:
            ConfigError: Naming the first blank required field
        """
        missing = self.settings.missing_fields()
        if missing:
            raise ConfigError(f"{missing[0]} is required in config file")

    def ensure_config_dir(self) -> None:
        """Create the config directory with user-only permissions if needed.

        An existing directory is left untouched.

        Raises:
            ConfigError: If the path exists but is not a directory, or
                cannot be created.
        """
        if self.config_dir.exists():
            if not self.config_dir.is_dir():
                raise ConfigError(f"path exists but is not a directory: {self.config_dir}")
            return

        try:
            self.config_dir.mkdir(mode=CONFIG_DIR_MODE, parents=True)
        except OSError as e:
            raise ConfigError(
                f"unable to create configuration directory at {self.config_dir} "
                f"- check permissions: {e}"
            ) from e

    def _read_file(self) -> dict[str, Any]:
        try:
            text = self.config_path.read_text()
        except FileNotFoundError:
            raise ConfigError(
                f"config file not found at {self.config_path}\n\n"
                f"{first_run_message(self.config_path)}"
            ) from None
        except OSError as e:
            raise ConfigError(f"failed to read config file: {e}") from e

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigError(yaml_error_message(e)) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"configuration file must contain key: value pairs\n\n"
                f"Example:\n\n{EXAMPLE_CONFIG}"
            )
        return data

    def _apply(self, attr: str, value: Any, source: str) -> None:
        if attr == "timeout_seconds":
            try:
                timeout = float(value)
            except (TypeError, ValueError):
                logger.warning(
                    "Invalid timeout_seconds value %r, using default %s",
                    value,
                    DEFAULT_TIMEOUT_SECONDS,
                )
                return
            if timeout <= 0:
                logger.warning(
                    "timeout_seconds must be > 0, got %s, using default %s",
                    timeout,
                    DEFAULT_TIMEOUT_SECONDS,
                )
                return
            self.settings.timeout_seconds = timeout
        else:
            setattr(self.settings, attr, "" if value is None else str(value))
        self._sources[attr] = source


__all__ = [
    "ConfigManager",
    "first_run_message",
    "yaml_error_message",
]

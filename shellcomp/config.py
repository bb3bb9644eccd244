"""Configuration loading and typed access.

The configuration is an optional TOML file::

    [shellcomp]
    shell_variable = "MYTOOL_SHELL"
    function_prefix = "_mytool"

    [paths]
    fish = "~/.local/share/fish/vendor_completions.d/{name}.fish"
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .constants import CONFIG_FILE, DEFAULT_PATHS
from .models import ShellcompError

if TYPE_CHECKING:
    import logging

__all__ = ["Configuration", "load_config"]


class Configuration(dict):
    """Configuration section wrapper providing typed access."""

    def __init__(self, *args: Any, logger: logging.Logger, **kwargs: Any) -> None:  # noqa: ANN401
        """Initialize the configuration object.

        Args:
            *args: Arguments for dict
            logger: Logger instance to use for warnings
            **kwargs: Keyword arguments for dict
        """
        super().__init__(*args, **kwargs)
        self.log = logger

    def get_str(self, name: str, default: str = "") -> str:
        """Get a string value.

        Non-string values are converted with a warning.
        """
        value = self.get(name)
        if value is None:
            return default
        if not isinstance(value, str):
            self.log.warning("Expected a string for %s, got %r", name, value)
        return str(value)

    def section(self, name: str) -> Configuration:
        """Return a sub-table as a Configuration (empty if missing or not a table)."""
        value = self.get(name)
        if value is None:
            return Configuration(logger=self.log)
        if not isinstance(value, dict):
            self.log.warning("Ignoring [%s]: not a table", name)
            return Configuration(logger=self.log)
        return Configuration(value, logger=self.log)

    def install_path(self, shell: str, command_name: str) -> str:
        """Default install path of the `shell` script for `command_name`, user-expanded."""
        template = self.section("paths").get_str(shell, DEFAULT_PATHS[shell])
        return str(Path(os.path.expandvars(template.format(name=command_name))).expanduser())


def load_config(config_filename: str | Path | None, log: logging.Logger) -> Configuration:
    """Load the configuration file.

    Args:
        config_filename: Explicit path; if empty, uses the default location
            and silently falls back to defaults when it does not exist
        log: Logger for status and error messages

    Raises:
        ShellcompError: the file is missing (when explicit) or invalid
    """
    if config_filename:
        fname = Path(os.path.expandvars(str(config_filename))).expanduser()
        if not fname.exists():
            log.critical("Config file not found: %s", fname)
            raise ShellcompError
    else:
        fname = CONFIG_FILE
        if not fname.exists():
            log.debug("No config file at %s, using defaults", fname)
            return Configuration(logger=log)

    log.info("Loading %s", fname)
    with fname.open("rb") as f:
        try:
            config = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            log.critical("Problem reading %s: %s", fname, e)
            raise ShellcompError from e
    return Configuration(config, logger=log)

"""Shared constants for shellcomp."""

import os
from pathlib import Path

__all__ = [
    "COMPLETION_MARKER",
    "CONFIG_FILE",
    "DEFAULT_FUNCTION_PREFIX",
    "DEFAULT_HELP_ABSTRACT",
    "DEFAULT_PATHS",
    "HELP_COMMAND_NAME",
    "OPTION_PREFIX",
    "POSITIONAL_KEY_PREFIX",
    "SHELL_ENV_VAR",
    "SHELL_VERSION_ENV_VAR",
    "SUPPORTED_SHELLS",
]

_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / "shellcomp" / "config.toml"

# Supported shells for completion generation
SUPPORTED_SHELLS = ("bash", "fish")

# Default user-level completion paths, {name} is the root command name
DEFAULT_PATHS = {
    "bash": "~/.local/share/bash-completion/completions/{name}",
    "fish": "~/.config/fish/completions/{name}.fish",
}

# Environment markers exported by the generated scripts
SHELL_ENV_VAR = "SHELLCOMP_SHELL"
SHELL_VERSION_ENV_VAR = "SHELLCOMP_SHELL_VERSION"

# Reserved first argument of a custom completion callback
COMPLETION_MARKER = "---completion"
POSITIONAL_KEY_PREFIX = "positional@"

# Prefix of the shared fish predicate functions
DEFAULT_FUNCTION_PREFIX = "_shellcomp"

OPTION_PREFIX = "-"

HELP_COMMAND_NAME = "help"
DEFAULT_HELP_ABSTRACT = "Show subcommand help information."

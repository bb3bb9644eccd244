"""Generation settings for shell completions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..constants import COMPLETION_MARKER, DEFAULT_FUNCTION_PREFIX, DEFAULT_PATHS, SHELL_ENV_VAR, SHELL_VERSION_ENV_VAR

if TYPE_CHECKING:
    from ..config import Configuration

__all__ = [
    "DEFAULT_PATHS",
    "GeneratorOptions",
]


@dataclass(frozen=True)
class GeneratorOptions:
    """Names the generated scripts use to talk to the outside world."""

    shell_variable: str = SHELL_ENV_VAR  # exported with the shell name
    shell_version_variable: str = SHELL_VERSION_ENV_VAR  # exported with the shell version
    function_prefix: str = DEFAULT_FUNCTION_PREFIX  # fish helper functions
    completion_marker: str = COMPLETION_MARKER  # first argument of custom completion calls

    @classmethod
    def from_config(cls, config: Configuration) -> GeneratorOptions:
        """Read the options from the [shellcomp] section of a configuration."""
        defaults = cls()
        return cls(
            shell_variable=config.get_str("shell_variable", defaults.shell_variable),
            shell_version_variable=config.get_str("shell_version_variable", defaults.shell_version_variable),
            function_prefix=config.get_str("function_prefix", defaults.function_prefix),
            completion_marker=config.get_str("completion_marker", defaults.completion_marker),
        )

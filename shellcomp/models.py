"""Shared error types and exit codes."""

from enum import IntEnum

__all__ = [
    "CompletionError",
    "ExitCode",
    "ShellcompError",
    "ToolInfoError",
]


class ShellcompError(BaseException):
    """Used for errors which already triggered logging."""


class CompletionError(ValueError):
    """The command tree cannot be turned into a completion script."""


class ToolInfoError(ValueError):
    """A command tree dump is malformed.

    Args:
        message: What is wrong
        location: Dotted path of the offending entry (e.g. "command.subcommands[1].name")
    """

    def __init__(self, message: str, location: str = "") -> None:
        self.location = location
        super().__init__(f"{location}: {message}" if location else message)


class ExitCode(IntEnum):
    """Standard exit codes for the shellcomp command."""

    SUCCESS = 0
    USAGE_ERROR = 1  # Invalid arguments, malformed completion request
    # 2 is what argparse exits with on parse errors
    INPUT_ERROR = 3  # Unreadable or malformed tool info / config
    COMMAND_ERROR = 4  # Generation or write failed

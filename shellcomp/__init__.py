"""shellcomp - bash and fish completion scripts from a command description.

Typical use::

    from shellcomp import CommandInfo, generate_bash
    from shellcomp.commands.tree import attach_super_commands

    root = attach_super_commands(CommandInfo(name="tool", subcommands=(CommandInfo(name="build"),)))
    print(generate_bash(root))
"""

from .commands.models import (
    ArgumentInfo,
    ArgumentKind,
    CommandInfo,
    CustomCompletion,
    DirectoryCompletion,
    FileCompletion,
    ListCompletion,
    Name,
    NoCompletion,
    ShellCommandCompletion,
)
from .completions import GENERATORS, GeneratorOptions, generate_bash, generate_fish
from .version import VERSION

__all__ = [
    "GENERATORS",
    "VERSION",
    "ArgumentInfo",
    "ArgumentKind",
    "CommandInfo",
    "CustomCompletion",
    "DirectoryCompletion",
    "FileCompletion",
    "GeneratorOptions",
    "ListCompletion",
    "Name",
    "NoCompletion",
    "ShellCommandCompletion",
    "generate_bash",
    "generate_fish",
]

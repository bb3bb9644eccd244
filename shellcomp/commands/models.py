"""Data models for the command metadata tree.

The tree is built once (by hand, or by :mod:`shellcomp.commands.loader`) and is
never mutated afterwards: every type here is a frozen dataclass holding tuples.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

__all__ = [
    "ArgumentInfo",
    "ArgumentKind",
    "CommandInfo",
    "CompletionKind",
    "CustomCompletion",
    "DirectoryCompletion",
    "FileCompletion",
    "ListCompletion",
    "Name",
    "NameKind",
    "NoCompletion",
    "ShellCommandCompletion",
]


class ArgumentKind(StrEnum):
    """How an argument is given on the command line."""

    POSITIONAL = "positional"
    OPTION = "option"  # takes exactly one value
    FLAG = "flag"  # boolean switch, no value


class NameKind(StrEnum):
    """Spelling styles of an argument name."""

    LONG = "long"
    SHORT = "short"
    LONG_WITH_SINGLE_DASH = "longWithSingleDash"


@dataclass(frozen=True)
class Name:
    """One invocable spelling of an argument."""

    kind: NameKind
    name: str
    allow_single_dash: bool = False  # only meaningful for short names

    @classmethod
    def long(cls, name: str) -> Name:
        """Build a `--name` spelling."""
        return cls(NameKind.LONG, name)

    @classmethod
    def short(cls, char: str, allow_single_dash: bool = False) -> Name:
        """Build a `-c` spelling."""
        return cls(NameKind.SHORT, char, allow_single_dash)

    @classmethod
    def long_with_single_dash(cls, name: str) -> Name:
        """Build a `-name` spelling."""
        return cls(NameKind.LONG_WITH_SINGLE_DASH, name)

    @property
    def synopsis(self) -> str:
        """The spelling used in completion word lists."""
        if self.kind == NameKind.LONG:
            return f"--{self.name}"
        return f"-{self.name}"


# Completion kinds: a closed union, generators match it exhaustively


@dataclass(frozen=True)
class NoCompletion:
    """No value suggestions."""


@dataclass(frozen=True)
class FileCompletion:
    """File names, optionally restricted to some extensions (empty = any file)."""

    extensions: tuple[str, ...] = ()


@dataclass(frozen=True)
class DirectoryCompletion:
    """Directory names only."""


@dataclass(frozen=True)
class ListCompletion:
    """A fixed list of literal values."""

    values: tuple[str, ...] = ()


@dataclass(frozen=True)
class ShellCommandCompletion:
    """Values printed by a shell command run at completion time."""

    command: str


@dataclass(frozen=True)
class CustomCompletion:
    """Values computed by the program itself, through the completion callback."""


CompletionKind = (
    NoCompletion | FileCompletion | DirectoryCompletion | ListCompletion | ShellCommandCompletion | CustomCompletion
)


@dataclass(frozen=True)
class ArgumentInfo:
    """An option, flag or positional parameter of a command."""

    kind: ArgumentKind
    names: tuple[Name, ...] = ()
    completion: CompletionKind = field(default_factory=NoCompletion)
    abstract: str = ""
    should_display: bool = True
    value_name: str | None = None
    is_optional: bool = False
    is_repeating: bool = False
    preferred: Name | None = None  # defaults to the first name

    @property
    def preferred_name(self) -> Name | None:
        """The name used to identify this argument in completion callbacks."""
        if self.preferred is not None:
            return self.preferred
        return self.names[0] if self.names else None

    @property
    def completion_keys(self) -> list[str]:
        """Spellings offered as top-level completions (none when hidden)."""
        if not self.should_display:
            return []
        return [name.synopsis for name in self.names]


@dataclass(frozen=True)
class CommandInfo:
    """A command or subcommand.

    `super_commands` holds the ancestor names from the root down to (but not
    including) this node, so its length is the depth of the node.
    """

    name: str
    abstract: str = ""
    discussion: str = ""
    aliases: tuple[str, ...] = ()
    arguments: tuple[ArgumentInfo, ...] = ()
    subcommands: tuple[CommandInfo, ...] = ()
    super_commands: tuple[str, ...] = ()
    should_display: bool = True

    @property
    def is_root(self) -> bool:
        """True for the top-level command."""
        return not self.super_commands

    @property
    def path(self) -> tuple[str, ...]:
        """Names from the root down to this node, inclusive."""
        return (*self.super_commands, self.name)

    @property
    def invocable_names(self) -> tuple[str, ...]:
        """The name followed by the aliases."""
        return (self.name, *self.aliases)

    @property
    def visible_subcommands(self) -> list[CommandInfo]:
        """Subcommands offered for completion."""
        return [sub for sub in self.subcommands if sub.should_display]

    @property
    def positionals(self) -> list[ArgumentInfo]:
        """Positional arguments, in declaration order."""
        return [arg for arg in self.arguments if arg.kind == ArgumentKind.POSITIONAL]

"""Command tree walking and rewriting utilities."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from ..constants import DEFAULT_HELP_ABSTRACT, HELP_COMMAND_NAME
from .models import ArgumentInfo, ArgumentKind, CommandInfo

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

__all__ = [
    "attach_super_commands",
    "find_command",
    "iter_visible_commands",
    "positional_index",
    "with_help_subcommand",
]


def attach_super_commands(command: CommandInfo, parents: Sequence[str] = ()) -> CommandInfo:
    """Return a copy of the tree where every node knows its ancestors.

    Args:
        command: The root of the (sub)tree
        parents: Names of the ancestors of `command`

    Returns:
        A new tree, `super_commands` filled on every node
    """
    parents = tuple(parents)
    own_path = (*parents, command.name)
    return replace(
        command,
        super_commands=parents,
        subcommands=tuple(attach_super_commands(sub, own_path) for sub in command.subcommands),
    )


def iter_visible_commands(root: CommandInfo) -> Iterator[CommandInfo]:
    """Yield the root and every displayed descendant, depth first.

    Children of hidden commands are not visited.
    """
    yield root
    for sub in root.visible_subcommands:
        yield from iter_visible_commands(sub)


def find_command(root: CommandInfo, names: Sequence[str]) -> CommandInfo | None:
    """Follow `names` (subcommand names or aliases, root excluded) from `root`.

    Returns:
        The matching node, or None if some name is unknown
    """
    node = root
    for name in names:
        for sub in node.subcommands:
            if name in sub.invocable_names:
                node = sub
                break
        else:
            return None
    return node


def positional_index(command: CommandInfo, argument: ArgumentInfo) -> int:
    """Zero-based index of `argument` among the positionals of `command`."""
    for index, positional in enumerate(command.positionals):
        if positional is argument:
            return index
    return command.positionals.index(argument)


def with_help_subcommand(root: CommandInfo) -> CommandInfo:
    """Return `root` with a `help` subcommand appended if it displays none."""
    for sub in root.visible_subcommands:
        if HELP_COMMAND_NAME in sub.invocable_names:
            return root
    help_command = CommandInfo(
        name=HELP_COMMAND_NAME,
        abstract=DEFAULT_HELP_ABSTRACT,
        super_commands=root.path,
        arguments=(
            ArgumentInfo(
                kind=ArgumentKind.POSITIONAL,
                value_name="subcommands",
                is_optional=True,
                is_repeating=True,
            ),
        ),
    )
    return replace(root, subcommands=(*root.subcommands, help_command))

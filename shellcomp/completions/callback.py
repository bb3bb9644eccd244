"""Custom completion callback protocol.

For arguments with a custom completion, the generated scripts run the program
again with a reserved argument sequence::

    <program> ---completion <subcommands...> -- <argument key> <words typed so far...>

The program recognizes the marker, computes the candidates and prints one per
line. The argument key is the preferred spelling of the argument (`--config`)
or `positional@<index>` for positionals.

This module builds those calls for the generators and, on the receiving side,
decodes them.
"""

from __future__ import annotations

import os
import shlex
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, TextIO

from ..commands.tree import find_command, positional_index
from ..constants import COMPLETION_MARKER, POSITIONAL_KEY_PREFIX
from ..models import CompletionError, ExitCode
from .models import GeneratorOptions

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable, Iterable, Mapping, Sequence

    from ..commands.models import ArgumentInfo, CommandInfo

__all__ = [
    "CompletionRequest",
    "argument_key",
    "bash_custom_completion_call",
    "custom_completion_arguments",
    "fish_custom_completion_call",
    "parse_completion_request",
    "resolve_request",
    "run_completion_request",
]

ARGUMENT_SEPARATOR = "--"


def argument_key(command: CommandInfo, argument: ArgumentInfo) -> str:
    """Identify `argument` within `command` for the callback."""
    preferred = argument.preferred_name
    if preferred is not None:
        return preferred.synopsis
    return f"{POSITIONAL_KEY_PREFIX}{positional_index(command, argument)}"


def custom_completion_arguments(
    command: CommandInfo,
    argument: ArgumentInfo,
    marker: str = COMPLETION_MARKER,
) -> list[str]:
    """Reserved arguments identifying `argument` of `command` (root name excluded)."""
    return [marker, *command.path[1:], ARGUMENT_SEPARATOR, argument_key(command, argument)]


def _quoted(arguments: Iterable[str]) -> str:
    return " ".join(shlex.quote(arg) for arg in arguments)


def bash_custom_completion_call(command: CommandInfo, argument: ArgumentInfo, marker: str = COMPLETION_MARKER) -> str:
    """Bash command substitution printing the candidates."""
    reserved = _quoted(custom_completion_arguments(command, argument, marker))
    return f'$("${{COMP_WORDS[0]}}" {reserved} "${{COMP_WORDS[@]}}")'


def fish_custom_completion_call(
    root_name: str,
    command: CommandInfo,
    argument: ArgumentInfo,
    marker: str = COMPLETION_MARKER,
) -> str:
    """Fish command substitution printing the candidates."""
    reserved = _quoted(custom_completion_arguments(command, argument, marker))
    return f"(command {shlex.quote(root_name)} {reserved} (commandline -opc)[1..-1])"


@dataclass(frozen=True)
class CompletionRequest:
    """A decoded callback invocation."""

    command_path: tuple[str, ...]  # subcommand names, root excluded
    argument: str
    words: tuple[str, ...]  # command line as typed, as passed by the shell
    shell: str | None = None
    shell_version: str | None = None


def parse_completion_request(
    argv: Sequence[str],
    options: GeneratorOptions | None = None,
    environ: Mapping[str, str] | None = None,
) -> CompletionRequest | None:
    """Decode a callback invocation.

    Args:
        argv: Program arguments, without the program name
        options: Marker and environment variable names used by the scripts
        environ: Where to read the shell markers from (default: os.environ)

    Returns:
        The request, or None if `argv` is an ordinary invocation

    Raises:
        CompletionError: the marker is present but the rest is malformed
    """
    options = options or GeneratorOptions()
    if not argv or argv[0] != options.completion_marker:
        return None
    rest = list(argv[1:])
    if ARGUMENT_SEPARATOR not in rest:
        msg = f"completion request without {ARGUMENT_SEPARATOR!r} separator"
        raise CompletionError(msg)
    separator = rest.index(ARGUMENT_SEPARATOR)
    if separator + 1 >= len(rest):
        msg = "completion request without argument key"
        raise CompletionError(msg)
    env = os.environ if environ is None else environ
    return CompletionRequest(
        command_path=tuple(rest[:separator]),
        argument=rest[separator + 1],
        words=tuple(rest[separator + 2 :]),
        shell=env.get(options.shell_variable),
        shell_version=env.get(options.shell_version_variable),
    )


def resolve_request(root: CommandInfo, request: CompletionRequest) -> tuple[CommandInfo, ArgumentInfo] | None:
    """Find the command and argument a request is about."""
    command = find_command(root, request.command_path)
    if command is None:
        return None
    for argument in command.arguments:
        if argument_key(command, argument) == request.argument:
            return command, argument
        if any(name.synopsis == request.argument for name in argument.names):
            return command, argument
    return None


def run_completion_request(
    root: CommandInfo,
    argv: Sequence[str],
    provider: Callable[[CompletionRequest, CommandInfo, ArgumentInfo], Iterable[str]],
    *,
    log: logging.Logger,
    stream: TextIO | None = None,
    options: GeneratorOptions | None = None,
) -> ExitCode | None:
    """Answer a callback invocation, if `argv` is one.

    Prints the candidates returned by `provider`, one per line.

    Returns:
        None for ordinary invocations (the program should carry on),
        otherwise the exit code to use
    """
    try:
        request = parse_completion_request(argv, options)
    except CompletionError as e:
        log.warning("Invalid completion request: %s", e)
        return ExitCode.USAGE_ERROR
    if request is None:
        return None

    target = resolve_request(root, request)
    if target is None:
        log.warning("No argument %s for command %s", request.argument, " ".join((root.name, *request.command_path)))
        return ExitCode.USAGE_ERROR

    command, argument = target
    log.debug("Completing %s for %s (shell=%s)", request.argument, " ".join(command.path), request.shell)
    out = sys.stdout if stream is None else stream
    for candidate in provider(request, command, argument):
        out.write(f"{candidate}\n")
    return ExitCode.SUCCESS

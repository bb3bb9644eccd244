"""Bash completion script generator.

Emits one function per displayed command. The root function is registered
with `complete -F`; every function offers its own words when the cursor sits
right after the command, completes option values based on `$prev`, and hands
over to a subcommand function (passing the index of the next word) when the
word at its position names a subcommand.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, assert_never

from ...commands.models import (
    ArgumentKind,
    CustomCompletion,
    DirectoryCompletion,
    FileCompletion,
    ListCompletion,
    NoCompletion,
    ShellCommandCompletion,
)
from ..builder import ScriptBuilder
from ..callback import bash_custom_completion_call
from ..models import GeneratorOptions
from ..naming import bash_escape_double_quoted, escape_extensions, function_names

if TYPE_CHECKING:
    from ...commands.models import ArgumentInfo, CommandInfo

__all__ = ["generate_bash"]

_COMPGEN_OPTS = 'COMPREPLY=( $(compgen -W "$opts" -- "$cur") )'
_BASH_VERSION = '"$(IFS=\'.\'; printf %s "${BASH_VERSINFO[*]}")"'


def generate_bash(root: CommandInfo, options: GeneratorOptions | None = None) -> str:
    """Generate the bash completion script for a command tree.

    Args:
        root: The top-level command
        options: Environment variable names and callback marker

    Returns:
        The script content, ready to be sourced
    """
    options = options or GeneratorOptions()
    names = function_names(root)

    out = ScriptBuilder()
    out.line("#!/bin/bash")
    out.line()
    _add_command_function(out, root, names, options)
    out.line()
    out.line(f"complete -F {names[root.path]} {root.name}")
    return out.build()


def _add_command_function(
    out: ScriptBuilder,
    command: CommandInfo,
    names: dict[tuple[str, ...], str],
    options: GeneratorOptions,
) -> None:
    """Add the function of `command`, followed by the ones of its subcommands."""
    function = names[command.path]
    # The root is called by bash itself and has no index argument
    index = "1" if command.is_root else "$1"
    next_index = "2" if command.is_root else "$(($1+1))"
    subcommands = command.visible_subcommands

    words = [key for arg in command.arguments for key in arg.completion_keys]
    words += [sub.name for sub in subcommands]

    out.line(f"{function}() {{")
    with out.indented():
        if command.is_root:
            out.line(f"export {options.shell_variable}=bash")
            out.line(f"{options.shell_version_variable}={_BASH_VERSION}")
            out.line(f"export {options.shell_version_variable}")
            out.line('cur="${COMP_WORDS[COMP_CWORD]}"')
            out.line('prev="${COMP_WORDS[COMP_CWORD-1]}"')
            out.line("COMPREPLY=()")

        out.line(f'opts="{" ".join(bash_escape_double_quoted(word) for word in words)}"')
        for extra in _positional_completions(command, options):
            out.line(f'opts="$opts {extra}"')
        out.line(f'if [[ $COMP_CWORD == "{index}" ]]; then')
        with out.indented():
            out.line(_COMPGEN_OPTS)
            out.line("return")
        out.line("fi")

        option_cases = _option_cases(command, options)
        if option_cases:
            out.line("case $prev in")
            with out.indented():
                out.extend(option_cases)
            out.line("esac")

        if subcommands:
            out.line(f"case ${{COMP_WORDS[{index}]}} in")
            with out.indented():
                for sub in subcommands:
                    out.line(f"({'|'.join(sub.invocable_names)})")
                    with out.indented():
                        out.line(f"{names[sub.path]} {next_index}")
                        out.line("return")
                        out.line(";;")
            out.line("esac")

        out.line(_COMPGEN_OPTS)
    out.line("}")

    for sub in subcommands:
        _add_command_function(out, sub, names, options)


def _positional_completions(command: CommandInfo, options: GeneratorOptions) -> list[str]:
    """Extra top-level words coming from positional arguments.

    File and directory positionals contribute nothing: the word list cannot
    express them.
    """
    results: list[str] = []
    for argument in command.arguments:
        if not argument.should_display or argument.kind != ArgumentKind.POSITIONAL:
            continue
        completion = argument.completion
        match completion:
            case NoCompletion() | FileCompletion() | DirectoryCompletion():
                continue
            case ListCompletion(values=values):
                if values:
                    results.append(" ".join(bash_escape_double_quoted(value) for value in values))
            case ShellCommandCompletion(command=shell_command):
                results.append(f"$({shell_command})")
            case CustomCompletion():
                results.append(bash_custom_completion_call(command, argument, options.completion_marker))
            case _:
                assert_never(completion)
    return results


def _option_cases(command: CommandInfo, options: GeneratorOptions) -> ScriptBuilder:
    """Case arms completing the value following an option."""
    out = ScriptBuilder()
    for argument in command.arguments:
        if argument.kind != ArgumentKind.OPTION:
            continue
        keys = argument.completion_keys
        if not keys:
            continue
        values = _option_values(command, argument, options)
        if values is None:
            continue
        out.line(f"{'|'.join(keys)})")
        with out.indented():
            out.block(values)
            out.line("return")
        out.line(";;")
    return out


def _option_values(command: CommandInfo, argument: ArgumentInfo, options: GeneratorOptions) -> str | None:
    """Commands filling COMPREPLY with the values of an option.

    Returns:
        None when the option has no value completion (the word list applies)
    """
    completion = argument.completion
    match completion:
        case NoCompletion():
            return None
        case FileCompletion(extensions=()):
            return """\
if declare -F _filedir >/dev/null; then
    _filedir
else
    COMPREPLY=( $(compgen -f -- "$cur") )
fi"""
        case FileCompletion(extensions=extensions):
            safe_extensions = escape_extensions(extensions)
            filedir_calls = "\n".join(f"    _filedir '{ext}'" for ext in safe_extensions)
            compgen_calls = "\n".join(f"""        $(compgen -f -X '!*.{ext}' -- "$cur")""" for ext in safe_extensions)
            return f"""\
if declare -F _filedir >/dev/null; then
{filedir_calls}
    _filedir -d
else
    COMPREPLY=(
{compgen_calls}
        $(compgen -d -- "$cur")
    )
fi"""
        case DirectoryCompletion():
            return """\
if declare -F _filedir >/dev/null; then
    _filedir -d
else
    COMPREPLY=( $(compgen -d -- "$cur") )
fi"""
        case ListCompletion(values=values):
            words = " ".join(bash_escape_double_quoted(value) for value in values)
            return f'COMPREPLY=( $(compgen -W "{words}" -- "$cur") )'
        case ShellCommandCompletion(command=shell_command):
            return f"COMPREPLY=( $({shell_command}) )"
        case CustomCompletion():
            call = bash_custom_completion_call(command, argument, options.completion_marker)
            return f'COMPREPLY=( $(compgen -W "{call}" -- "$cur") )'
        case _:
            assert_never(completion)

"""Fish completion script generator.

Fish completions are a flat list of `complete` rules. Fish does not tell a
rule which subcommand the user is in, so every rule is guarded by a shared
predicate which recomputes the command path from the current command line:
options are dropped, and what remains (subcommands and positionals) is
compared with the path of the command owning the rule.

Several rules can match the same position; fish offers the union of them.
"""

from __future__ import annotations

import shlex
from typing import TYPE_CHECKING, assert_never

from ...commands.models import (
    ArgumentKind,
    CustomCompletion,
    DirectoryCompletion,
    FileCompletion,
    ListCompletion,
    Name,
    NameKind,
    NoCompletion,
    ShellCommandCompletion,
)
from ...commands.tree import with_help_subcommand
from ...constants import OPTION_PREFIX
from ...models import CompletionError
from ..builder import ScriptBuilder
from ..callback import fish_custom_completion_call
from ..models import GeneratorOptions
from ..naming import fish_escape_single_quoted, function_name

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ...commands.models import ArgumentInfo, CommandInfo

__all__ = ["fish_completion_script", "generate_fish"]

# Separates the names in the predicate arguments
_SEPARATOR = " "
# Separates a command name from its aliases within one path segment
_ALIAS_SEPARATOR = "|"


def generate_fish(root: CommandInfo, options: GeneratorOptions | None = None) -> str:
    """Generate the fish completion script for a command tree.

    Args:
        root: The top-level command
        options: Environment variable names, function prefix and callback marker

    Returns:
        The script content, ready to be sourced
    """
    return fish_completion_script([root], options)


def fish_completion_script(chain: Sequence[CommandInfo], options: GeneratorOptions | None = None) -> str:
    """Generate the fish completion script for the last command of `chain`.

    Args:
        chain: Commands from the root down to the command to complete
        options: Environment variable names, function prefix and callback marker

    Raises:
        CompletionError: `chain` is empty
    """
    if not chain:
        msg = "cannot generate fish completions without a root command"
        raise CompletionError(msg)
    options = options or GeneratorOptions()
    root_name = chain[0].name
    filter_function = function_name((root_name, "commands_and_positionals"), options.function_prefix)
    using_function = function_name((root_name, "using_command"), options.function_prefix)

    out = ScriptBuilder()
    _add_prologue(out, filter_function, using_function, options)
    out.line()
    out.lines(_completions(list(chain), using_function, options))
    return out.build()


def _add_prologue(out: ScriptBuilder, filter_function: str, using_function: str, options: GeneratorOptions) -> None:
    """Add the two helper functions every rule relies on."""
    out.line(f'# Print the arguments which do not start with "{OPTION_PREFIX}".')
    out.line(f"function {filter_function}")
    with out.indented():
        out.line("for arg in $argv")
        with out.indented():
            out.line("switch $arg")
            with out.indented():
                out.line(f"case '{OPTION_PREFIX}*'")
                out.line("case '*'")
                with out.indented():
                    out.line("echo $arg")
            out.line("end")
        out.line("end")
    out.line("end")
    out.line()
    out.line("# Succeed when the command line is at the command path $argv[1],")
    out.line("# and not inside one of its subcommands listed in $argv[2].")
    out.line(f"function {using_function}")
    with out.indented():
        out.line(f"set -gx {options.shell_variable} fish")
        out.line(f'set -gx {options.shell_version_variable} "$FISH_VERSION"')
        out.block(f"""\
set -l commands_and_positionals ({filter_function} (commandline -opc))
set -l expected_commands (string split -- '{_SEPARATOR}' $argv[1])
set -l subcommands
if set -q argv[2]
    set subcommands (string split -- '{_SEPARATOR}' $argv[2])
end
if [ (count $commands_and_positionals) -lt (count $expected_commands) ]
    return 1
end
for i in (seq (count $expected_commands))
    if not contains -- "$commands_and_positionals[$i]" (string split -- '{_ALIAS_SEPARATOR}' $expected_commands[$i])
        return 1
    end
end
if [ (count $commands_and_positionals) -eq (count $expected_commands) ]
    return 0
end
set -l next (math (count $expected_commands) + 1)
if contains -- "$commands_and_positionals[$next]" $subcommands
    return 1
end
return 0""")
    out.line("end")


def _path_segment(command: CommandInfo, is_root: bool) -> str:
    if is_root:
        return command.name
    return _ALIAS_SEPARATOR.join(command.invocable_names)


def _completions(chain: list[CommandInfo], using_function: str, options: GeneratorOptions) -> list[str]:
    """Rules for the last command of `chain`, then for its subcommands."""
    command = chain[-1]
    if len(chain) == 1:
        command = with_help_subcommand(command)
    subcommands = command.visible_subcommands
    root_name = chain[0].name

    path = _SEPARATOR.join(_path_segment(item, i == 0) for i, item in enumerate(chain))
    condition = f'{using_function} "{path}"'
    if subcommands:
        sibling_names = [name for sub in subcommands for name in sub.invocable_names]
        condition += f' "{_SEPARATOR.join(sibling_names)}"'
    prefix = f"complete -c {root_name} -n '{fish_escape_single_quoted(condition)}'"

    rules = [
        f"{prefix} -fa '{fish_escape_single_quoted(sub.name)}' -d '{fish_escape_single_quoted(sub.abstract)}'"
        for sub in subcommands
    ]
    for argument in command.arguments:
        segments = _argument_segments(root_name, command, argument, options)
        if segments is not None:
            rules.append(f"{prefix} {' '.join(segments)}")

    for sub in subcommands:
        rules += _completions([*chain, sub], using_function, options)
    return rules


def _fish_name(name: Name) -> str:
    match name.kind:
        case NameKind.LONG:
            return f"-l {name.name}"
        case NameKind.SHORT:
            return f"-s {name.name}"
        case NameKind.LONG_WITH_SINGLE_DASH:
            return f"-o {name.name}"
        case _:
            assert_never(name.kind)


def _argument_segments(
    root_name: str,
    command: CommandInfo,
    argument: ArgumentInfo,
    options: GeneratorOptions,
) -> list[str] | None:
    """Options of the `complete` rule for one argument, None to skip it."""
    if not argument.should_display:
        return None

    results = [_fish_name(name) for name in argument.names]
    if argument.abstract:
        results.append(f"-d '{fish_escape_single_quoted(argument.abstract)}'")
    if argument.kind == ArgumentKind.FLAG:
        return results or None
    if argument.kind == ArgumentKind.OPTION and not argument.names:
        return None

    # Positionals have no option to require a value for
    require = "r" if argument.names else ""
    completion = argument.completion
    match completion:
        case NoCompletion():
            if not argument.names:
                return None
        case ListCompletion(values=values):
            results.append(f"-{require}fka '{fish_escape_single_quoted(_SEPARATOR.join(values))}'")
        case FileCompletion(extensions=()):
            results.append(f"-{require}F")
        case FileCompletion(extensions=extensions):
            suffixes = [*extensions, *(ext.upper() for ext in extensions)]
            calls = "; ".join(f"__fish_complete_suffix {shlex.quote('.' + ext)}" for ext in suffixes)
            results.append(f"-{require}fa '{fish_escape_single_quoted(f'({calls})')}'")
        case DirectoryCompletion():
            results.append(f"-{require}fa '(__fish_complete_directories)'")
        case ShellCommandCompletion(command=shell_command):
            results.append(f"-{require}fa '{fish_escape_single_quoted(f'({shell_command})')}'")
        case CustomCompletion():
            call = fish_custom_completion_call(root_name, command, argument, options.completion_marker)
            results.append(f"-{require}fa '{fish_escape_single_quoted(call)}'")
        case _:
            assert_never(completion)
    return results

"""Tests for the bash completion generator."""

from __future__ import annotations

import shutil
import subprocess

import pytest

from shellcomp.commands.models import ArgumentInfo, ArgumentKind, CommandInfo, DirectoryCompletion, FileCompletion, ListCompletion
from shellcomp.commands.tree import attach_super_commands
from shellcomp.completions import GeneratorOptions, generate_bash
from shellcomp.models import CompletionError
from testtools import positional

EXPECTED_TOOL_SCRIPT = """\
#!/bin/bash

_tool() {
    export SHELLCOMP_SHELL=bash
    SHELLCOMP_SHELL_VERSION="$(IFS='.'; printf %s "${BASH_VERSINFO[*]}")"
    export SHELLCOMP_SHELL_VERSION
    cur="${COMP_WORDS[COMP_CWORD]}"
    prev="${COMP_WORDS[COMP_CWORD-1]}"
    COMPREPLY=()
    opts="--config build"
    if [[ $COMP_CWORD == "1" ]]; then
        COMPREPLY=( $(compgen -W "$opts" -- "$cur") )
        return
    fi
    case $prev in
        --config)
            COMPREPLY=( $(compgen -W "debug release" -- "$cur") )
            return
        ;;
    esac
    case ${COMP_WORDS[1]} in
        (build)
            _tool_build 2
            return
            ;;
    esac
    COMPREPLY=( $(compgen -W "$opts" -- "$cur") )
}
_tool_build() {
    opts=""
    if [[ $COMP_CWORD == "$1" ]]; then
        COMPREPLY=( $(compgen -W "$opts" -- "$cur") )
        return
    fi
    COMPREPLY=( $(compgen -W "$opts" -- "$cur") )
}

complete -F _tool tool
"""


@pytest.fixture
def bash_script(full_tree: CommandInfo) -> str:
    """Generate bash completion script."""
    return generate_bash(full_tree)


def _function_body(script: str, function: str) -> str:
    """Text of one generated function, up to its closing brace."""
    start = script.index(f"{function}() {{")
    return script[start : script.index("\n}\n", start)]


@pytest.mark.skipif(not shutil.which("bash"), reason="bash not installed")
class TestBashSyntax:
    """Test bash completion script syntax."""

    def test_syntax_valid(self, bash_script: str) -> None:
        """Bash completion script should have valid syntax."""
        result = subprocess.run(
            ["bash", "-n", "-c", bash_script],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0, f"Bash syntax error: {result.stderr}"

    def test_registers_root_function(self, bash_script: str) -> None:
        """Sourcing the script registers the root function for the command."""
        result = subprocess.run(
            ["bash", "-c", f"{bash_script}\ncomplete -p tool"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0, result.stderr
        assert "-F _tool tool" in result.stdout


class TestBashLayout:
    """Overall structure of the script."""

    def test_small_tree(self, tool_tree: CommandInfo) -> None:
        assert generate_bash(tool_tree) == EXPECTED_TOOL_SCRIPT

    def test_deterministic(self, full_tree: CommandInfo) -> None:
        assert generate_bash(full_tree) == generate_bash(full_tree)

    def test_functions_in_depth_first_order(self, bash_script: str) -> None:
        functions = [line[: -len("() {")] for line in bash_script.splitlines() if line.endswith("() {")]
        assert functions == ["_tool", "_tool_build", "_tool_build_docs", "_tool_remote", "_tool_remote_add"]

    def test_ends_with_registration(self, bash_script: str) -> None:
        assert bash_script.startswith("#!/bin/bash\n\n")
        assert bash_script.endswith("}\n\ncomplete -F _tool tool\n")

    def test_environment_exported_by_root_only(self, bash_script: str) -> None:
        assert bash_script.count("export SHELLCOMP_SHELL=bash") == 1
        assert "export SHELLCOMP_SHELL=bash" in _function_body(bash_script, "_tool")
        assert "COMPREPLY=()" not in _function_body(bash_script, "_tool_build")

    def test_custom_variable_names(self, tool_tree: CommandInfo) -> None:
        options = GeneratorOptions(shell_variable="TOOL_SHELL", shell_version_variable="TOOL_SHELL_VERSION")
        script = generate_bash(tool_tree, options)
        assert "export TOOL_SHELL=bash" in script
        assert "export TOOL_SHELL_VERSION" in script
        assert "SHELLCOMP_SHELL" not in script

    def test_subcommand_functions_use_index_argument(self, bash_script: str) -> None:
        body = _function_body(bash_script, "_tool_remote")
        assert 'if [[ $COMP_CWORD == "$1" ]]; then' in body
        assert "case ${COMP_WORDS[$1]} in" in body
        assert "_tool_remote_add $(($1+1))" in body


class TestBashWords:
    """Top-level word lists."""

    def test_root_words(self, bash_script: str) -> None:
        body = _function_body(bash_script, "_tool")
        assert (
            'opts="--verbose -v --config -c --output --input --dir --branch --profile --color build remote"' in body
        )

    def test_hidden_entries_absent(self, bash_script: str) -> None:
        assert "internal" not in bash_script
        assert "secret" not in bash_script
        assert "--dump" not in bash_script

    def test_list_positional_adds_values(self, bash_script: str) -> None:
        assert 'opts="$opts x86 arm"' in _function_body(bash_script, "_tool")

    def test_file_and_directory_positionals_add_nothing(self) -> None:
        root = attach_super_commands(
            CommandInfo(
                name="tool",
                arguments=(positional("path", FileCompletion(("txt",))), positional("dir", DirectoryCompletion())),
            )
        )
        script = generate_bash(root)
        assert 'opts=""' in script
        assert 'opts="$opts' not in script

    def test_custom_positional_call(self, bash_script: str) -> None:
        """Of the two `build` positionals, only the custom one adds words."""
        body = _function_body(bash_script, "_tool_build")
        extras = [line.strip() for line in body.splitlines() if line.strip().startswith('opts="$opts')]
        assert extras == ['opts="$opts $("${COMP_WORDS[0]}" ---completion build -- positional@1 "${COMP_WORDS[@]}")"']

    def test_shell_command_positional(self, bash_script: str) -> None:
        assert 'opts="$opts $(echo origin)"' in _function_body(bash_script, "_tool_remote_add")

    def test_words_escaped(self) -> None:
        root = attach_super_commands(CommandInfo(name="tool", subcommands=(CommandInfo(name='say"$hi'),)))
        assert 'opts="say\\"\\$hi"' in generate_bash(root)


class TestBashOptionValues:
    """`case $prev` arms."""

    def test_list_values(self, bash_script: str) -> None:
        assert '--config|-c)\n            COMPREPLY=( $(compgen -W "debug release" -- "$cur") )\n            return\n        ;;' in (
            bash_script
        )

    def test_flags_have_no_arm(self, bash_script: str) -> None:
        assert "--verbose|-v)" not in bash_script
        assert "--verbose)" not in bash_script

    def test_option_without_completion_has_no_arm(self, bash_script: str) -> None:
        assert "--color)" not in bash_script

    def test_any_file(self, bash_script: str) -> None:
        assert "--input)\n            if declare -F _filedir >/dev/null; then\n                _filedir\n" in bash_script
        assert 'COMPREPLY=( $(compgen -f -- "$cur") )' in bash_script

    def test_file_extensions(self, bash_script: str) -> None:
        for ext in ("json", "yaml", "JSON", "YAML"):
            assert f"_filedir '{ext}'" in bash_script
            assert f"$(compgen -f -X '!*.{ext}' -- \"$cur\")" in bash_script
        assert bash_script.index("_filedir 'yaml'") < bash_script.index("_filedir 'JSON'")

    def test_directory(self, bash_script: str) -> None:
        assert "-work-dir)\n            if declare -F _filedir >/dev/null; then\n                _filedir -d\n" in bash_script
        assert 'COMPREPLY=( $(compgen -d -- "$cur") )' in bash_script

    def test_shell_command(self, bash_script: str) -> None:
        assert "--branch)\n            COMPREPLY=( $(git branch --format='%(refname:short)') )" in bash_script

    def test_custom(self, bash_script: str) -> None:
        assert (
            '--profile)\n            COMPREPLY=( $(compgen -W "$("${COMP_WORDS[0]}" ---completion -- --profile '
            '"${COMP_WORDS[@]}")" -- "$cur") )'
        ) in bash_script

    def test_custom_marker(self, full_tree: CommandInfo) -> None:
        script = generate_bash(full_tree, GeneratorOptions(completion_marker="__complete"))
        assert "__complete -- --profile" in script
        assert "---completion" not in script


class TestBashSubcommands:
    """Dispatch to subcommand functions."""

    def test_aliases_in_pattern(self, bash_script: str) -> None:
        assert "(build|b)\n            _tool_build 2\n            return\n            ;;" in bash_script

    def test_leaf_has_no_dispatch(self, bash_script: str) -> None:
        assert "case ${COMP_WORDS" not in _function_body(bash_script, "_tool_build_docs")

    def test_function_names_sanitized(self) -> None:
        root = attach_super_commands(CommandInfo(name="my-tool", subcommands=(CommandInfo(name="do.it"),)))
        script = generate_bash(root)
        assert "_my_tool_do_it() {" in script
        assert script.endswith("complete -F _my_tool my-tool\n")

    def test_colliding_function_names(self) -> None:
        root = attach_super_commands(
            CommandInfo(name="tool", subcommands=(CommandInfo(name="a-b"), CommandInfo(name="a_b")))
        )
        with pytest.raises(CompletionError, match="_tool_a_b"):
            generate_bash(root)

    def test_hidden_subcommand_cannot_collide(self) -> None:
        root = attach_super_commands(
            CommandInfo(name="tool", subcommands=(CommandInfo(name="a-b"), CommandInfo(name="a_b", should_display=False)))
        )
        assert "_tool_a_b() {" in generate_bash(root)


class TestBashUnnamedOption:
    """An option nobody can type contributes nothing."""

    def test_no_words_and_no_arm(self, bash_script: str) -> None:
        assert "orphan" not in bash_script

    def test_alone(self) -> None:
        root = attach_super_commands(
            CommandInfo(name="tool", arguments=(ArgumentInfo(kind=ArgumentKind.OPTION, completion=ListCompletion(("a", "b"))),))
        )
        script = generate_bash(root)
        assert 'opts=""' in script
        assert "case $prev in" not in script
        assert 'compgen -W "a b"' not in script

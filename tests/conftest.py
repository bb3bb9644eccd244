" generic fixtures "
import pytest

from shellcomp.commands.models import (
    ArgumentInfo,
    ArgumentKind,
    CommandInfo,
    CustomCompletion,
    DirectoryCompletion,
    FileCompletion,
    ListCompletion,
    Name,
    ShellCommandCompletion,
)
from shellcomp.commands.tree import attach_super_commands
from testtools import flag, option, positional


def pytest_configure():
    "Runs once before all"
    from shellcomp.logging_setup import init_logger

    init_logger(force_debug=True)


@pytest.fixture
def tool_tree() -> CommandInfo:
    "`tool` with a `build` subcommand and a `--config` list option"
    return attach_super_commands(
        CommandInfo(
            name="tool",
            abstract="A tool",
            arguments=(option("config", ListCompletion(("debug", "release")), abstract="Build configuration"),),
            subcommands=(CommandInfo(name="build", abstract="Builds the project"),),
        )
    )


@pytest.fixture
def full_tree() -> CommandInfo:
    "A tree using every argument and completion kind"
    build = CommandInfo(
        name="build",
        abstract="Builds the project",
        aliases=("b",),
        arguments=(
            option("jobs", ListCompletion(("1", "2", "4")), short="j", abstract="Parallel jobs"),
            positional("path", FileCompletion(), abstract="Project path"),
            positional("name", CustomCompletion(), abstract="Target name"),
        ),
        subcommands=(CommandInfo(name="docs", abstract="Build the documentation"),),
    )
    internal = CommandInfo(
        name="internal",
        abstract="Not for humans",
        should_display=False,
        arguments=(flag("dump"),),
        subcommands=(CommandInfo(name="secret-child"),),
    )
    remote_add = CommandInfo(
        name="add",
        abstract="Add a remote",
        arguments=(
            positional("url", ShellCommandCompletion("echo origin")),
            ArgumentInfo(
                kind=ArgumentKind.OPTION,
                names=(Name.long_with_single_dash("work-dir"),),
                completion=DirectoryCompletion(),
            ),
        ),
    )
    remote = CommandInfo(name="remote", abstract="Manage remotes", subcommands=(remote_add,))
    root = CommandInfo(
        name="tool",
        abstract="A tool",
        arguments=(
            flag("verbose", short="v", abstract="Print more"),
            option("config", ListCompletion(("debug", "release")), short="c", abstract="Build configuration"),
            option("output", FileCompletion(("json", "yaml"))),
            option("input", FileCompletion()),
            option("dir", DirectoryCompletion()),
            option("branch", ShellCommandCompletion("git branch --format='%(refname:short)'")),
            option("profile", CustomCompletion()),
            option("secret", ListCompletion(("hidden-value",)), should_display=False),
            option("color"),
            ArgumentInfo(kind=ArgumentKind.OPTION, completion=ListCompletion(("orphan-a", "orphan-b"))),
            positional("target", ListCompletion(("x86", "arm"))),
        ),
        subcommands=(build, internal, remote),
    )
    return attach_super_commands(root)

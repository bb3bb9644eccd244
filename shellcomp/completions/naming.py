"""Shell-safe identifier and string construction.

Pure string helpers shared by the generators. Nothing here knows about a
particular shell's completion model.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ..commands.tree import iter_visible_commands
from ..models import CompletionError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ..commands.models import CommandInfo

__all__ = [
    "bash_escape_double_quoted",
    "escape_extensions",
    "fish_escape_single_quoted",
    "function_name",
    "function_names",
    "safe_identifier",
]

_UNSAFE_IDENTIFIER_CHARS = re.compile(r"[^A-Za-z0-9_]")
_BASH_DOUBLE_QUOTE_SPECIALS = re.compile(r'([\\"$`])')


def safe_identifier(text: str) -> str:
    """Replace every character not allowed in a shell function name with "_".

    Assumes ASCII command names: distinct non-ASCII names of the same length
    sanitize to the same identifier (see function_names for the check).
    """
    return _UNSAFE_IDENTIFIER_CHARS.sub("_", text)


def function_name(path: Sequence[str], prefix: str = "") -> str:
    """Build the completion function name of a command.

    Args:
        path: Command names from the root down to the command
        prefix: Optional extra leading segment

    Returns:
        "_" followed by the sanitized segments joined with "_", e.g. "_tool_build"
    """
    segments = [prefix.lstrip("_"), *path] if prefix else list(path)
    return "_" + safe_identifier("_".join(segments))


def function_names(root: CommandInfo, prefix: str = "") -> dict[tuple[str, ...], str]:
    """Compute the function name of every displayed command of a tree.

    Raises:
        CompletionError: two different command paths give the same name
            (e.g. "a b-c" and "a b_c", or "a_b c" and "a b_c")
    """
    names: dict[tuple[str, ...], str] = {}
    owners: dict[str, tuple[str, ...]] = {}
    for command in iter_visible_commands(root):
        name = function_name(command.path, prefix)
        if name in owners and owners[name] != command.path:
            msg = f"commands {' '.join(owners[name])!r} and {' '.join(command.path)!r} both map to function {name}"
            raise CompletionError(msg)
        owners[name] = command.path
        names[command.path] = name
    return names


def fish_escape_single_quoted(text: str, iterations: int = 1) -> str:
    """Escape text for use inside a fish single-quoted string.

    Backslashes are doubled first, then single quotes get a backslash.
    One pass is enough for one level of quoting.
    """
    for _ in range(iterations):
        text = text.replace("\\", "\\\\").replace("'", "\\'")
    return text


def escape_extensions(extensions: Iterable[str]) -> list[str]:
    """Prepare file extensions for glob filters.

    Single quotes are escaped, then the uppercase variants are appended so
    that matching ignores case without relying on shell options.
    """
    escaped = ["".join("\\'" if char == "'" else char for char in ext) for ext in extensions]
    return escaped + [ext.upper() for ext in escaped]


def bash_escape_double_quoted(text: str) -> str:
    """Escape a word for use inside a bash double-quoted string."""
    return _BASH_DOUBLE_QUOTE_SPECIALS.sub(r"\\\1", text)

"""CLI handlers for shell completion commands.

Provides the handle_compgen function used by the `shellcomp compgen` command
to generate and install completion scripts.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from ..constants import SUPPORTED_SHELLS
from .generators import GENERATORS
from .models import GeneratorOptions

if TYPE_CHECKING:
    from ..commands.models import CommandInfo
    from ..config import Configuration

__all__ = ["get_default_path", "handle_compgen"]


def get_default_path(shell: str, command_name: str, config: Configuration) -> str:
    """Get the default user-level completion path for a shell.

    Args:
        shell: Shell type ("bash" or "fish")
        command_name: Name of the root command, used in the file name
        config: Loaded configuration, may override the [paths]

    Returns:
        Expanded absolute path to the default completion file
    """
    return config.install_path(shell, command_name)


def _get_success_message(shell: str, output_path: str, used_default: bool) -> str:
    """Generate a friendly success message after installing completions.

    Args:
        shell: Shell type
        output_path: Path where completions were written
        used_default: Whether the default path was used

    Returns:
        User-friendly success message
    """
    # Use ~ in display path for readability
    display_path = output_path.replace(str(Path.home()), "~")

    if not used_default:
        return f"Completions written to {display_path}"

    if shell == "bash":
        return (
            f"Completions installed to {display_path}\n"
            "They load on demand with bash-completion. Without it, add to ~/.bashrc:\n"
            f"  source {display_path}\n"
            "Then reload your shell."
        )

    if shell == "fish":
        return f"Completions installed to {display_path}\nThey are picked up by new fish sessions."

    return f"Completions written to {display_path}"


def _check_path_arg(path_arg: str) -> str | None:
    """Return an error message if `path_arg` is neither "default" nor absolute."""
    if path_arg != "default" and not path_arg.startswith(("/", "~")):
        return "Relative paths not supported. Use absolute path, ~/path, or 'default'."
    return None


def handle_compgen(
    root: CommandInfo,
    shell: str,
    path_arg: str | None,
    config: Configuration,
) -> tuple[bool, str]:
    """Handle compgen command with path semantics.

    Args:
        root: The command tree to generate completions for
        shell: Target shell ("bash" or "fish")
        path_arg: None to return the script, "default", or an absolute path
        config: Loaded configuration

    Returns:
        Tuple of (success, result):
        - No path arg: result is the script content
        - With path arg: result is success/error message
    """
    if shell not in SUPPORTED_SHELLS:
        return (False, f"Unsupported shell: {shell}. Supported: {', '.join(SUPPORTED_SHELLS)}")
    if path_arg is not None:
        error = _check_path_arg(path_arg)
        if error:
            return (False, error)

    options = GeneratorOptions.from_config(config.section("shellcomp"))

    try:
        content = GENERATORS[shell](root, options)
    except (KeyError, ValueError, TypeError) as e:
        return (False, f"Failed to generate completions: {e}")

    if path_arg is None:
        return (True, content)

    # Determine output path
    if path_arg == "default":
        output_path = get_default_path(shell, root.name, config)
        used_default = True
    else:
        output_path = str(Path(path_arg).expanduser())
        used_default = False

    config.log.debug("Writing completions to: %s", output_path)

    # Write to file
    try:
        parent_dir = Path(output_path).parent
        parent_dir.mkdir(parents=True, exist_ok=True)
        Path(output_path).write_text(content, encoding="utf-8")
    except OSError as e:
        return (False, f"Failed to write completion file: {e}")

    return (True, _get_success_message(shell, output_path, used_default))

"""shellcomp - generate shell completion scripts from a command description."""

from __future__ import annotations

import argparse
import sys
from typing import TYPE_CHECKING

from .ansi import GREEN, colorize, should_colorize
from .commands.loader import load_tool_info
from .completions.handlers import handle_compgen
from .config import load_config
from .constants import SUPPORTED_SHELLS
from .logging_setup import get_logger, init_logger
from .models import ExitCode, ShellcompError
from .version import VERSION

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ["get_parser", "main"]


def get_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="shellcomp",
        description="Generate bash and fish completion scripts from a command description.",
        allow_abbrev=False,
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    parser.add_argument(
        "--log-file",
        metavar="filename",
        help="Also write the log to a file",
    )
    parser.add_argument(
        "--config",
        metavar="filename",
        help="Use a different configuration file",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    compgen = subparsers.add_parser("compgen", help="Generate a completion script")
    compgen.add_argument("shell", choices=SUPPORTED_SHELLS, help="Target shell")
    compgen.add_argument("tool_info", metavar="tool-info", help="JSON or TOML description of the command")
    compgen.add_argument(
        "path",
        nargs="?",
        help="'default' to install for the current user, or an absolute path (prints to stdout if omitted)",
    )

    subparsers.add_parser("shells", help="List the supported shells")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the shellcomp command.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        The process exit code
    """
    args = get_parser().parse_args(argv)
    init_logger(args.log_file, force_debug=args.debug)
    log = get_logger()

    if args.command == "shells":
        print("\n".join(SUPPORTED_SHELLS))
        return ExitCode.SUCCESS

    try:
        config = load_config(args.config, log)
        root = load_tool_info(args.tool_info, log)
    except ShellcompError:
        return ExitCode.INPUT_ERROR

    success, result = handle_compgen(root, args.shell, args.path, config)
    if not success:
        log.error(result)
        return ExitCode.COMMAND_ERROR

    if args.path is None:
        sys.stdout.write(result)
    else:
        print(colorize(result, GREEN) if should_colorize(sys.stdout) else result)
    return ExitCode.SUCCESS


if __name__ == "__main__":
    sys.exit(main())

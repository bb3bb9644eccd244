"""Command tree decoding from JSON or TOML dumps.

The accepted layout is the "tool info" document many argument parsers can dump
(for instance with `--experimental-dump-help`)::

    {
      "serializationVersion": 0,
      "command": {
        "commandName": "tool",
        "abstract": "...",
        "arguments": [
          {"kind": "option", "names": [{"kind": "long", "name": "config"}],
           "completionKind": {"list": {"values": ["debug", "release"]}}}
        ],
        "subcommands": [{"commandName": "build"}]
      }
    }

The same keys can be written in TOML. `superCommands` is recomputed from the
nesting, whatever the document says.
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..models import ShellcompError, ToolInfoError
from .models import (
    ArgumentInfo,
    ArgumentKind,
    CommandInfo,
    CompletionKind,
    CustomCompletion,
    DirectoryCompletion,
    FileCompletion,
    ListCompletion,
    Name,
    NameKind,
    NoCompletion,
    ShellCommandCompletion,
)
from .tree import attach_super_commands

if TYPE_CHECKING:
    import logging

__all__ = ["command_from_dict", "load_tool_info", "parse_tool_info"]

SUPPORTED_SERIALIZATION_VERSIONS = (0,)


def _get_str(data: dict[str, Any], key: str, location: str) -> str:
    """Text field, null and missing read as ""."""
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ToolInfoError(f"'{key}' must be a string", location)
    return value


def _get_str_list(data: dict[str, Any], key: str, location: str) -> tuple[str, ...]:
    values = data.get(key) or []
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise ToolInfoError(f"'{key}' must be a list of strings", location)
    return tuple(values)


def _parse_name(data: Any, location: str) -> Name:  # noqa: ANN401
    if not isinstance(data, dict):
        raise ToolInfoError("name entries must be tables", location)
    try:
        kind = NameKind(data.get("kind", ""))
    except ValueError as e:
        raise ToolInfoError(f"unknown name kind {data.get('kind')!r}", location) from e
    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise ToolInfoError("missing 'name'", location)
    return Name(kind, name, bool(data.get("allowSingleDash", False)))


def _parse_completion(data: Any, location: str) -> CompletionKind:  # noqa: ANN401
    """Decode a single-key table such as {"list": {"values": [...]}}."""
    if data is None:
        return NoCompletion()
    if not isinstance(data, dict) or len(data) != 1:
        raise ToolInfoError("completionKind must be a table with exactly one key", location)
    ((kind, payload),) = data.items()
    payload = payload or {}
    if not isinstance(payload, dict):
        raise ToolInfoError(f"{kind} completion payload must be a table", location)
    match kind:
        case "file":
            return FileCompletion(_get_str_list(payload, "extensions", location))
        case "directory":
            return DirectoryCompletion()
        case "list":
            return ListCompletion(_get_str_list(payload, "values", location))
        case "shellCommand":
            command = payload.get("command")
            if not isinstance(command, str):
                raise ToolInfoError("shellCommand needs a 'command' string", location)
            return ShellCommandCompletion(command)
        case "custom":
            return CustomCompletion()
    raise ToolInfoError(f"unknown completion kind {kind!r}", location)


def _parse_argument(data: Any, location: str) -> ArgumentInfo:  # noqa: ANN401
    if not isinstance(data, dict):
        raise ToolInfoError("argument entries must be tables", location)
    try:
        kind = ArgumentKind(data.get("kind", ""))
    except ValueError as e:
        raise ToolInfoError(f"unknown argument kind {data.get('kind')!r}", location) from e

    names = tuple(_parse_name(item, f"{location}.names[{i}]") for i, item in enumerate(data.get("names") or []))
    preferred = data.get("preferredName")
    return ArgumentInfo(
        kind=kind,
        names=names,
        completion=_parse_completion(data.get("completionKind"), f"{location}.completionKind"),
        abstract=_get_str(data, "abstract", location),
        should_display=bool(data.get("shouldDisplay", True)),
        value_name=_get_str(data, "valueName", location) or None,
        is_optional=bool(data.get("isOptional", False)),
        is_repeating=bool(data.get("isRepeating", False)),
        preferred=_parse_name(preferred, f"{location}.preferredName") if preferred else None,
    )


def command_from_dict(data: dict[str, Any], location: str = "command") -> CommandInfo:
    """Build a command node (and its subtree) from a decoded document.

    Args:
        data: The command table
        location: Where `data` sits in the document, for error messages

    Returns:
        The command, without `super_commands` (see attach_super_commands)
    """
    if not isinstance(data, dict):
        raise ToolInfoError("command entries must be tables", location)
    name = data.get("commandName")
    if not isinstance(name, str) or not name:
        raise ToolInfoError("missing 'commandName'", location)

    return CommandInfo(
        name=name,
        abstract=_get_str(data, "abstract", location),
        discussion=_get_str(data, "discussion", location),
        aliases=_get_str_list(data, "aliases", location),
        arguments=tuple(
            _parse_argument(item, f"{location}.arguments[{i}]") for i, item in enumerate(data.get("arguments") or [])
        ),
        subcommands=tuple(
            command_from_dict(item, f"{location}.subcommands[{i}]") for i, item in enumerate(data.get("subcommands") or [])
        ),
        should_display=bool(data.get("shouldDisplay", True)),
    )


def parse_tool_info(document: dict[str, Any]) -> CommandInfo:
    """Turn a decoded tool info document into a ready-to-use command tree.

    Accepts either the full document (with "command") or a bare command table.
    """
    if "command" in document:
        version = document.get("serializationVersion", 0)
        if version not in SUPPORTED_SERIALIZATION_VERSIONS:
            raise ToolInfoError(f"unsupported serializationVersion {version!r}")
        root = command_from_dict(document["command"])
    else:
        root = command_from_dict(document, "")
    return attach_super_commands(root)


def load_tool_info(filename: str | Path, log: logging.Logger) -> CommandInfo:
    """Load a command tree from a JSON or TOML file.

    TOML is used for `.toml` files, JSON for everything else.

    Raises:
        ShellcompError: the file is missing or malformed (already logged)
    """
    fname = Path(filename).expanduser()
    if not fname.exists():
        log.critical("Tool info file not found: %s", fname)
        raise ShellcompError
    log.info("Loading %s", fname)
    try:
        if fname.suffix.lower() == ".toml":
            with fname.open("rb") as f:
                document = tomllib.load(f)
        else:
            document = json.loads(fname.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, UnicodeDecodeError) as e:
        log.critical("Problem reading %s: %s", fname, e)
        raise ShellcompError from e

    if not isinstance(document, dict):
        log.critical("Problem reading %s: top level must be a table", fname)
        raise ShellcompError
    try:
        root = parse_tool_info(document)
    except ToolInfoError as e:
        log.critical("Invalid tool info in %s: %s", fname, e)
        raise ShellcompError from e
    log.debug("Loaded command tree for %s (%d subcommands)", root.name, len(root.subcommands))
    return root

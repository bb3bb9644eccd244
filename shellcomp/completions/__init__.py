"""Shell completion script generation.

This package provides:
- Escaping and function naming helpers
- Shell-specific completion script generators (bash, fish)
- The custom completion callback protocol, both sides
- CLI handler for the `shellcomp compgen` command
"""

from __future__ import annotations

from .callback import CompletionRequest, parse_completion_request, run_completion_request
from .generators import GENERATORS, generate_bash, generate_fish
from .handlers import get_default_path, handle_compgen
from .models import GeneratorOptions

__all__ = [
    "GENERATORS",
    "CompletionRequest",
    "GeneratorOptions",
    "generate_bash",
    "generate_fish",
    "get_default_path",
    "handle_compgen",
    "parse_completion_request",
    "run_completion_request",
]

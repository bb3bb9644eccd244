"""Shell completion generators.

Provides generator functions for each supported shell.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .bash import generate_bash
from .fish import generate_fish

if TYPE_CHECKING:
    from collections.abc import Callable

    from ...commands.models import CommandInfo
    from ..models import GeneratorOptions

__all__ = ["GENERATORS", "generate_bash", "generate_fish"]

GENERATORS: dict[str, Callable[[CommandInfo, GeneratorOptions | None], str]] = {
    "bash": generate_bash,
    "fish": generate_fish,
}

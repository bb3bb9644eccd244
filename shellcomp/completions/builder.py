"""Line-oriented script builder.

Generators append lines and blocks; indentation is applied in one place
instead of being baked into string templates.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

__all__ = ["ScriptBuilder"]


class ScriptBuilder:
    """Accumulate script lines with a current indentation level.

    Args:
        indent_unit: Text added per indentation level
    """

    def __init__(self, indent_unit: str = "    ") -> None:
        self.indent_unit = indent_unit
        self._level = 0
        self._lines: list[str] = []

    def line(self, text: str = "") -> ScriptBuilder:
        """Add one line at the current level (empty lines are never indented)."""
        self._lines.append(f"{self.indent_unit * self._level}{text}" if text else "")
        return self

    def lines(self, texts: Iterable[str]) -> ScriptBuilder:
        """Add several lines at the current level."""
        for text in texts:
            self.line(text)
        return self

    def block(self, text: str) -> ScriptBuilder:
        """Add a multi-line snippet, keeping its relative indentation."""
        return self.lines(text.splitlines())

    def extend(self, other: ScriptBuilder) -> ScriptBuilder:
        """Add the lines of another builder, re-indented to the current level."""
        return self.lines(other._lines)

    @contextmanager
    def indented(self, levels: int = 1) -> Iterator[ScriptBuilder]:
        """Indent every line added inside the `with` block."""
        self._level += levels
        try:
            yield self
        finally:
            self._level -= levels

    def __len__(self) -> int:
        return len(self._lines)

    def build(self) -> str:
        """Return the script text, newline terminated."""
        return "\n".join(self._lines) + "\n"

"""Error types raised while transforming component modules."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .ast.nodes import SourceLocation

_FRAME_CONTEXT_LINES = 2


class TransformError(Exception):
    """Fatal, per-file error pointing at the offending source location."""

    def __init__(self, message: str, loc: Optional["SourceLocation"] = None) -> None:
        super().__init__(message)
        self.message = message
        self.loc = loc
        self.filename: Optional[str] = None
        self.source: Optional[str] = None

    def attach(self, filename: str, source: Optional[str] = None) -> "TransformError":
        """Record the file the error belongs to so it can render a code frame."""
        if self.filename is None:
            self.filename = filename
        if self.source is None:
            self.source = source
        return self

    def code_frame(self) -> str:
        """Render the lines around the error location with a caret marker."""
        if self.loc is None or not self.source:
            return ""
        lines = self.source.splitlines()
        line_index = self.loc.line - 1
        if line_index < 0 or line_index >= len(lines):
            return ""
        first = max(0, line_index - _FRAME_CONTEXT_LINES)
        last = min(len(lines), line_index + _FRAME_CONTEXT_LINES + 1)
        width = len(str(last))
        frame: List[str] = []
        for index in range(first, last):
            number = str(index + 1).rjust(width)
            marker = ">" if index == line_index else " "
            frame.append(f"{marker} {number} | {lines[index]}".rstrip())
            if index == line_index:
                frame.append(f"  {' ' * width} | {' ' * self.loc.column}^")
        return "\n".join(frame)

    def __str__(self) -> str:
        where = self.filename or "<unknown>"
        if self.loc is not None:
            where = f"{where}:{self.loc.line}:{self.loc.column}"
        text = f"{where}: {self.message}"
        frame = self.code_frame()
        if frame:
            text = f"{text}\n{frame}"
        return text


class BuildError(RuntimeError):
    """Raised when the build driver cannot process a file."""


__all__ = ["BuildError", "TransformError"]

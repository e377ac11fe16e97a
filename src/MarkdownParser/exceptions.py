from __future__ import annotations

from pathlib import Path


class MarkdownError(Exception):
    """Base class for every failure raised by the converter."""


class ParseError(MarkdownError):
    """Grammar matching failed at ``position`` while expecting ``expected``."""

    def __init__(self, position: int, expected: str, source: str | None = None) -> None:
        self.position = position
        self.expected = expected
        self.line: int | None = None
        self.column: int | None = None
        if source is not None:
            self.line = source.count("\n", 0, position) + 1
            self.column = position - (source.rfind("\n", 0, position) + 1) + 1
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.line is None:
            return f"Parsing failed at offset {self.position}: expected {self.expected}"
        return f"Parsing failed at line {self.line}, column {self.column}: expected {self.expected}"


class NestingDepthError(ParseError):
    """Raised instead of recursing past the configured nesting limit."""

    def __init__(self, position: int, expected: str, depth: int, source: str | None = None) -> None:
        self.depth = depth
        super().__init__(position, expected, source)

    def _describe(self) -> str:
        return f"{super()._describe()} (maximum nesting depth {self.depth} exceeded)"


class IoError(MarkdownError):
    """Reading or writing a file failed."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"File operation failed: {self.path}: {reason}")


class ConfigError(MarkdownError, ValueError):
    """The configuration file holds something other than known settings."""

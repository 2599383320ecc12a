"""Error taxonomy for the generator.

Every error is fatal for the run; callers catch ``ErrgenError`` at the edge.
"""

from __future__ import annotations

from pathlib import Path


class ErrgenError(Exception):
    """Base class for generator failures."""


class UsageError(ErrgenError):
    """Bad invocation: nothing selected to generate, no inputs, bad options."""


class ConfigError(UsageError):
    """Configuration file could not be loaded or has unknown keys."""


class ParseError(ErrgenError):
    def __init__(self, message: str, source: str | Path | None = None, line: int | None = None):
        self.message = message
        self.source = str(source) if source is not None else None
        self.line = line
        super().__init__(self.__str__())

    def __str__(self) -> str:
        where = self.source or "<input>"
        if self.line is not None:
            where = f"{where}:{self.line}"
        return f"{where}: {self.message}"


class InputError(ErrgenError):
    """An input file could not be opened or read."""


class OutputError(ErrgenError):
    """An output file could not be opened or written."""

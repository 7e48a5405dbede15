"""
Error kinds raised by the registry pipeline.
Every error is fatal to the run in progress; nothing is retried.
"""

from pathlib import Path


class RegistryError(Exception):
    """Base class for failures that abort a registry run."""


class ParseError(RegistryError):
    """A source module is not syntactically valid."""

    def __init__(self, path: str | Path | None, line: int, column: int, detail: str = "syntax error"):
        self.path = str(path) if path is not None else None
        self.line = line
        self.column = column
        self.detail = detail
        where = self.path or "<source>"
        super().__init__(f"{where}:{line}:{column}: {detail}")


class FilesystemError(RegistryError):
    """Removing, creating, listing or writing under the registry failed."""

    def __init__(self, path: str | Path, message: str):
        self.path = str(path)
        super().__init__(f"{message}: {self.path}")


class ConfigValidationError(RegistryError, ValueError):
    """Configuration failed validation."""

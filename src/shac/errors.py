"""Exception hierarchy for the shac compiler.

Errors fall into two families that the CLI maps to distinct exit codes:

- ParseError: the source header violates the directive grammar or ends early.
  Raised before any filesystem access happens.
- SystemFailure: a filesystem operation failed (opening the source, creating
  the asset directory, reading or writing an asset, writing the output).

DocumentSkipped is not a failure; it signals an ``@ignore`` document.
"""

from __future__ import annotations

from pathlib import Path


class ShacError(Exception):
    """Base class for all shac errors."""


class ParseError(ShacError):
    """The source document header could not be parsed."""


class HeaderSyntaxError(ParseError):
    def __init__(self, message: str, line: int) -> None:
        self.message = message
        self.line = line
        super().__init__(f"syntax error: {message}")


class PrematureEndOfInput(ParseError):
    def __init__(self, line: int) -> None:
        self.line = line
        super().__init__(f"unexpected end of input at line {line}: no @html found")


class DocumentSkipped(ShacError):
    """Raised when the document opts out of the build with ``@ignore``."""

    def __init__(self) -> None:
        super().__init__("document marked with @ignore")


class SystemFailure(ShacError):
    """A filesystem operation failed."""

    action = "access"

    def __init__(self, path: Path, cause: Exception | None = None) -> None:
        self.path = path
        self.cause = cause
        message = f"failed to {self.action} {path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class SourceOpenError(SystemFailure):
    action = "open source file"


class SourceReadError(SystemFailure):
    action = "read source file"


class AssetDirectoryError(SystemFailure):
    action = "create asset directory"


class AssetReadError(SystemFailure):
    action = "read asset"


class AssetWriteError(SystemFailure):
    action = "write asset"


class OutputWriteError(SystemFailure):
    action = "create output file"


__all__ = [
    "AssetDirectoryError",
    "AssetReadError",
    "AssetWriteError",
    "DocumentSkipped",
    "HeaderSyntaxError",
    "OutputWriteError",
    "ParseError",
    "PrematureEndOfInput",
    "ShacError",
    "SourceOpenError",
    "SourceReadError",
    "SystemFailure",
]

"""Exception hierarchy raised by the logger."""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class TinyLoggerError(Exception):
    """Base class for all logger errors."""


class ConfigurationError(TinyLoggerError):
    """Raised when a logger cannot be constructed from its configuration."""


class InvalidLabel(ConfigurationError):
    """Raised when a label contains characters outside ``[A-Za-z0-9]``."""

    def __init__(self, label: object) -> None:
        super().__init__(
            f"Label {label!r} contains invalid characters; only alphanumeric characters are allowed"
        )
        self.label = label


class InvalidPath(ConfigurationError):
    """Raised when the target log directory does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Log directory does not exist: {path}")
        self.path = path


class WriteFailure(TinyLoggerError):
    """Raised when a record could not be appended to its log file.

    The encoded record is kept on the exception so the caller can decide
    whether to retry, buffer or drop it.
    """

    def __init__(self, path: Optional[Path], record: bytes, reason: str) -> None:
        super().__init__(f"Failed to write log record to {path}: {reason}")
        self.path = path
        self.record = record
        self.reason = reason


class EncodingFailure(TinyLoggerError):
    """Raised when a record cannot be encoded; indicates a programming error."""


__all__ = [
    "ConfigurationError",
    "EncodingFailure",
    "InvalidLabel",
    "InvalidPath",
    "TinyLoggerError",
    "WriteFailure",
]

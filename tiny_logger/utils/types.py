"""Shared value types consumed across the logger."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Level(str, Enum):
    """Severity of a log record."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """On-disk record format of a session."""

    DELIMITED = "delimited"
    LINE_OBJECT = "line-object"

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]

    @classmethod
    def parse(cls, value: "LogFormat | str") -> "LogFormat":
        """Accept an enum member, its value, or the short ``csv``/``json`` aliases."""

        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        return cls(key)


_EXTENSIONS = {
    LogFormat.DELIMITED: "csv",
    LogFormat.LINE_OBJECT: "txt",
}

_ALIASES = {
    "csv": LogFormat.DELIMITED,
    "json": LogFormat.LINE_OBJECT,
    "line_object": LogFormat.LINE_OBJECT,
}


class ConsoleStyle(str, Enum):
    """Rendering used by the console sink."""

    RAW = "raw"
    PRETTY = "pretty"


@dataclass(frozen=True)
class LogRecord:
    """A single event on its way from the facade to the sinks."""

    level: Level
    subject: str
    message: str
    timestamp: str


__all__ = ["ConsoleStyle", "Level", "LogFormat", "LogRecord"]

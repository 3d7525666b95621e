"""Leveled structured logger with a color-coded console and rotating log files."""

from .config import LoggerConfig
from .console import ConsoleSink
from .core.session import FileSession
from .errors import (
    ConfigurationError,
    EncodingFailure,
    InvalidLabel,
    InvalidPath,
    TinyLoggerError,
    WriteFailure,
)
from .logger import TinyLogger
from .utils.types import ConsoleStyle, Level, LogFormat, LogRecord

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ConsoleSink",
    "ConsoleStyle",
    "EncodingFailure",
    "FileSession",
    "InvalidLabel",
    "InvalidPath",
    "Level",
    "LogFormat",
    "LogRecord",
    "LoggerConfig",
    "TinyLogger",
    "TinyLoggerError",
    "WriteFailure",
]

"""Public logger facade sequencing encoding, console output and file output."""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Any, Callable, List, Optional, Union

from rich.console import Console
from rich.errors import ConsoleError

from .config import LoggerConfig
from .console import ConsoleSink
from .core.encoder import encoder_for
from .core.paths import resolve_label, resolve_paths
from .core.session import FileSession
from .errors import ConfigurationError, WriteFailure
from .utils.timefmt import format_instantiation_stamp, format_record_time, utc_now
from .utils.types import Level, LogRecord

LOGGER = logging.getLogger(__name__)


class TinyLogger:
    """Leveled structured logger writing to the console and rotating files.

    Options may be passed as a :class:`LoggerConfig`, as keyword arguments
    (camelCase or snake_case), or both, in which case the keywords override
    the config. Everything is validated here: a logger with both sinks
    disabled, a non-alphanumeric label or a missing directory raises
    :class:`ConfigurationError` and no file is created.

    The first log file is opened eagerly. Each call captures a timestamp,
    encodes the record, prints it and appends it. A console failure is logged
    and does not stop the file write; a :class:`WriteFailure` is raised to the
    caller after the console line has been printed.
    """

    def __init__(
        self,
        config: Optional[LoggerConfig] = None,
        *,
        console: Optional[Console] = None,
        clock: Optional[Callable[[], datetime]] = None,
        **options: Any,
    ) -> None:
        if config is None:
            config = LoggerConfig.from_mapping(options)
        elif options:
            config = config.with_options(**options)

        if not config.console_enabled and not config.file_enabled:
            raise ConfigurationError("Console and file output are both disabled; nothing would be logged")

        self._config = config
        self._clock = clock or utc_now
        self._lock = Lock()
        self._encoder = encoder_for(config.format)
        self.stamp = format_instantiation_stamp(self._clock())

        label = resolve_label(config.label)
        self._console: Optional[ConsoleSink] = None
        self._session: Optional[FileSession] = None

        if config.file_enabled:
            paths = resolve_paths(label, config.directory)
            try:
                self._session = FileSession(
                    paths, config.format, self.stamp, max_bytes=config.max_bytes
                )
            except WriteFailure as exc:
                raise ConfigurationError(f"Unable to open first log file: {exc.reason}") from exc

        if config.console_enabled:
            self._console = ConsoleSink(config.console_style, console)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def config(self) -> LoggerConfig:
        return self._config

    @property
    def current_file(self) -> Optional[Path]:
        """Path of the file the next record goes to, if file output is enabled."""

        return self._session.current_path if self._session is not None else None

    @property
    def files(self) -> List[Path]:
        return self._session.written_paths if self._session is not None else []

    def debug(self, subject: str, message: str) -> Optional[Path]:
        return self.log(Level.DEBUG, subject, message)

    def info(self, subject: str, message: str) -> Optional[Path]:
        return self.log(Level.INFO, subject, message)

    def warn(self, subject: str, message: str) -> Optional[Path]:
        return self.log(Level.WARN, subject, message)

    def error(self, subject: str, message: str) -> Optional[Path]:
        return self.log(Level.ERROR, subject, message)

    def log(self, level: Union[Level, str], subject: str, message: str) -> Optional[Path]:
        """Log one record and return the file it was written to, if any."""

        if not isinstance(level, Level):
            level = _parse_level(level)
        with self._lock:
            timestamp = format_record_time(self._clock())
            record = LogRecord(level=level, subject=subject, message=message, timestamp=timestamp)
            data = self._encoder.encode(level, subject, message, timestamp)

            if self._console is not None:
                try:
                    self._console.emit(record)
                except (OSError, ValueError, ConsoleError):
                    # A closed or vanished stream surfaces as ValueError.
                    LOGGER.exception("Console output failed for %s record from %s", level.value, subject)

            if self._session is None:
                return None
            try:
                return self._session.append(data)
            except WriteFailure as exc:
                LOGGER.error("Failed to persist %s record from %s: %s", level.value, subject, exc)
                raise

    def close(self) -> None:
        """Flush and close the current log file. Safe to call more than once."""

        if self._session is not None:
            self._session.close()

    def __enter__(self) -> "TinyLogger":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _parse_level(value: object) -> Level:
    try:
        return Level(str(value).upper())
    except ValueError:
        names = ", ".join(level.value for level in Level)
        raise ValueError(f"Unknown log level {value!r}; expected one of {names}") from None


__all__ = ["TinyLogger"]

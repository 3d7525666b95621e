"""Logger configuration resolved once at construction."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .core.rotation import DEFAULT_MAX_BYTES
from .errors import ConfigurationError, InvalidLabel
from .utils.types import ConsoleStyle, LogFormat

LOGGER = logging.getLogger(__name__)

# Option spellings accepted from mappings and JSON files.
_KEY_ALIASES: Dict[str, str] = {
    "format": "format",
    "disableConsoleOutput": "disable_console_output",
    "supressConsoleOutput": "disable_console_output",
    "disableFileOutput": "disable_file_output",
    "consoleStyle": "console_style",
    "label": "label",
    "logLabel": "label",
    "directory": "directory",
    "maxBytes": "max_bytes",
}


@dataclass(frozen=True)
class LoggerConfig:
    """Immutable options of a :class:`~tiny_logger.logger.TinyLogger`."""

    format: LogFormat = LogFormat.DELIMITED
    disable_console_output: bool = False
    disable_file_output: bool = False
    console_style: ConsoleStyle = ConsoleStyle.RAW
    label: Optional[str] = None
    directory: Optional[Path] = None
    max_bytes: int = DEFAULT_MAX_BYTES

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "format", LogFormat.parse(self.format))
        except ValueError as exc:
            raise ConfigurationError(f"Unknown log format: {self.format!r}") from exc
        try:
            object.__setattr__(self, "console_style", ConsoleStyle(self.console_style))
        except ValueError as exc:
            raise ConfigurationError(f"Unknown console style: {self.console_style!r}") from exc
        for name in ("disable_console_output", "disable_file_output"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(f"{name} must be true or false, got {getattr(self, name)!r}")
        if self.label is not None and not isinstance(self.label, str):
            raise InvalidLabel(self.label)
        if self.directory is not None and not isinstance(self.directory, (str, Path)):
            raise ConfigurationError(f"directory must be a path, got {self.directory!r}")
        if isinstance(self.directory, str):
            object.__setattr__(self, "directory", Path(self.directory))
        if isinstance(self.max_bytes, bool) or not isinstance(self.max_bytes, int):
            raise ConfigurationError(f"maxBytes must be an integer, got {self.max_bytes!r}")
        if self.max_bytes <= 0:
            raise ConfigurationError(f"maxBytes must be positive, got {self.max_bytes}")

    @property
    def console_enabled(self) -> bool:
        return not self.disable_console_output

    @property
    def file_enabled(self) -> bool:
        return not self.disable_file_output

    def with_options(self, **options: Any) -> "LoggerConfig":
        return replace(self, **_normalise_keys(options))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LoggerConfig":
        """Build a config from camelCase or snake_case option names."""

        return cls(**_normalise_keys(data))

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "LoggerConfig":
        path = Path(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigurationError(f"Unable to read logger config {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Logger config {path} is not valid JSON: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigurationError(f"Logger config {path} must contain a JSON object")
        LOGGER.debug("Loaded logger config from %s", path)
        return cls.from_mapping(raw)


def _normalise_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    known = {field.name for field in fields(LoggerConfig)}
    options: Dict[str, Any] = {}
    for key, value in data.items():
        name = _KEY_ALIASES.get(key, key)
        if name not in known:
            raise ConfigurationError(f"Unknown logger option: {key!r}")
        options[name] = value
    return options


__all__ = ["LoggerConfig"]

"""Label and directory validation plus log file naming."""
from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..errors import InvalidLabel, InvalidPath
from ..utils.types import LogFormat

DEFAULT_LABEL = "log"

_LABEL_PATTERN = re.compile(r"[A-Za-z0-9]*")


@dataclass(frozen=True)
class ResolvedPaths:
    """Canonical naming inputs for one logger session."""

    label: str
    stem: str
    directory: Path

    @property
    def directory_string(self) -> str:
        return directory_string(self.directory)

    def file_path(self, stamp: str, index: int, log_format: LogFormat) -> Path:
        return self.directory / build_file_name(self.stem, stamp, index, log_format)


def resolve_label(label: Optional[str]) -> str:
    """Validate ``label`` and fall back to ``"log"`` when it is empty or absent."""

    if label is None:
        return DEFAULT_LABEL
    if not isinstance(label, str):
        raise InvalidLabel(label)
    if not label:
        return DEFAULT_LABEL
    if not _LABEL_PATTERN.fullmatch(label):
        raise InvalidLabel(label)
    return label


def derive_stem(label: str) -> str:
    """Custom labels get a ``.log`` suffix; the default label is used as is."""

    if label == DEFAULT_LABEL:
        return DEFAULT_LABEL
    return f"{label}.log"


def resolve_directory(directory: Optional[Union[str, Path]]) -> Path:
    """Return the absolute log directory, defaulting to the working directory."""

    if directory is None or str(directory) == "":
        return Path.cwd()
    path = Path(directory).expanduser()
    if not path.is_dir():
        raise InvalidPath(path)
    return path.resolve()


def directory_string(directory: Path) -> str:
    text = str(directory)
    if not text.endswith(os.sep):
        text += os.sep
    return text


def build_file_name(stem: str, stamp: str, index: int, log_format: LogFormat) -> str:
    """Return ``<stem>.<stamp>.<ext>``, or ``<stem>.<stamp>_<index>.<ext>`` after rotation."""

    if index < 0:
        raise ValueError("File index must be non-negative")
    suffix = f"_{index}" if index else ""
    return f"{stem}.{stamp}{suffix}.{log_format.extension}"


def resolve_paths(
    label: Optional[str], directory: Optional[Union[str, Path]]
) -> ResolvedPaths:
    resolved_label = resolve_label(label)
    return ResolvedPaths(
        label=resolved_label,
        stem=derive_stem(resolved_label),
        directory=resolve_directory(directory),
    )


__all__ = [
    "DEFAULT_LABEL",
    "ResolvedPaths",
    "build_file_name",
    "derive_stem",
    "directory_string",
    "resolve_directory",
    "resolve_label",
    "resolve_paths",
]

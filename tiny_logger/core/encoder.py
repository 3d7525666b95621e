"""Stateless encoders turning log records into appendable bytes."""
from __future__ import annotations

import csv
import io
import json
from typing import Dict, Union

from ..errors import EncodingFailure
from ..utils.types import Level, LogFormat

ENCODING = "utf-8"

DELIMITED_TERMINATOR = "\r\n"
LINE_OBJECT_TERMINATOR = "\n"


def _check_fields(level: Level, subject: str, message: str, timestamp: str) -> None:
    for name, value in (("subject", subject), ("message", message), ("timestamp", timestamp)):
        if not isinstance(value, str):
            raise EncodingFailure(f"{name} must be a string, got {type(value).__name__}")
    if not isinstance(level, Level):
        raise EncodingFailure(f"level must be a Level, got {level!r}")


class DelimitedEncoder:
    """Quoted, comma separated rows: level, timestamp, subject, message."""

    log_format = LogFormat.DELIMITED

    def encode(self, level: Level, subject: str, message: str, timestamp: str) -> bytes:
        _check_fields(level, subject, message, timestamp)
        buffer = io.StringIO()
        writer = csv.writer(
            buffer,
            quoting=csv.QUOTE_ALL,
            lineterminator=DELIMITED_TERMINATOR,
        )
        writer.writerow([level.value, timestamp, subject, message])
        return buffer.getvalue().encode(ENCODING)


class LineObjectEncoder:
    """One JSON object per line with ``time``, ``level``, ``subject`` and ``message``."""

    log_format = LogFormat.LINE_OBJECT

    def encode(self, level: Level, subject: str, message: str, timestamp: str) -> bytes:
        _check_fields(level, subject, message, timestamp)
        payload = {
            "time": timestamp,
            "level": level.value,
            "subject": subject,
            "message": message,
        }
        line = json.dumps(payload, ensure_ascii=False)
        return f"{line}{LINE_OBJECT_TERMINATOR}".encode(ENCODING)


RecordEncoder = Union[DelimitedEncoder, LineObjectEncoder]

_ENCODERS: Dict[LogFormat, RecordEncoder] = {
    LogFormat.DELIMITED: DelimitedEncoder(),
    LogFormat.LINE_OBJECT: LineObjectEncoder(),
}


def encoder_for(log_format: LogFormat) -> RecordEncoder:
    return _ENCODERS[LogFormat.parse(log_format)]


def encode(
    log_format: LogFormat, level: Level, subject: str, message: str, timestamp: str
) -> bytes:
    """Encode a single record in ``log_format``."""

    return encoder_for(log_format).encode(level, subject, message, timestamp)


__all__ = [
    "DelimitedEncoder",
    "LineObjectEncoder",
    "RecordEncoder",
    "encode",
    "encoder_for",
]

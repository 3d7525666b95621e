"""Timestamp helpers shared by file names, records and the console."""
from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def format_instantiation_stamp(moment: datetime) -> str:
    """Return ``YYYY-MM-DDTHH-MM-SS`` for use inside file names."""

    return _as_utc(moment).strftime("%Y-%m-%dT%H-%M-%S")


def format_record_time(moment: datetime) -> str:
    """Return ``YYYY-MM-DDTHH:MM:SSZ`` for log records."""

    return _as_utc(moment).strftime("%Y-%m-%dT%H:%M:%SZ")


__all__ = ["format_instantiation_stamp", "format_record_time", "utc_now"]

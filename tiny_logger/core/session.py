"""Append-only log file session with size-based rotation."""
from __future__ import annotations

import logging
import os
from io import RawIOBase
from pathlib import Path
from threading import Lock
from typing import List, Optional

from ..errors import WriteFailure
from ..utils.types import LogFormat
from .paths import ResolvedPaths
from .rotation import DEFAULT_MAX_BYTES, RotationPolicy

LOGGER = logging.getLogger(__name__)


class FileSession:
    """Own the single open log file of a logger and rotate it by size.

    The session opens its first file at construction. Every :meth:`append`
    checks the rotation policy before writing, so a record that would push the
    current file past ``max_bytes`` is written to the next file instead.
    Rotation and append run under one lock, which keeps the file index, the
    byte counter and the open handle consistent across threads.
    """

    def __init__(
        self,
        paths: ResolvedPaths,
        log_format: LogFormat,
        stamp: str,
        *,
        max_bytes: int = DEFAULT_MAX_BYTES,
    ) -> None:
        self.paths = paths
        self.log_format = LogFormat.parse(log_format)
        self.stamp = stamp
        self.policy = RotationPolicy(max_bytes)
        self._lock = Lock()
        self._handle: Optional[RawIOBase] = None
        self._index = 0
        self._bytes_written = 0
        self._written_paths: List[Path] = []
        self._closed = False
        with self._lock:
            self._open_current(record=b"")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def max_bytes(self) -> int:
        return self.policy.max_bytes

    @property
    def current_file_index(self) -> int:
        return self._index

    @property
    def current_path(self) -> Path:
        return self.paths.file_path(self.stamp, self._index, self.log_format)

    @property
    def bytes_written(self) -> int:
        return self._bytes_written

    @property
    def written_paths(self) -> List[Path]:
        """Every file this session has opened, oldest first."""

        return list(self._written_paths)

    @property
    def closed(self) -> bool:
        return self._closed

    def append(self, data: bytes) -> Path:
        """Append ``data`` to the current file, rotating first when required.

        Returns the path the record was written to.
        """

        with self._lock:
            if self._closed:
                raise WriteFailure(self.current_path, data, "session is closed")
            if self._handle is None:
                self._open_current(record=data)
            # A file left over from an earlier run may already hold data.
            while self.policy.should_rotate(self._bytes_written, len(data)):
                self._rotate(record=data)

            path = self.current_path
            try:
                self._write_all(data)
            except OSError as exc:
                LOGGER.error("Failed to append %d bytes to %s: %s", len(data), path, exc)
                raise WriteFailure(path, data, str(exc)) from exc
            self._bytes_written += len(data)
            return path

    def close(self) -> None:
        """Sync and close the current file. Closing twice is a no-op."""

        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._release_handle()
            LOGGER.debug("Closed log session %s", self.current_path)

    def __enter__(self) -> "FileSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internal helpers (callers hold ``self._lock``)
    # ------------------------------------------------------------------
    def _open_current(self, record: bytes) -> None:
        path = self.current_path
        try:
            handle = path.open("ab", buffering=0)
            size = os.fstat(handle.fileno()).st_size
        except OSError as exc:
            LOGGER.error("Unable to open log file %s: %s", path, exc)
            raise WriteFailure(path, record, str(exc)) from exc

        self._handle = handle
        self._bytes_written = size
        if path not in self._written_paths:
            self._written_paths.append(path)
        LOGGER.debug("Opened log file %s (%d existing bytes)", path, size)

    def _write_all(self, data: bytes) -> None:
        """Write ``data`` through the unbuffered handle, looping over short writes.

        A write that fails part-way is truncated back off the file, so a
        record reported as failed never shows up in it later.
        """

        fd = self._handle.fileno()
        start = os.fstat(fd).st_size
        view = memoryview(data)
        try:
            while view:
                written = self._handle.write(view)
                if not written:
                    raise OSError(f"short write: {len(view)} of {len(data)} bytes left")
                view = view[written:]
        except OSError:
            try:
                os.ftruncate(fd, start)
            except OSError as exc:
                LOGGER.warning("Unable to roll back partial record in %s: %s", self.current_path, exc)
            raise

    def _rotate(self, record: bytes) -> None:
        previous = self.current_path
        self._release_handle()
        self._index += 1
        # On failure the session stays without a handle and the next append
        # retries this same file.
        self._open_current(record=record)
        LOGGER.info(
            "Rotated log file %s -> %s (next record %d bytes, limit %d)",
            previous.name,
            self.current_path.name,
            len(record),
            self.max_bytes,
        )

    def _release_handle(self) -> None:
        handle = self._handle
        self._handle = None
        self._bytes_written = 0
        if handle is None:
            return
        try:
            os.fsync(handle.fileno())
        except OSError as exc:
            LOGGER.warning("Unable to sync log file %s: %s", handle.name, exc)
        try:
            handle.close()
        except OSError as exc:
            LOGGER.warning("Unable to close log file %s: %s", handle.name, exc)


__all__ = ["FileSession"]

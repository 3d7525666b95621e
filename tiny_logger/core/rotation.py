"""Pre-write, size-based rotation decision."""
from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX_BYTES = 10 * 1024 * 1024


def should_rotate(bytes_written: int, candidate_size: int, max_bytes: int) -> bool:
    """Return ``True`` when writing ``candidate_size`` more bytes would exceed ``max_bytes``.

    An empty file never rotates: a record larger than ``max_bytes`` is written
    on its own instead of opening a new, equally empty file.
    """

    if bytes_written <= 0:
        return False
    return bytes_written + candidate_size > max_bytes


@dataclass(frozen=True)
class RotationPolicy:
    max_bytes: int = DEFAULT_MAX_BYTES

    def __post_init__(self) -> None:
        if isinstance(self.max_bytes, bool) or not isinstance(self.max_bytes, int):
            raise TypeError("max_bytes must be an integer")
        if self.max_bytes <= 0:
            raise ValueError("max_bytes must be positive")

    def should_rotate(self, bytes_written: int, candidate_size: int) -> bool:
        return should_rotate(bytes_written, candidate_size, self.max_bytes)


__all__ = ["DEFAULT_MAX_BYTES", "RotationPolicy", "should_rotate"]

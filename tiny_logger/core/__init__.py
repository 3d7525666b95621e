"""Rotation and durability primitives exposed as a convenience import."""

from .encoder import DelimitedEncoder, LineObjectEncoder, encode, encoder_for
from .paths import ResolvedPaths, build_file_name, derive_stem, resolve_paths
from .rotation import DEFAULT_MAX_BYTES, RotationPolicy, should_rotate
from .session import FileSession

__all__ = [
    "DEFAULT_MAX_BYTES",
    "DelimitedEncoder",
    "FileSession",
    "LineObjectEncoder",
    "ResolvedPaths",
    "RotationPolicy",
    "build_file_name",
    "derive_stem",
    "encode",
    "encoder_for",
    "resolve_paths",
    "should_rotate",
]

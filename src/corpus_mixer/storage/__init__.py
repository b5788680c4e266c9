"""Filesystem layout and naming helpers."""

from __future__ import annotations

from .naming import format_manifest_line, pooled_clip_name, strip_clip_prefix
from .paths import DatasetLayout, PathsConfig, build_paths

__all__ = [
    "DatasetLayout",
    "PathsConfig",
    "build_paths",
    "format_manifest_line",
    "pooled_clip_name",
    "strip_clip_prefix",
]

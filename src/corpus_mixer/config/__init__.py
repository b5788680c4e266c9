"""Configuration loading helpers."""

from __future__ import annotations

from .load import ConfigError, load_config

__all__ = ["ConfigError", "load_config"]

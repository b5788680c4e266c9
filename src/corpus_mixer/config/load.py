"""Configuration loading helpers for corpus-mixer."""

from __future__ import annotations

import json
from collections.abc import Mapping
from copy import deepcopy
from pathlib import Path
from typing import Any, cast

import yaml
from jsonschema import Draft7Validator

__all__ = ["ConfigError", "DEFAULT_ENV", "load_config"]

CONFIG_DIR = Path(__file__).resolve().parent / "profiles"
SCHEMA_PATH = Path(__file__).with_name("schema.json")
DEFAULT_ENV = "default"


class ConfigError(RuntimeError):
    """Raised when configuration loading or validation fails."""


def load_config(
    env: str = DEFAULT_ENV,
    *,
    config_dir: str | Path | None = None,
    overrides: Mapping[str, Any] | None = None,
    validate: bool = True,
) -> dict[str, Any]:
    """Read ``{env}.yaml`` from ``config_dir`` (the bundled profiles by default).

    ``overrides`` is deep-merged over the profile; the CLI uses it for its
    options. The process environment is never consulted, so the shipped profile
    alone defines the reference run. The result is checked against ``schema.json``.
    """

    base_dir = Path(config_dir) if config_dir is not None else CONFIG_DIR
    config_path = _resolve_config_path(base_dir, env)
    config = _load_yaml_config(config_path)

    if overrides:
        config = _deep_merge(config, overrides)

    if validate:
        _validate_config(config)

    return config


def _resolve_config_path(base_dir: Path, env: str) -> Path:
    for suffix in (".yaml", ".yml"):
        candidate = base_dir / f"{env}{suffix}"
        if candidate.exists():
            return candidate
    raise ConfigError(f"Configuration profile '{env}' not found in {base_dir}.")


def _load_yaml_config(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration root must be a mapping in {path}.")
    return deepcopy(data)


def _deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge two dictionaries without mutating the inputs."""
    result: dict[str, Any] = deepcopy(dict(base))
    for key, override_value in overrides.items():
        if (
            key in result
            and isinstance(result[key], Mapping)
            and isinstance(override_value, Mapping)
        ):
            result[key] = _deep_merge(result[key], override_value)
        else:
            result[key] = deepcopy(override_value)
    return result


def _load_schema() -> dict[str, Any]:
    with SCHEMA_PATH.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ConfigError("Configuration schema must be a JSON object.")
    return cast(dict[str, Any], data)


def _validate_config(config: Mapping[str, Any]) -> None:
    validator = Draft7Validator(_load_schema())
    errors = sorted(validator.iter_errors(config), key=lambda err: list(err.path))
    if not errors:
        return

    formatted = []
    for error in errors:
        path = ".".join(str(piece) for piece in error.path) or "<root>"
        formatted.append(f"- {path}: {error.message}")

    error_message = "\n".join(formatted)
    raise ConfigError(f"Configuration validation failed:\n{error_message}") from errors[0]

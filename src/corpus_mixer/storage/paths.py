"""Helpers for deriving the input and output directory layout from configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from ..exceptions import OutputWriteError

__all__ = ["DatasetLayout", "PathsConfig", "build_paths"]


def _normalize_path(value: str | Path, *, relative_to: Path | None = None) -> Path:
    """Return an absolute path, interpreting relative paths from ``relative_to``."""
    path = Path(value)
    if not path.is_absolute() and relative_to is not None:
        path = relative_to / path
    return path.expanduser().resolve()


@dataclass(frozen=True, slots=True)
class DatasetLayout:
    """File names expected inside every source dataset directory."""

    train_manifest: str = "list_train.txt"
    val_manifest: str = "list_val.txt"
    clip_dir: str = "wavs"
    metadata_file: str = "model_info.json"

    @property
    def clip_prefix(self) -> str:
        """Prefix stripped from manifest clip references, e.g. ``wavs/``."""
        return f"{self.clip_dir}/"


@dataclass(slots=True)
class PathsConfig:
    """Resolved filesystem paths used by a mixing run."""

    working_dir: Path
    datasets_dir: Path
    mixed_wavs_dir: Path
    mixed_lists_dir: Path
    layout: DatasetLayout

    def ensure_output_directories(self) -> None:
        """Create the clip pool and the merged list directory when absent."""
        for directory in (self.mixed_wavs_dir, self.mixed_lists_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise OutputWriteError(
                    f"Couldn't create {directory} directory. Reason: {exc}"
                ) from exc

    @property
    def merged_train_manifest(self) -> Path:
        return self.mixed_lists_dir / self.layout.train_manifest

    @property
    def merged_val_manifest(self) -> Path:
        return self.mixed_lists_dir / self.layout.val_manifest

    @property
    def metadata_path(self) -> Path:
        return self.mixed_lists_dir / self.layout.metadata_file


def build_paths(config: Mapping[str, object]) -> PathsConfig:
    """Construct a :class:`PathsConfig` from the parsed configuration."""
    paths_section = config.get("paths")
    if not isinstance(paths_section, Mapping):
        raise ValueError("Configuration is missing the 'paths' section.")

    working_dir = _normalize_path(paths_section.get("working_dir", "."), relative_to=Path.cwd())

    def resolve(key: str) -> Path:
        raw_value = paths_section.get(key)
        if raw_value is None:
            raise ValueError(f"Configuration 'paths.{key}' is required.")
        return _normalize_path(raw_value, relative_to=working_dir)

    layout = DatasetLayout()
    layout_section = config.get("layout")
    if isinstance(layout_section, Mapping):
        layout = DatasetLayout(
            train_manifest=str(layout_section.get("train_manifest", layout.train_manifest)),
            val_manifest=str(layout_section.get("val_manifest", layout.val_manifest)),
            clip_dir=str(layout_section.get("clip_dir", layout.clip_dir)),
            metadata_file=str(layout_section.get("metadata_file", layout.metadata_file)),
        )

    return PathsConfig(
        working_dir=working_dir,
        datasets_dir=resolve("datasets_dir"),
        mixed_wavs_dir=resolve("mixed_wavs_dir"),
        mixed_lists_dir=resolve("mixed_lists_dir"),
        layout=layout,
    )
